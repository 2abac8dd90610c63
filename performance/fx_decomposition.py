"""
Split a foreign position's EUR return into local, FX and cross-term parts.

    R_local = (P_now - P_entry) / P_entry
    R_fx    = FX_entry / FX_now - 1
    R_total = (1 + R_local) * (1 + R_fx) - 1
    R_cross = R_total - R_local - R_fx

Rates follow the ``1 EUR = rate foreign`` convention, so a falling rate
(EUR weakening) lifts the EUR value of the holding.
"""

from typing import Optional

from config.settings import NumericConfig
from data.models.results import FxDecomposition
from financial.calculations import NumericInput, numeric_context, safe_divide, to_decimal


def decompose_fx_return(entry_price_local: NumericInput,
                        current_price_local: NumericInput,
                        entry_fx_rate: NumericInput,
                        current_fx_rate: NumericInput,
                        config: Optional[NumericConfig] = None) -> FxDecomposition:
    """
    Decompose a position's EUR return.

    Args:
        entry_price_local: Purchase price in the local currency
        current_price_local: Current price in the local currency
        entry_fx_rate: Foreign units per EUR at entry
        current_fx_rate: Foreign units per EUR now

    Returns:
        FxDecomposition whose cross term is derived from the identity, so
        the three parts add up to the total
    """
    entry_price = to_decimal(entry_price_local)
    current_price = to_decimal(current_price_local)

    with numeric_context(config):
        local_return = safe_divide(current_price - entry_price, entry_price)
        fx_impact = safe_divide(to_decimal(entry_fx_rate), to_decimal(current_fx_rate)) - 1
        total_return_eur = (1 + local_return) * (1 + fx_impact) - 1
        cross_term = total_return_eur - local_return - fx_impact

    return FxDecomposition(
        local_return=local_return,
        fx_impact=fx_impact,
        cross_term=cross_term,
        total_return_eur=total_return_eur,
    )
