"""
Modified Dietz time-weighted return.

    R = (EMV - BMV - CF) / (BMV + sum(CF_i * W_i))
    W_i = (CD - D_i) / CD

where CD is the number of calendar days in the period and D_i the number of
days from the period start to flow i. A flow on the first day is weighted 1,
a flow on the last day 0.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from config.settings import NumericConfig
from data.models.returns import CashFlow
from financial.calculations import NumericInput, numeric_context, safe_divide, to_decimal
from utils.date_utils import DateInput, calendar_days_between

logger = logging.getLogger(__name__)


def calculate_modified_dietz(beginning_value: NumericInput,
                             ending_value: NumericInput,
                             cash_flows: Iterable[CashFlow],
                             period_start: DateInput,
                             period_end: DateInput,
                             config: Optional[NumericConfig] = None) -> Decimal:
    """
    Modified Dietz return for one period with interior cash flows.

    Args:
        beginning_value: Portfolio value at the period start
        ending_value: Portfolio value at the period end
        cash_flows: External flows, positive = inflow
        period_start: First day of the period
        period_end: Last day of the period

    Returns:
        Decimal: Period return as a fraction. Zero for a zero-length (or
        inverted) period and when the weighted capital base is zero.

    Examples:
        >>> calculate_modified_dietz(100000, 115000,
        ...     [CashFlow(date(2024, 1, 16), 10000)],
        ...     date(2024, 1, 1), date(2024, 1, 31))  # doctest: +ELLIPSIS
        Decimal('0.047619047619...')
    """
    total_days = calendar_days_between(period_start, period_end)
    if total_days <= 0:
        logger.debug(f"Zero-length period {period_start} -> {period_end}, returning 0")
        return Decimal('0')

    begin = to_decimal(beginning_value)
    end = to_decimal(ending_value)

    with numeric_context(config):
        cd = Decimal(total_days)
        total_cash_flow = Decimal('0')
        weighted_cash_flows = Decimal('0')

        for flow in cash_flows:
            days_since_start = Decimal(calendar_days_between(period_start, flow.date))
            weight = (cd - days_since_start) / cd
            total_cash_flow += flow.amount
            weighted_cash_flows += flow.amount * weight

        numerator = end - begin - total_cash_flow
        denominator = begin + weighted_cash_flows

        if denominator == 0:
            logger.debug("Modified Dietz denominator is zero, returning 0")
        return safe_divide(numerator, denominator)


def compound_returns(returns: Iterable[NumericInput],
                     config: Optional[NumericConfig] = None) -> Decimal:
    """
    Geometrically link period returns: prod(1 + r_i) - 1.

    Examples:
        >>> compound_returns([Decimal('0.05'), Decimal('0.03')])
        Decimal('0.0815')
        >>> compound_returns([])
        Decimal('0')
    """
    with numeric_context(config):
        product = Decimal('1')
        count = 0
        for r in returns:
            product *= Decimal('1') + to_decimal(r)
            count += 1

        if count == 0:
            return Decimal('0')
        return product - 1
