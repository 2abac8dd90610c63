"""
Financial primitives for the analytics engine.

This package provides exact Decimal construction and rounding and EUR-based
currency conversion. The pre-trade cash check lives in
``financial.cash_engine`` and is imported from there directly.
"""

from .calculations import (
    InvalidDecimalError,
    to_decimal,
    d,
    money_to_decimal,
    numeric_context,
    round_amount,
    round_price,
    round_pct,
    round_fx_rate,
    safe_divide,
    sum_decimals,
    weighted_average,
    format_percentage,
)

from .currency_handler import (
    FxRateTable,
    MissingFxRateError,
    convert_to_eur,
    convert_from_eur,
    invert_fx_rate,
    is_base_currency,
)

__all__ = [
    # Calculations
    'InvalidDecimalError',
    'to_decimal',
    'd',
    'money_to_decimal',
    'numeric_context',
    'round_amount',
    'round_price',
    'round_pct',
    'round_fx_rate',
    'safe_divide',
    'sum_decimals',
    'weighted_average',
    'format_percentage',

    # Currency handling
    'FxRateTable',
    'MissingFxRateError',
    'convert_to_eur',
    'convert_from_eur',
    'invert_fx_rate',
    'is_base_currency',
]
