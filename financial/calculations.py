"""
Decimal arithmetic utilities shared by every analytics engine.

This module is the construction boundary for numeric input: everything that
enters the engines passes through ``to_decimal`` so that binary floating
point never takes part in compounding or aggregation. It also owns the
rounding policies (2dp money, 6dp prices and percentages, 8dp FX rates) and
the safe-division rule used for degenerate denominators.
"""

import decimal
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from config.constants import (
    AMOUNT_PLACES,
    ERROR_INVALID_DECIMAL,
    FX_RATE_PLACES,
    PCT_PLACES,
    PRICE_PLACES,
)
from config.settings import DEFAULT_NUMERIC_CONFIG, NumericConfig

# Type alias for numeric inputs that will be converted to Decimal
NumericInput = Union[int, str, float, Decimal]

ZERO = Decimal('0')
ONE = Decimal('1')


class InvalidDecimalError(ValueError):
    """Raised when a value cannot be turned into a finite Decimal."""
    pass


def resolve_config(config: Optional[NumericConfig]) -> NumericConfig:
    return config if config is not None else DEFAULT_NUMERIC_CONFIG


def numeric_context(config: Optional[NumericConfig] = None):
    """Context manager applying ``config`` to the current thread only.

    Examples:
        >>> with numeric_context():
        ...     Decimal(1) / Decimal(3)
        Decimal('0.3333333333333333333333333333')
    """
    return decimal.localcontext(resolve_config(config).context())


def to_decimal(value: NumericInput) -> Decimal:
    """
    Convert a numeric literal to an exact Decimal.

    Floats are converted through their shortest string form so that
    ``0.1`` becomes ``Decimal('0.1')`` rather than its binary expansion.

    Args:
        value: int, str, float or Decimal

    Returns:
        Decimal: The value, unrounded

    Raises:
        InvalidDecimalError: If the value is None, a bool, unparseable,
            NaN or infinite

    Examples:
        >>> to_decimal("15.555")
        Decimal('15.555')
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if value is None or isinstance(value, bool):
        raise InvalidDecimalError(f"{ERROR_INVALID_DECIMAL}: {value!r}")

    if isinstance(value, Decimal):
        result = value
    else:
        text = value.strip() if isinstance(value, str) else str(value)
        try:
            result = Decimal(text)
        except (decimal.InvalidOperation, ValueError, TypeError) as e:
            raise InvalidDecimalError(f"{ERROR_INVALID_DECIMAL}: {value!r}") from e

    if not result.is_finite():
        raise InvalidDecimalError(f"{ERROR_INVALID_DECIMAL}: {value!r} is not finite")
    return result


def d(value: NumericInput) -> Decimal:
    """Short alias for ``to_decimal``."""
    return to_decimal(value)


def money_to_decimal(value: NumericInput, config: Optional[NumericConfig] = None) -> Decimal:
    """
    Convert monetary values to Decimal rounded to 2 decimal places.

    Examples:
        >>> money_to_decimal(10.99)
        Decimal('10.99')
        >>> money_to_decimal("15.555")
        Decimal('15.56')
    """
    return round_amount(to_decimal(value), config)


def _quantize(value: Decimal, places: Decimal, config: Optional[NumericConfig]) -> Decimal:
    """Quantize with enough precision to hold every integer digit plus ``places``."""
    cfg = resolve_config(config)
    context = cfg.context()
    context.prec = max(context.prec, value.adjusted() - places.as_tuple().exponent + 1)
    with decimal.localcontext(context):
        return value.quantize(places, rounding=cfg.rounding)


def round_amount(value: Decimal, config: Optional[NumericConfig] = None) -> Decimal:
    """Round to 2 decimal places, for monetary amounts."""
    return _quantize(value, AMOUNT_PLACES, config)


def round_price(value: Decimal, config: Optional[NumericConfig] = None) -> Decimal:
    """Round to 6 decimal places, for prices and rates."""
    return _quantize(value, PRICE_PLACES, config)


def round_pct(value: Decimal, config: Optional[NumericConfig] = None) -> Decimal:
    """Round to 6 decimal places, for percentages stored as fractions."""
    return _quantize(value, PCT_PLACES, config)


def round_fx_rate(value: Decimal, config: Optional[NumericConfig] = None) -> Decimal:
    """Round to 8 decimal places, for FX rates."""
    return _quantize(value, FX_RATE_PLACES, config)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """
    Divide, returning zero when the denominator is zero.

    A zero denominator means there is no base to measure against; callers
    treat that as a neutral result rather than an error.

    Examples:
        >>> safe_divide(Decimal('10'), Decimal('4'))
        Decimal('2.5')
        >>> safe_divide(Decimal('10'), Decimal('0'))
        Decimal('0')
    """
    if denominator == 0:
        return Decimal('0')
    return numerator / denominator


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals, starting from an exact zero."""
    total = Decimal('0')
    for value in values:
        total += value
    return total


def weighted_average(values: Sequence[Decimal], weights: Sequence[Decimal]) -> Decimal:
    """
    Weighted average of values by weights.

    Returns zero when the sequences differ in length, are empty, or the
    weights sum to zero.

    Examples:
        >>> weighted_average([Decimal('10'), Decimal('12')], [Decimal('100'), Decimal('50')])
        Decimal('10.66666666666666666666666667')
    """
    if len(values) != len(weights) or len(values) == 0:
        return Decimal('0')

    total_weight = sum_decimals(weights)
    if total_weight == 0:
        return Decimal('0')

    weighted_sum = sum_decimals(v * w for v, w in zip(values, weights))
    return weighted_sum / total_weight


def format_percentage(value: NumericInput, places: int = 2,
                      config: Optional[NumericConfig] = None) -> str:
    """
    Format a stored fraction as a signed whole-number percentage for display.

    Examples:
        >>> format_percentage(Decimal('0.047619'))
        '+4.76%'
        >>> format_percentage(Decimal('-0.2'))
        '-20.00%'
    """
    cfg = resolve_config(config)
    exponent = Decimal(1).scaleb(-places)
    with numeric_context(cfg):
        percentage = (to_decimal(value) * 100).quantize(exponent, rounding=cfg.rounding)
    if percentage >= 0:
        return f"+{percentage}%"
    return f"{percentage}%"
