"""
Currency handling module for EUR-based portfolio reporting.

FX rate convention used throughout: a rate is quoted as
``1 EUR = rate units of foreign currency`` (the ECB reference convention).
A EUR amount is therefore ``foreign / rate`` and a rising rate means the
EUR has strengthened. Rates come from the caller; nothing here fetches them.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Mapping, Optional

from config.constants import BASE_CURRENCY, SUPPORTED_CURRENCIES
from config.settings import NumericConfig
from .calculations import (
    NumericInput,
    numeric_context,
    round_amount,
    round_fx_rate,
    safe_divide,
    to_decimal,
)

logger = logging.getLogger(__name__)


class MissingFxRateError(KeyError):
    """Raised when a rate table has no quote for a requested currency."""
    pass


def is_base_currency(currency: str) -> bool:
    return currency.upper() == BASE_CURRENCY


def convert_to_eur(amount: NumericInput, currency: str, fx_rate: NumericInput,
                   config: Optional[NumericConfig] = None) -> Decimal:
    """
    Convert a foreign-currency amount to EUR.

    Args:
        amount: Amount in ``currency``
        currency: ISO currency code of the amount
        fx_rate: Units of ``currency`` per 1 EUR

    Returns:
        Decimal: EUR amount rounded to 2 places; EUR input is returned as is
        and a zero rate yields zero

    Examples:
        >>> convert_to_eur(Decimal('110'), 'USD', Decimal('1.10'))
        Decimal('100.00')
    """
    amount_dec = to_decimal(amount)
    if is_base_currency(currency):
        return amount_dec
    with numeric_context(config):
        return round_amount(safe_divide(amount_dec, to_decimal(fx_rate)), config)


def convert_from_eur(amount_eur: NumericInput, currency: str, fx_rate: NumericInput,
                     config: Optional[NumericConfig] = None) -> Decimal:
    """
    Convert a EUR amount to foreign currency (``amount_eur * rate``).

    Examples:
        >>> convert_from_eur(Decimal('100'), 'USD', Decimal('1.10'))
        Decimal('110.00')
    """
    amount_dec = to_decimal(amount_eur)
    if is_base_currency(currency):
        return amount_dec
    with numeric_context(config):
        return round_amount(amount_dec * to_decimal(fx_rate), config)


def invert_fx_rate(rate: NumericInput, config: Optional[NumericConfig] = None) -> Decimal:
    """
    Invert a rate (foreign per EUR -> EUR per foreign), 8 decimal places.

    Examples:
        >>> invert_fx_rate(Decimal('1.25'))
        Decimal('0.80000000')
    """
    with numeric_context(config):
        return round_fx_rate(safe_divide(Decimal('1'), to_decimal(rate)), config)


@dataclass(frozen=True)
class FxRateTable:
    """
    A snapshot of EUR reference rates supplied by the price-feed layer.

    The table is immutable; build a new one for each valuation date. Two
    tables are equal (and hash alike) when they quote the same upper-case
    rates for the same date.
    """
    rates: Mapping[str, Decimal] = field(compare=False)
    as_of: Optional[date] = None
    _normalized: Dict[str, Decimal] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        normalized = {}
        for currency, rate in self.rates.items():
            code = currency.upper()
            if code not in SUPPORTED_CURRENCIES:
                logger.debug(f"Rate table includes unlisted currency {code}")
            normalized[code] = to_decimal(rate)
        normalized[BASE_CURRENCY] = Decimal('1')
        object.__setattr__(self, '_normalized', normalized)

    def __hash__(self):
        return hash((self.as_of, tuple(sorted(self._normalized.items()))))

    @property
    def currencies(self):
        return sorted(self._normalized)

    def rate_for(self, currency: str) -> Decimal:
        """Units of ``currency`` per 1 EUR."""
        code = currency.upper()
        try:
            return self._normalized[code]
        except KeyError:
            raise MissingFxRateError(f"No FX rate for {code} (as of {self.as_of})") from None

    def to_eur(self, amount: NumericInput, currency: str,
               config: Optional[NumericConfig] = None) -> Decimal:
        return convert_to_eur(amount, currency, self.rate_for(currency), config)

    def from_eur(self, amount_eur: NumericInput, currency: str,
                 config: Optional[NumericConfig] = None) -> Decimal:
        return convert_from_eur(amount_eur, currency, self.rate_for(currency), config)

    def convert(self, amount: NumericInput, from_currency: str, to_currency: str,
                config: Optional[NumericConfig] = None) -> Decimal:
        """
        Convert between two currencies by crossing through EUR.

        The cross rate is applied in one step so that only the final amount
        is rounded.
        """
        amount_dec = to_decimal(amount)
        if from_currency.upper() == to_currency.upper():
            return amount_dec
        with numeric_context(config):
            cross = safe_divide(self.rate_for(to_currency), self.rate_for(from_currency))
            return round_amount(amount_dec * cross, config)
