"""Enumerations shared by the data models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a trade as it affects cash."""
    BUY = "BUY"
    SELL = "SELL"
    SHORT = "SHORT"
    COVER = "COVER"

    @property
    def consumes_cash(self) -> bool:
        """BUY and COVER pay out cash; SELL and SHORT bring it in."""
        return self in (TradeSide.BUY, TradeSide.COVER)


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    CHF = "CHF"
    AUD = "AUD"
    GBP = "GBP"
    JPY = "JPY"
    SEK = "SEK"
    DKK = "DKK"
    NOK = "NOK"


class FlowType(str, Enum):
    """Label the application attaches to an external cash flow."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    FEE = "fee"
    FX_CONVERSION = "fx_conversion"
