"""Trade data models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any

from .base import coerce_decimals, to_serializable_dict
from .enums import Currency, TradeSide


@dataclass(frozen=True)
class TradeForCash:
    """The parts of a proposed trade that move cash.

    Used only to preview or validate the cash impact before the trade is
    submitted; the engine never stores it. The currency is stored as its
    ISO code and must be one of ``Currency``.

    Raises:
        ValueError: On an unknown side or currency, a non-positive quantity
            or price, or negative costs
    """
    side: TradeSide
    quantity: Decimal
    price: Decimal
    currency: str
    commission: Decimal = Decimal('0')
    tax: Decimal = Decimal('0')

    def __post_init__(self):
        object.__setattr__(self, 'side', TradeSide(self.side))
        currency = self.currency.strip().upper() if isinstance(self.currency, str) else self.currency
        object.__setattr__(self, 'currency', Currency(currency).value)
        coerce_decimals(self, ('quantity', 'price', 'commission', 'tax'))

        if self.quantity <= 0:
            raise ValueError(f"Trade quantity must be positive, got {self.quantity}")
        if self.price <= 0:
            raise ValueError(f"Trade price must be positive, got {self.price}")
        if self.commission < 0 or self.tax < 0:
            raise ValueError(f"Trade costs cannot be negative (commission={self.commission}, tax={self.tax})")

    @property
    def gross_amount(self) -> Decimal:
        return self.quantity * self.price

    @property
    def costs(self) -> Decimal:
        return self.commission + self.tax

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return to_serializable_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TradeForCash:
        """Create from dictionary (form submission or API payload)."""
        return cls(
            side=data['side'],
            quantity=data['quantity'],
            price=data['price'],
            currency=data['currency'],
            commission=data.get('commission', '0'),
            tax=data.get('tax', '0'),
        )
