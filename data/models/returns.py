"""Return and cash-flow value types consumed by the performance engines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from utils.date_utils import calendar_days_between, to_calendar_date
from .base import coerce_decimals, to_serializable_dict
from .enums import FlowType


@dataclass(frozen=True)
class CashFlow:
    """An external flow into or out of the measured portfolio.

    Sign convention: positive = deposit/inflow, negative = withdrawal/outflow.
    """
    date: date
    amount: Decimal
    flow_type: Optional[FlowType] = None

    def __post_init__(self):
        object.__setattr__(self, 'date', to_calendar_date(self.date))
        coerce_decimals(self, ('amount',))
        if self.flow_type is not None:
            object.__setattr__(self, 'flow_type', FlowType(self.flow_type))

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)


@dataclass(frozen=True)
class PeriodWindow:
    """A measurement period; ``days`` counts calendar days end minus start."""
    start: date
    end: date

    def __post_init__(self):
        object.__setattr__(self, 'start', to_calendar_date(self.start))
        object.__setattr__(self, 'end', to_calendar_date(self.end))

    @property
    def days(self) -> int:
        return calendar_days_between(self.start, self.end)

    def contains(self, value) -> bool:
        """True if ``value`` falls within the window, both ends inclusive."""
        return self.start <= to_calendar_date(value) <= self.end


@dataclass(frozen=True)
class DailyReturn:
    """One dated entry of a return series, as a decimal fraction."""
    date: date
    return_: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'date', to_calendar_date(self.date))
        coerce_decimals(self, ('return_',))

    def to_dict(self) -> Dict[str, Any]:
        return {'date': self.date.isoformat(), 'return': str(self.return_)}


@dataclass(frozen=True)
class MonthlyReturn:
    month: str  # YYYY-MM
    return_: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {'month': self.month, 'return': str(self.return_)}


@dataclass(frozen=True)
class SegmentData:
    """Weight and return of one allocation bucket (sector, asset class, ...)."""
    segment: str
    weight: Decimal
    return_: Decimal

    def __post_init__(self):
        coerce_decimals(self, ('weight', 'return_'))


@dataclass(frozen=True)
class PositionReturn:
    """Per-position inputs for contribution to return."""
    asset_id: str
    ticker: str
    beginning_weight: Decimal
    local_return: Decimal
    fx_return: Decimal
    total_return: Decimal

    def __post_init__(self):
        coerce_decimals(self, ('beginning_weight', 'local_return', 'fx_return', 'total_return'))
