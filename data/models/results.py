"""Result records produced by the analytics engines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from .base import to_serializable_dict

T = TypeVar('T')
E = TypeVar('E')


class ResultError(Exception):
    """Raised when unwrapping the wrong variant of a Result."""
    pass


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Rejected outcome carrying a human-readable reason."""
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ResultError(f"Called unwrap on an error result: {self.error}")


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def err(error: E) -> Err[E]:
    return Err(error)


@dataclass(frozen=True)
class FxDecomposition:
    """A foreign position's EUR return split into its components.

    ``total_return_eur == (1 + local_return) * (1 + fx_impact) - 1`` and
    ``cross_term == total_return_eur - local_return - fx_impact``.
    """
    local_return: Decimal
    fx_impact: Decimal
    cross_term: Decimal
    total_return_eur: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)


@dataclass(frozen=True)
class BrinsonAttribution:
    segment: str
    portfolio_weight: Decimal
    benchmark_weight: Decimal
    portfolio_return: Decimal
    benchmark_return: Decimal
    allocation_effect: Decimal
    selection_effect: Decimal
    interaction_effect: Decimal
    total_effect: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)


@dataclass(frozen=True)
class AttributionSummary:
    """Effects summed across all segments."""
    allocation_effect: Decimal
    selection_effect: Decimal
    interaction_effect: Decimal
    total_effect: Decimal
    segment_count: int

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)


@dataclass(frozen=True)
class ContributionToReturn:
    asset_id: str
    ticker: str
    beginning_weight: Decimal
    position_return: Decimal
    local_contribution: Decimal
    fx_contribution: Decimal
    total_contribution: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)


@dataclass(frozen=True)
class CashImpactPreview:
    currency: str
    current_balance: Decimal
    trade_amount: Decimal
    projected_balance: Decimal
    sufficient: bool

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)


@dataclass(frozen=True)
class PerformanceSummary:
    """Return and risk figures as of one date. Benchmark fields are None without a benchmark."""
    as_of: date
    wtd_return: Decimal
    mtd_return: Decimal
    ytd_return: Decimal
    itd_return: Decimal
    volatility_30d: Decimal
    sharpe_ratio_ytd: Decimal
    sortino_ratio_ytd: Decimal
    max_drawdown_ytd: Decimal
    current_drawdown: Decimal
    benchmark_ytd_return: Optional[Decimal] = None
    excess_return_ytd: Optional[Decimal] = None
    tracking_error_ytd: Optional[Decimal] = None
    information_ratio_ytd: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        return to_serializable_dict(self)
