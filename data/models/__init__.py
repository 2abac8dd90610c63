"""Data models for the analytics engine.

Immutable value types passed by value into the pure calculation functions.
"""

from .enums import TradeSide, Currency, FlowType
from .returns import (
    CashFlow,
    PeriodWindow,
    DailyReturn,
    MonthlyReturn,
    SegmentData,
    PositionReturn,
)
from .trade import TradeForCash
from .results import (
    Result,
    Ok,
    Err,
    ResultError,
    ok,
    err,
    FxDecomposition,
    BrinsonAttribution,
    AttributionSummary,
    ContributionToReturn,
    CashImpactPreview,
    PerformanceSummary,
)

__all__ = [
    'TradeSide', 'Currency', 'FlowType',
    'CashFlow', 'PeriodWindow', 'DailyReturn', 'MonthlyReturn',
    'SegmentData', 'PositionReturn', 'TradeForCash',
    'Result', 'Ok', 'Err', 'ResultError', 'ok', 'err',
    'FxDecomposition', 'BrinsonAttribution', 'AttributionSummary',
    'ContributionToReturn', 'CashImpactPreview', 'PerformanceSummary',
]
