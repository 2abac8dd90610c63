"""
Performance and risk analytics.

Every engine is a pure function of its arguments: series and values come in
as Decimals (or literals convertible to them), results go out as Decimals or
frozen records from ``data.models``. Precision and rounding are passed in as
an optional ``NumericConfig``.
"""

from .modified_dietz import calculate_modified_dietz, compound_returns

from .daily_returns import (
    period_return,
    week_to_date_return,
    month_to_date_return,
    year_to_date_return,
    inception_to_date_return,
    monthly_returns,
    daily_returns_from_values,
    daily_returns_from_series,
    daily_returns_to_series,
)

from .mwr import calculate_mwr

from .fx_decomposition import decompose_fx_return

from .risk_metrics import (
    sample_variance,
    sharpe_ratio,
    sortino_ratio,
    max_drawdown,
    current_drawdown,
    rolling_volatility,
    annualized_volatility,
)

from .benchmarks import (
    excess_return,
    relative_performance,
    tracking_error,
    information_ratio,
)

from .attribution import (
    calculate_brinson_attribution,
    benchmark_total_return,
    summarize_attribution,
    calculate_contribution_to_return,
)

from .summary import (
    PerformanceSummary,
    PerformanceCalculator,
    calculate_performance_summary,
)

__all__ = [
    # Time-weighted returns
    'calculate_modified_dietz',
    'compound_returns',
    'period_return',
    'week_to_date_return',
    'month_to_date_return',
    'year_to_date_return',
    'inception_to_date_return',
    'monthly_returns',
    'daily_returns_from_values',
    'daily_returns_from_series',
    'daily_returns_to_series',

    # Money-weighted return
    'calculate_mwr',

    # FX
    'decompose_fx_return',

    # Risk
    'sample_variance',
    'sharpe_ratio',
    'sortino_ratio',
    'max_drawdown',
    'current_drawdown',
    'rolling_volatility',
    'annualized_volatility',

    # Benchmarks
    'excess_return',
    'relative_performance',
    'tracking_error',
    'information_ratio',

    # Attribution
    'calculate_brinson_attribution',
    'benchmark_total_return',
    'summarize_attribution',
    'calculate_contribution_to_return',

    # Summary
    'PerformanceSummary',
    'PerformanceCalculator',
    'calculate_performance_summary',
]
