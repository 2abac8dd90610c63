"""
Performance summary for a portfolio snapshot.

This module composes the individual engines into the set of figures the
application stores alongside each daily snapshot. It decides nothing about
when snapshots are taken; the caller passes the series and the as-of date.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from config.settings import NumericConfig, Settings, get_settings
from data.models.results import PerformanceSummary
from data.models.returns import CashFlow, DailyReturn
from financial.calculations import NumericInput
from utils.date_utils import DateInput, to_calendar_date, ytd_start
from .benchmarks import excess_return, information_ratio, tracking_error
from .daily_returns import (
    inception_to_date_return,
    month_to_date_return,
    period_return,
    week_to_date_return,
    year_to_date_return,
)
from .mwr import calculate_mwr
from .risk_metrics import current_drawdown, max_drawdown, rolling_volatility, sharpe_ratio, sortino_ratio

logger = logging.getLogger(__name__)


class PerformanceCalculator:
    """
    Runs the performance engines with parameters taken from ``Settings``.

    The calculator holds configuration only; every call is still a pure
    function of its arguments.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the calculator.

        Args:
            settings: Settings to read numeric, solver and risk parameters
                from; the global settings are used when omitted
        """
        self.settings = settings or get_settings()
        self.config: NumericConfig = self.settings.get_numeric_config()
        self.mwr_params = self.settings.get_mwr_config()
        self.volatility_window = self.settings.get_volatility_window()

    def money_weighted_return(self, cash_flows: Iterable[CashFlow],
                              begin_value: NumericInput, end_value: NumericInput,
                              period_start: DateInput, period_end: DateInput) -> Decimal:
        return calculate_mwr(cash_flows, begin_value, end_value, period_start, period_end,
                             max_iterations=self.mwr_params['max_iterations'],
                             tolerance=self.mwr_params['tolerance'],
                             config=self.config)

    def summarize(self, daily_returns: Sequence[DailyReturn], reference_date: DateInput,
                  risk_free_daily: NumericInput = Decimal('0'),
                  benchmark_returns: Optional[Sequence[DailyReturn]] = None) -> PerformanceSummary:
        """
        Build the snapshot figures from daily returns.

        Args:
            daily_returns: Portfolio daily returns (any order)
            reference_date: Snapshot date; later returns are ignored
            risk_free_daily: Daily risk-free rate for Sharpe and Sortino
            benchmark_returns: Optional benchmark daily returns; tracking
                figures use the dates both series share

        Returns:
            PerformanceSummary
        """
        cfg = self.config
        as_of_date = to_calendar_date(reference_date)
        history = sorted((r for r in daily_returns if r.date <= as_of_date), key=lambda r: r.date)
        year_start = ytd_start(as_of_date)
        ytd = [r for r in history if r.date >= year_start]
        ytd_values = [r.return_ for r in ytd]
        history_values = [r.return_ for r in history]

        logger.debug(f"Summarizing {len(history)} daily returns as of {as_of_date} ({len(ytd)} YTD)")

        ytd_return = year_to_date_return(history, as_of_date, cfg)
        benchmark_fields: Dict[str, Optional[Decimal]] = {}
        if benchmark_returns is not None:
            benchmark_fields = self._benchmark_fields(ytd, benchmark_returns, year_start, as_of_date, ytd_return)

        return PerformanceSummary(
            as_of=as_of_date,
            wtd_return=week_to_date_return(history, as_of_date, cfg),
            mtd_return=month_to_date_return(history, as_of_date, cfg),
            ytd_return=ytd_return,
            itd_return=inception_to_date_return(history, as_of_date, cfg),
            volatility_30d=rolling_volatility(history_values, self.volatility_window, cfg),
            sharpe_ratio_ytd=sharpe_ratio(ytd_values, risk_free_daily, cfg),
            sortino_ratio_ytd=sortino_ratio(ytd_values, risk_free_daily, cfg),
            max_drawdown_ytd=max_drawdown(ytd_values, cfg),
            current_drawdown=current_drawdown(history_values, cfg),
            **benchmark_fields,
        )

    def _benchmark_fields(self, ytd: List[DailyReturn], benchmark_returns: Sequence[DailyReturn],
                          year_start: date, as_of_date: date,
                          ytd_return: Decimal) -> Dict[str, Optional[Decimal]]:
        cfg = self.config
        benchmark_ytd = period_return(benchmark_returns, year_start, as_of_date, cfg)

        benchmark_by_date = {r.date: r.return_ for r in benchmark_returns}
        shared = [r for r in ytd if r.date in benchmark_by_date]
        portfolio_aligned = [r.return_ for r in shared]
        benchmark_aligned = [benchmark_by_date[r.date] for r in shared]
        if len(shared) < len(ytd):
            logger.debug(f"Benchmark missing {len(ytd) - len(shared)} portfolio dates, "
                         f"tracking over {len(shared)} shared dates")

        return {
            'benchmark_ytd_return': benchmark_ytd,
            'excess_return_ytd': excess_return(ytd_return, benchmark_ytd, cfg),
            'tracking_error_ytd': tracking_error(portfolio_aligned, benchmark_aligned, cfg),
            'information_ratio_ytd': information_ratio(portfolio_aligned, benchmark_aligned, cfg),
        }


def calculate_performance_summary(daily_returns: Sequence[DailyReturn], reference_date: DateInput,
                                  risk_free_daily: NumericInput = Decimal('0'),
                                  benchmark_returns: Optional[Sequence[DailyReturn]] = None,
                                  settings: Optional[Settings] = None) -> PerformanceSummary:
    """Convenience function wrapping ``PerformanceCalculator.summarize``."""
    calculator = PerformanceCalculator(settings)
    return calculator.summarize(daily_returns, reference_date, risk_free_daily, benchmark_returns)
