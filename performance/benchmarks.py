"""Portfolio versus benchmark comparison."""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from config.constants import TRADING_DAYS_PER_YEAR
from config.settings import NumericConfig
from financial.calculations import NumericInput, numeric_context, sum_decimals, to_decimal
from .risk_metrics import sample_variance

logger = logging.getLogger(__name__)


def excess_return(portfolio_return: NumericInput, benchmark_return: NumericInput,
                  config: Optional[NumericConfig] = None) -> Decimal:
    """Arithmetic excess: portfolio minus benchmark."""
    with numeric_context(config):
        return to_decimal(portfolio_return) - to_decimal(benchmark_return)


def relative_performance(portfolio_return: NumericInput, benchmark_return: NumericInput,
                         config: Optional[NumericConfig] = None) -> Decimal:
    """
    Geometric relative performance: (1 + Rp) / (1 + Rb) - 1.

    Returns zero when the benchmark lost exactly 100%.
    """
    with numeric_context(config):
        denominator = 1 + to_decimal(benchmark_return)
        if denominator == 0:
            return Decimal('0')
        return (1 + to_decimal(portfolio_return)) / denominator - 1


def _excess_series(portfolio_returns: Sequence[NumericInput],
                   benchmark_returns: Sequence[NumericInput]) -> List[Decimal]:
    return [to_decimal(p) - to_decimal(b) for p, b in zip(portfolio_returns, benchmark_returns)]


def _comparable(portfolio_returns: Sequence[NumericInput],
                benchmark_returns: Sequence[NumericInput]) -> bool:
    if len(portfolio_returns) != len(benchmark_returns):
        logger.debug(f"Series lengths differ ({len(portfolio_returns)} vs "
                     f"{len(benchmark_returns)}), cannot compare")
        return False
    return len(portfolio_returns) >= 2


def tracking_error(portfolio_returns: Sequence[NumericInput],
                   benchmark_returns: Sequence[NumericInput],
                   config: Optional[NumericConfig] = None) -> Decimal:
    """
    Annualised standard deviation of per-period excess returns.

    Returns:
        Decimal: Zero unless both series have the same length of at least 2
    """
    if not _comparable(portfolio_returns, benchmark_returns):
        return Decimal('0')

    with numeric_context(config):
        excess = _excess_series(portfolio_returns, benchmark_returns)
        return sample_variance(excess).sqrt() * Decimal(TRADING_DAYS_PER_YEAR).sqrt()


def information_ratio(portfolio_returns: Sequence[NumericInput],
                      benchmark_returns: Sequence[NumericInput],
                      config: Optional[NumericConfig] = None) -> Decimal:
    """
    Annualised mean excess return divided by tracking error.

    Returns:
        Decimal: Zero when the tracking error is zero
    """
    te = tracking_error(portfolio_returns, benchmark_returns, config)
    if te == 0:
        return Decimal('0')

    with numeric_context(config):
        excess = _excess_series(portfolio_returns, benchmark_returns)
        mean_excess = sum_decimals(excess) / Decimal(len(excess))
        return mean_excess * TRADING_DAYS_PER_YEAR / te
