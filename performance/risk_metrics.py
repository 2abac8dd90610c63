"""
Risk metrics derived from a chronological series of per-period returns.

Ratios and volatilities are annualised with the square root of 252 trading
days. Degenerate inputs (too few observations, zero dispersion) produce a
neutral zero instead of NaN or infinity.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from config.constants import DEFAULT_VOLATILITY_WINDOW, TRADING_DAYS_PER_YEAR
from config.settings import NumericConfig
from financial.calculations import NumericInput, numeric_context, safe_divide, sum_decimals, to_decimal

logger = logging.getLogger(__name__)


def _as_decimals(returns: Sequence[NumericInput]) -> List[Decimal]:
    return [to_decimal(r) for r in returns]


def _annualization_factor() -> Decimal:
    return Decimal(TRADING_DAYS_PER_YEAR).sqrt()


def _mean(values: List[Decimal]) -> Decimal:
    return safe_divide(sum_decimals(values), Decimal(len(values)))


def sample_variance(values: Sequence[Decimal]) -> Decimal:
    """Variance with the n-1 denominator; zero for fewer than two values."""
    if len(values) < 2:
        return Decimal('0')
    mean = _mean(list(values))
    return sum_decimals((v - mean) ** 2 for v in values) / Decimal(len(values) - 1)


def sharpe_ratio(returns: Sequence[NumericInput],
                 risk_free_daily: NumericInput = Decimal('0'),
                 config: Optional[NumericConfig] = None) -> Decimal:
    """
    Annualised Sharpe ratio: mean excess return / sample std dev * sqrt(252).

    Args:
        returns: Daily portfolio returns, oldest first
        risk_free_daily: Daily risk-free rate subtracted from each return

    Returns:
        Decimal: Zero with fewer than two observations or zero dispersion
    """
    if len(returns) < 2:
        return Decimal('0')

    with numeric_context(config):
        rf = to_decimal(risk_free_daily)
        excess = [r - rf for r in _as_decimals(returns)]
        mean = _mean(excess)
        std_dev = sample_variance(excess).sqrt()

        if std_dev == 0:
            logger.debug("Sharpe ratio undefined for a flat return series, returning 0")
            return Decimal('0')

        return mean / std_dev * _annualization_factor()


def sortino_ratio(returns: Sequence[NumericInput],
                  risk_free_daily: NumericInput = Decimal('0'),
                  config: Optional[NumericConfig] = None) -> Decimal:
    """
    Annualised Sortino ratio using downside deviation.

    The downside variance is the sum of squared negative excess returns
    divided by the total number of observations, not by the number of
    negative ones.

    Returns:
        Decimal: Zero with fewer than two observations or no negative
        excess returns
    """
    if len(returns) < 2:
        return Decimal('0')

    with numeric_context(config):
        rf = to_decimal(risk_free_daily)
        excess = [r - rf for r in _as_decimals(returns)]
        mean = _mean(excess)

        downside_squares = [r ** 2 for r in excess if r < 0]
        if not downside_squares:
            return Decimal('0')

        downside_variance = safe_divide(sum_decimals(downside_squares), Decimal(len(excess)))
        downside_dev = downside_variance.sqrt()

        if downside_dev == 0:
            return Decimal('0')

        return mean / downside_dev * _annualization_factor()


def _drawdown_path(returns: Sequence[NumericInput]):
    """Yield the drawdown from the running peak after each period."""
    peak = Decimal('1')
    cumulative = Decimal('1')
    for r in _as_decimals(returns):
        cumulative *= 1 + r
        if cumulative > peak:
            peak = cumulative
        yield safe_divide(cumulative - peak, peak)


def max_drawdown(returns: Sequence[NumericInput],
                 config: Optional[NumericConfig] = None) -> Decimal:
    """
    Worst peak-to-trough decline of the cumulative wealth index.

    Returns:
        Decimal: A non-positive fraction (e.g. -0.2 for a 20% drawdown);
        zero for an empty or never-declining series
    """
    with numeric_context(config):
        worst = Decimal('0')
        for drawdown in _drawdown_path(returns):
            if drawdown < worst:
                worst = drawdown
        return worst


def current_drawdown(returns: Sequence[NumericInput],
                     config: Optional[NumericConfig] = None) -> Decimal:
    """Drawdown from the running peak at the end of the series."""
    with numeric_context(config):
        latest = Decimal('0')
        for drawdown in _drawdown_path(returns):
            latest = drawdown
        return latest


def rolling_volatility(returns: Sequence[NumericInput],
                       window: int = DEFAULT_VOLATILITY_WINDOW,
                       config: Optional[NumericConfig] = None) -> Decimal:
    """
    Annualised volatility of the most recent ``window`` returns.

    Returns:
        Decimal: Zero when fewer than ``window`` observations exist
    """
    if len(returns) < window or window < 1:
        return Decimal('0')

    with numeric_context(config):
        recent = _as_decimals(returns[-window:])
        return sample_variance(recent).sqrt() * _annualization_factor()


def annualized_volatility(returns: Sequence[NumericInput],
                          config: Optional[NumericConfig] = None) -> Decimal:
    """Annualised sample volatility of the whole series."""
    with numeric_context(config):
        return sample_variance(_as_decimals(returns)).sqrt() * _annualization_factor()
