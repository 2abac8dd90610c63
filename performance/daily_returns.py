"""
Period returns built from a daily return series.

Each helper filters the series to a window and compounds what is left, so a
month-to-date figure is exactly the geometric link of that month's days.
Adapters at the bottom convert to and from the date-indexed pandas Series
the surrounding application keeps its NAV history in.
"""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from config.settings import NumericConfig
from data.models.returns import DailyReturn, MonthlyReturn
from financial.calculations import NumericInput, numeric_context, safe_divide, to_decimal
from utils.date_utils import DateInput, period_start, to_calendar_date
from .modified_dietz import compound_returns

logger = logging.getLogger(__name__)


def _window_returns(daily_returns: Iterable[DailyReturn], start, end) -> List[Decimal]:
    return [r.return_ for r in daily_returns if start <= r.date <= end]


def period_return(daily_returns: Iterable[DailyReturn], start: DateInput, end: DateInput,
                  config: Optional[NumericConfig] = None) -> Decimal:
    """Compound the returns dated between ``start`` and ``end`` inclusive."""
    start_date = to_calendar_date(start)
    end_date = to_calendar_date(end)
    return compound_returns(_window_returns(daily_returns, start_date, end_date), config)


def week_to_date_return(daily_returns: Iterable[DailyReturn], reference_date: DateInput,
                        config: Optional[NumericConfig] = None) -> Decimal:
    """Compounded return from the Monday of the reference week up to the reference date."""
    return period_return(daily_returns, period_start(reference_date, 'week'), reference_date, config)


def month_to_date_return(daily_returns: Iterable[DailyReturn], reference_date: DateInput,
                         config: Optional[NumericConfig] = None) -> Decimal:
    return period_return(daily_returns, period_start(reference_date, 'month'), reference_date, config)


def year_to_date_return(daily_returns: Iterable[DailyReturn], reference_date: DateInput,
                        config: Optional[NumericConfig] = None) -> Decimal:
    return period_return(daily_returns, period_start(reference_date, 'year'), reference_date, config)


def inception_to_date_return(daily_returns: Iterable[DailyReturn], reference_date: DateInput,
                             config: Optional[NumericConfig] = None) -> Decimal:
    """Compounded return of everything up to and including the reference date."""
    end_date = to_calendar_date(reference_date)
    return compound_returns([r.return_ for r in daily_returns if r.date <= end_date], config)


def monthly_returns(daily_returns: Iterable[DailyReturn],
                    config: Optional[NumericConfig] = None) -> List[MonthlyReturn]:
    """
    Aggregate daily returns into calendar-month returns.

    Returns:
        List of MonthlyReturn sorted by month ('YYYY-MM')
    """
    by_month: Dict[str, List[Decimal]] = OrderedDict()
    for r in daily_returns:
        key = f"{r.date.year:04d}-{r.date.month:02d}"
        by_month.setdefault(key, []).append(r.return_)

    return [
        MonthlyReturn(month=month, return_=compound_returns(returns, config))
        for month, returns in sorted(by_month.items())
    ]


def daily_returns_from_values(values: Sequence[NumericInput],
                              dates: Sequence[DateInput],
                              config: Optional[NumericConfig] = None) -> List[DailyReturn]:
    """
    Simple day-over-day returns from a value series.

    The first date has no prior value and produces no return; a zero prior
    value produces a zero return.

    Raises:
        ValueError: If ``values`` and ``dates`` differ in length
    """
    if len(values) != len(dates):
        raise ValueError(f"Got {len(values)} values but {len(dates)} dates")

    result = []
    with numeric_context(config):
        previous = None
        for value, day in zip(values, dates):
            current = to_decimal(value)
            if previous is not None:
                result.append(DailyReturn(day, safe_divide(current - previous, previous)))
            previous = current
    return result


def daily_returns_from_series(series: pd.Series) -> List[DailyReturn]:
    """
    Build a chronologically sorted return list from a date-indexed Series.

    Values are converted through ``str`` so float columns do not carry binary
    error into the engines. Missing values are skipped.
    """
    cleaned = series.dropna().sort_index()
    dropped = len(series) - len(cleaned)
    if dropped:
        logger.debug(f"Skipped {dropped} missing values in return series")

    return [DailyReturn(to_calendar_date(index), to_decimal(str(value)))
            for index, value in cleaned.items()]


def daily_returns_to_series(daily_returns: Iterable[DailyReturn], name: str = 'return') -> pd.Series:
    """Date-indexed object Series holding the Decimal returns unchanged."""
    items = list(daily_returns)
    index = pd.DatetimeIndex([pd.Timestamp(r.date) for r in items], name='date')
    return pd.Series([r.return_ for r in items], index=index, name=name, dtype=object)
