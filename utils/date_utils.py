"""
Date and period utilities for the return engines.

Day counts are plain calendar-day differences. Time of day and timezone are
dropped on the way in, so a flow stamped 23:59 counts on the same day as one
stamped 00:01.
"""

from datetime import date, datetime, timedelta
from typing import List, Union

import pandas as pd

DateInput = Union[date, datetime, pd.Timestamp, str]

PERIODS = ('week', 'month', 'year')


def to_calendar_date(value: DateInput) -> date:
    """Coerce a date-like value to a ``datetime.date``.

    Args:
        value: date, datetime, pandas Timestamp or ISO string

    Returns:
        The calendar date (timezone-aware datetimes keep their own local date)

    Raises:
        ValueError: If a string cannot be parsed
        TypeError: If the value is not date-like
    """
    # datetime (and pandas.Timestamp) subclass date, so check them first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            parsed = pd.Timestamp(value.strip())
        except ValueError as e:
            raise ValueError(f"Invalid date string: {value!r}") from e
        if parsed is pd.NaT:
            raise ValueError(f"Invalid date string: {value!r}")
        return parsed.date()
    raise TypeError(f"Expected a date-like value, got {type(value).__name__}")


def calendar_days_between(start: DateInput, end: DateInput) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier).

    Examples:
        >>> calendar_days_between(date(2024, 1, 1), date(2024, 1, 31))
        30
    """
    return (to_calendar_date(end) - to_calendar_date(start)).days


def _check_period(period: str) -> None:
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}', expected one of {PERIODS}")


def period_start(value: DateInput, period: str) -> date:
    """First day of the week (Monday), month or year containing ``value``."""
    _check_period(period)
    day = to_calendar_date(value)

    if period == 'week':
        return day - timedelta(days=day.weekday())
    if period == 'month':
        return day.replace(day=1)
    return day.replace(month=1, day=1)


def period_end(value: DateInput, period: str) -> date:
    """Last day of the week (Sunday), month or year containing ``value``."""
    _check_period(period)
    day = to_calendar_date(value)

    if period == 'week':
        return period_start(day, 'week') + timedelta(days=6)
    if period == 'month':
        return (pd.Timestamp(day) + pd.offsets.MonthEnd(0)).date()
    return day.replace(month=12, day=31)


def date_range(start: DateInput, end: DateInput) -> List[date]:
    """All calendar dates from ``start`` to ``end`` inclusive (empty if end < start)."""
    days = pd.date_range(to_calendar_date(start), to_calendar_date(end), freq='D')
    return [ts.date() for ts in days]


def is_business_day(value: DateInput) -> bool:
    """Monday to Friday; exchange holidays are not considered."""
    return to_calendar_date(value).weekday() < 5


def ytd_start(value: DateInput) -> date:
    """January 1st of the year containing ``value``."""
    return period_start(value, 'year')


def format_date_iso(value: DateInput) -> str:
    """Format as YYYY-MM-DD."""
    return to_calendar_date(value).isoformat()


def format_date_dmy(value: DateInput) -> str:
    """Format as DD/MM/YYYY, the broker statement layout."""
    return to_calendar_date(value).strftime('%d/%m/%Y')


def parse_date_dmy(text: str) -> date:
    """Parse a DD/MM/YYYY string."""
    return datetime.strptime(text.strip(), '%d/%m/%Y').date()
