"""
Unit tests for period returns built from daily return series.
"""

import unittest
from datetime import date
from decimal import Decimal
import sys
from pathlib import Path

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent))

from data.models import DailyReturn
from performance.daily_returns import (
    daily_returns_from_series,
    daily_returns_from_values,
    daily_returns_to_series,
    inception_to_date_return,
    month_to_date_return,
    monthly_returns,
    period_return,
    week_to_date_return,
    year_to_date_return,
)

REFERENCE = date(2024, 1, 17)  # Wednesday


class TestPeriodReturns(unittest.TestCase):
    """Test to-date returns around a reference date."""

    def setUp(self):
        """Set up a series spanning the year boundary plus one future day."""
        self.returns = [
            DailyReturn(date(2023, 12, 29), Decimal('0.10')),
            DailyReturn(date(2024, 1, 12), Decimal('0.05')),
            DailyReturn(date(2024, 1, 15), Decimal('0.01')),
            DailyReturn(date(2024, 1, 16), Decimal('0.02')),
            DailyReturn(date(2024, 1, 17), Decimal('-0.01')),
            DailyReturn(date(2024, 1, 18), Decimal('0.50')),
        ]

    def test_week_to_date(self):
        """Test WTD compounds Monday through the reference date."""
        # 1.01 * 1.02 * 0.99 - 1
        self.assertEqual(week_to_date_return(self.returns, REFERENCE), Decimal('0.019898'))

    def test_month_to_date(self):
        self.assertEqual(month_to_date_return(self.returns, REFERENCE), Decimal('0.0708929'))

    def test_year_to_date_excludes_prior_year(self):
        self.assertEqual(year_to_date_return(self.returns, REFERENCE),
                         month_to_date_return(self.returns, REFERENCE))

    def test_inception_to_date(self):
        """Test ITD includes everything up to the reference date."""
        self.assertEqual(inception_to_date_return(self.returns, REFERENCE), Decimal('0.17798219'))

    def test_period_return_is_inclusive(self):
        result = period_return(self.returns, '2024-01-15', '2024-01-16')
        self.assertEqual(result, Decimal('0.0302'))

    def test_empty_window(self):
        self.assertEqual(period_return(self.returns, '2024-02-01', '2024-02-29'), Decimal('0'))


class TestMonthlyReturns(unittest.TestCase):
    """Test monthly_returns."""

    def test_grouped_and_sorted(self):
        returns = [
            DailyReturn(date(2024, 2, 1), Decimal('0.02')),
            DailyReturn(date(2024, 1, 2), Decimal('0.05')),
            DailyReturn(date(2024, 1, 3), Decimal('0.03')),
        ]
        monthly = monthly_returns(returns)

        self.assertEqual([m.month for m in monthly], ['2024-01', '2024-02'])
        self.assertEqual(monthly[0].return_, Decimal('0.0815'))
        self.assertEqual(monthly[1].to_dict(), {'month': '2024-02', 'return': '0.02'})


class TestReturnsFromValues(unittest.TestCase):
    """Test daily_returns_from_values."""

    def test_day_over_day(self):
        dates = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
        returns = daily_returns_from_values([100, 110, 99], dates)

        self.assertEqual([r.date for r in returns], dates[1:])
        self.assertEqual([r.return_ for r in returns], [Decimal('0.1'), Decimal('-0.1')])

    def test_zero_previous_value(self):
        returns = daily_returns_from_values([0, 50], [date(2024, 1, 1), date(2024, 1, 2)])
        self.assertEqual(returns[0].return_, Decimal('0'))

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            daily_returns_from_values([1, 2, 3], [date(2024, 1, 1)])


class TestSeriesAdapters(unittest.TestCase):
    """Test pandas Series conversion."""

    def test_from_series(self):
        """Test NaNs are dropped, order is restored and floats convert exactly."""
        series = pd.Series(
            [0.02, None, 0.01],
            index=pd.to_datetime(['2024-01-03', '2024-01-04', '2024-01-02']),
        )
        returns = daily_returns_from_series(series)

        self.assertEqual([r.date for r in returns], [date(2024, 1, 2), date(2024, 1, 3)])
        self.assertEqual([r.return_ for r in returns], [Decimal('0.01'), Decimal('0.02')])

    def test_to_series(self):
        returns = [DailyReturn(date(2024, 1, 2), Decimal('0.01')),
                   DailyReturn(date(2024, 1, 3), Decimal('0.02'))]
        series = daily_returns_to_series(returns, name='portfolio')

        self.assertEqual(series.name, 'portfolio')
        self.assertEqual(series.index.name, 'date')
        self.assertEqual(series.dtype, object)
        self.assertEqual(series[pd.Timestamp('2024-01-03')], Decimal('0.02'))
        self.assertEqual(daily_returns_from_series(series), returns)


if __name__ == '__main__':
    unittest.main()
