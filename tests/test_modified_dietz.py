"""
Unit tests for the Modified Dietz return and return compounding.
"""

import unittest
from datetime import date
from decimal import Decimal
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import NumericConfig
from data.models import CashFlow
from financial.calculations import round_pct
from performance.modified_dietz import calculate_modified_dietz, compound_returns

JAN_START = date(2024, 1, 1)
JAN_END = date(2024, 1, 31)


class TestModifiedDietz(unittest.TestCase):
    """Test calculate_modified_dietz."""

    def test_mid_month_deposit(self):
        """Test a deposit halfway through January."""
        # W = (30 - 15) / 30 = 0.5 -> 5000 / 105000
        result = calculate_modified_dietz(
            Decimal('100000'), Decimal('115000'),
            [CashFlow(date(2024, 1, 16), Decimal('10000'))],
            JAN_START, JAN_END,
        )
        self.assertEqual(round_pct(result), Decimal('0.047619'))

    def test_no_flows_is_simple_return(self):
        result = calculate_modified_dietz(100, 110, [], JAN_START, JAN_END)
        self.assertEqual(result, Decimal('0.1'))

    def test_flow_on_first_day_has_full_weight(self):
        result = calculate_modified_dietz(0, 1100, [CashFlow(JAN_START, 1000)], JAN_START, JAN_END)
        self.assertEqual(result, Decimal('0.1'))

    def test_flow_on_last_day_has_zero_weight(self):
        result = calculate_modified_dietz(1000, 1600, [CashFlow(JAN_END, 500)], JAN_START, JAN_END)
        self.assertEqual(result, Decimal('0.1'))

    def test_withdrawal(self):
        """Test a negative flow reduces the capital base."""
        result = calculate_modified_dietz(
            Decimal('100000'), Decimal('95000'),
            [CashFlow(date(2024, 1, 16), Decimal('-10000'))],
            JAN_START, JAN_END,
        )
        # (95000 - 100000 + 10000) / (100000 - 5000)
        self.assertEqual(round_pct(result), Decimal('0.052632'))

    def test_zero_length_period(self):
        self.assertEqual(calculate_modified_dietz(100, 200, [], JAN_START, JAN_START), Decimal('0'))
        self.assertEqual(calculate_modified_dietz(100, 200, [], JAN_END, JAN_START), Decimal('0'))

    def test_zero_denominator(self):
        self.assertEqual(calculate_modified_dietz(0, 500, [], JAN_START, JAN_END), Decimal('0'))

    def test_precision_from_config(self):
        """Test the calculation runs at the configured precision."""
        result = calculate_modified_dietz(
            Decimal('100000'), Decimal('115000'),
            [CashFlow(date(2024, 1, 16), Decimal('10000'))],
            JAN_START, JAN_END, config=NumericConfig(precision=4),
        )
        self.assertEqual(result, Decimal('0.04762'))


class TestCompoundReturns(unittest.TestCase):
    """Test compound_returns."""

    def test_two_periods(self):
        self.assertEqual(compound_returns([Decimal('0.05'), Decimal('0.03')]), Decimal('0.0815'))

    def test_empty(self):
        self.assertEqual(compound_returns([]), Decimal('0'))

    def test_single_period_is_unchanged(self):
        """Test linking one return gives that return back."""
        self.assertEqual(compound_returns([Decimal('0.0375')]), Decimal('0.0375'))
        self.assertEqual(compound_returns([Decimal('-0.2')]), Decimal('-0.2'))

    def test_accepts_literals(self):
        self.assertEqual(compound_returns(['0.10', 0.10]), Decimal('0.21'))

    def test_compounding_is_associative(self):
        """Test linking sub-period results equals linking all periods."""
        returns = [Decimal('0.01'), Decimal('-0.02'), Decimal('0.03')]
        whole = compound_returns(returns)
        stepwise = compound_returns([compound_returns(returns[:2]), returns[2]])

        self.assertEqual(whole, stepwise)
        self.assertEqual(whole, Decimal('0.019494'))


if __name__ == '__main__':
    unittest.main()
