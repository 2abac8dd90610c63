"""
Unit tests for data models.

Tests cover field coercion, immutability, serialization and the Result type.
"""

import unittest
import dataclasses
from datetime import date
from decimal import Decimal
import sys
from pathlib import Path

# Add the parent directory to the path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from data.models import (
    BrinsonAttribution,
    CashFlow,
    Currency,
    DailyReturn,
    Err,
    FlowType,
    Ok,
    PeriodWindow,
    PerformanceSummary,
    ResultError,
    SegmentData,
    TradeForCash,
    TradeSide,
    err,
    ok,
)
from financial.calculations import InvalidDecimalError


class TestCashFlow(unittest.TestCase):
    """Test CashFlow model."""

    def test_coerces_fields(self):
        """Test string dates, amounts and flow types are converted."""
        flow = CashFlow('2024-01-16', '10000.50', 'deposit')
        self.assertEqual(flow.date, date(2024, 1, 16))
        self.assertEqual(flow.amount, Decimal('10000.50'))
        self.assertIs(flow.flow_type, FlowType.DEPOSIT)

    def test_invalid_amount(self):
        with self.assertRaises(InvalidDecimalError):
            CashFlow(date(2024, 1, 16), 'ten thousand')

    def test_immutable(self):
        flow = CashFlow(date(2024, 1, 16), 100)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            flow.amount = Decimal('200')

    def test_to_dict(self):
        flow = CashFlow(date(2024, 1, 16), Decimal('-250.00'), FlowType.WITHDRAWAL)
        self.assertEqual(flow.to_dict(), {
            'date': '2024-01-16',
            'amount': '-250.00',
            'flow_type': 'withdrawal',
        })


class TestReturnModels(unittest.TestCase):
    """Test return series models."""

    def test_daily_return_to_dict(self):
        daily = DailyReturn('2024-01-02', 0.0125)
        self.assertEqual(daily.return_, Decimal('0.0125'))
        self.assertEqual(daily.to_dict(), {'date': '2024-01-02', 'return': '0.0125'})

    def test_period_window(self):
        window = PeriodWindow('2024-01-01', '2024-01-31')
        self.assertEqual(window.days, 30)
        self.assertTrue(window.contains(date(2024, 1, 1)))
        self.assertTrue(window.contains('2024-01-31'))
        self.assertFalse(window.contains(date(2024, 2, 1)))

    def test_segment_data(self):
        segment = SegmentData('Energy', '0.40', '0.12')
        self.assertEqual(segment.weight, Decimal('0.40'))
        self.assertEqual(segment.return_, Decimal('0.12'))


class TestTradeForCash(unittest.TestCase):
    """Test TradeForCash model."""

    def test_amounts(self):
        trade = TradeForCash('BUY', '10', '25.50', 'usd', commission='1.00', tax='0.25')
        self.assertIs(trade.side, TradeSide.BUY)
        self.assertEqual(trade.currency, 'USD')
        self.assertEqual(trade.gross_amount, Decimal('255.00'))
        self.assertEqual(trade.costs, Decimal('1.25'))

    def test_from_dict_round_trip(self):
        data = {'side': 'COVER', 'quantity': '5', 'price': '10', 'currency': 'EUR'}
        trade = TradeForCash.from_dict(data)
        self.assertEqual(trade.commission, Decimal('0'))
        self.assertEqual(TradeForCash.from_dict(trade.to_dict()), trade)

    def test_invalid_side(self):
        with self.assertRaises(ValueError):
            TradeForCash('HOLD', '1', '1', 'EUR')

    def test_currency_enum_and_unknown_code(self):
        """Test Currency members store their ISO code and unknown codes are rejected."""
        self.assertEqual(TradeForCash('BUY', '1', '1', Currency.GBP).currency, 'GBP')
        self.assertEqual(TradeForCash('BUY', '1', '1', ' chf ').currency, 'CHF')
        with self.assertRaises(ValueError):
            TradeForCash('BUY', '1', '1', 'XYZ')

    def test_rejects_non_positive_quantity_and_price(self):
        """Test zero or negative quantities and prices raise ValueError."""
        for quantity, price in (('0', '10'), ('-10', '10'), ('10', '0'), ('10', '-1')):
            with self.subTest(quantity=quantity, price=price):
                with self.assertRaises(ValueError):
                    TradeForCash('BUY', quantity, price, 'USD')

    def test_rejects_negative_costs(self):
        """Test negative commission or tax raise ValueError, zero costs are allowed."""
        with self.assertRaises(ValueError):
            TradeForCash('BUY', '10', '10', 'USD', commission='-1')
        with self.assertRaises(ValueError):
            TradeForCash('SELL', '10', '10', 'USD', tax='-0.01')
        self.assertEqual(TradeForCash('BUY', '10', '10', 'USD').costs, Decimal('0'))

    def test_consumes_cash(self):
        self.assertTrue(TradeSide.BUY.consumes_cash)
        self.assertTrue(TradeSide.COVER.consumes_cash)
        self.assertFalse(TradeSide.SELL.consumes_cash)
        self.assertFalse(TradeSide.SHORT.consumes_cash)


class TestResult(unittest.TestCase):
    """Test the Ok/Err result type."""

    def test_ok(self):
        result = ok(42)
        self.assertIsInstance(result, Ok)
        self.assertTrue(result.is_ok)
        self.assertFalse(result.is_err)
        self.assertEqual(result.unwrap(), 42)

    def test_err(self):
        result = err('no cash')
        self.assertIsInstance(result, Err)
        self.assertTrue(result.is_err)
        with self.assertRaises(ResultError):
            result.unwrap()

    def test_record_serialization(self):
        record = BrinsonAttribution(
            segment='Energy',
            portfolio_weight=Decimal('0.40'),
            benchmark_weight=Decimal('0.30'),
            portfolio_return=Decimal('0.12'),
            benchmark_return=Decimal('0.10'),
            allocation_effect=Decimal('0.0028'),
            selection_effect=Decimal('0.006'),
            interaction_effect=Decimal('0.002'),
            total_effect=Decimal('0.0108'),
        )
        data = record.to_dict()
        self.assertEqual(data['segment'], 'Energy')
        self.assertEqual(data['allocation_effect'], '0.0028')

    def test_performance_summary_serialization(self):
        """Test the summary record lives with the other results and serializes its fields."""
        summary = PerformanceSummary(
            as_of=date(2024, 3, 28),
            wtd_return=Decimal('0.01'),
            mtd_return=Decimal('0.02'),
            ytd_return=Decimal('0.05'),
            itd_return=Decimal('0.12'),
            volatility_30d=Decimal('0.15'),
            sharpe_ratio_ytd=Decimal('1.2'),
            sortino_ratio_ytd=Decimal('1.8'),
            max_drawdown_ytd=Decimal('-0.04'),
            current_drawdown=Decimal('0'),
        )
        data = summary.to_dict()

        self.assertEqual(data['as_of'], '2024-03-28')
        self.assertEqual(data['max_drawdown_ytd'], '-0.04')
        self.assertIsNone(data['information_ratio_ytd'])
        with self.assertRaises(dataclasses.FrozenInstanceError):
            summary.ytd_return = Decimal('0')


if __name__ == '__main__':
    unittest.main()
