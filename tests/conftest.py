import pytest
import sys
import os
from decimal import Decimal
from datetime import date

# Add the project root to the path so the packages import without installation
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.settings import Settings
from data.models.returns import DailyReturn

ANALYTICS_ENV_VARS = (
    'ANALYTICS_DECIMAL_PRECISION',
    'ANALYTICS_ROUNDING',
    'ANALYTICS_LOG_LEVEL',
    'ANALYTICS_LOG_FILE',
    'ANALYTICS_DEV',
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove analytics environment overrides for the duration of a test."""
    for name in ANALYTICS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def settings(clean_env):
    """Default settings, unaffected by the developer's environment."""
    return Settings()


@pytest.fixture
def january_returns():
    """A short history spanning a year boundary."""
    return [
        DailyReturn(date(2023, 12, 28), Decimal('0.02')),
        DailyReturn(date(2024, 1, 2), Decimal('0.01')),
        DailyReturn(date(2024, 1, 3), Decimal('-0.02')),
        DailyReturn(date(2024, 1, 4), Decimal('0.03')),
    ]


@pytest.fixture
def benchmark_returns():
    """Benchmark history missing one of the portfolio's January dates."""
    return [
        DailyReturn(date(2023, 12, 28), Decimal('0.01')),
        DailyReturn(date(2024, 1, 2), Decimal('0.005')),
        DailyReturn(date(2024, 1, 4), Decimal('0.015')),
    ]
