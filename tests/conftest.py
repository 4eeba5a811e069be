"""
Shared fixtures: deterministic candle series with known shapes.
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from fxsignal.schemas.market import Candle, Timeframe
from fxsignal.services.data_ingestion import generate_mock_candles

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build_candles(closes, up=1.0, down=1.0, step=timedelta(hours=1)):
    """Candles whose open is the previous close and whose range is close+up / close-down."""
    candles = []
    prev_close = closes[0]
    for i, close in enumerate(closes):
        candles.append(
            Candle(
                timestamp=START + step * i,
                open=prev_close,
                high=close + up,
                low=close - down,
                close=close,
            )
        )
        prev_close = close
    return candles


@pytest.fixture
def make_candles():
    """Factory for candles from a list of closes."""
    return build_candles


@pytest.fixture
def uptrend_candles():
    """close = 100 + i, high = close + 3, low = close - 2."""

    def _make(count):
        return build_candles([100.0 + i for i in range(count)], up=3.0, down=2.0)

    return _make


@pytest.fixture
def flat_candles():
    """Constant price with no range: zero volatility everywhere."""

    def _make(count):
        return build_candles([100.0] * count, up=0.0, down=0.0)

    return _make


@pytest.fixture
def sine_candles():
    """Period-20 oscillation around 100 with amplitude 10."""

    def _make(count, period=20, amplitude=10.0):
        closes = [100.0 + amplitude * math.sin(2 * math.pi * i / period) for i in range(count)]
        return build_candles(closes)

    return _make


@pytest.fixture
def mock_candles():
    """Seeded random-walk EURUSD hourly candles."""

    def _make(count, seed=7):
        return generate_mock_candles("EURUSD", Timeframe.H1, count, end_time=START, seed=seed)

    return _make
