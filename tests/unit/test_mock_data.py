"""
Unit tests for the mock candle generator.
"""
from datetime import datetime, timedelta, timezone

import pytest

from fxsignal.schemas.market import Timeframe
from fxsignal.services.data_ingestion import SYMBOL_BASE_PRICES, generate_mock_candles, get_base_price

END = datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.mark.unit
class TestMockData:

    def test_seeded_series_is_reproducible(self):
        first = generate_mock_candles("EURUSD", Timeframe.H1, 100, end_time=END, seed=1)
        second = generate_mock_candles("EURUSD", Timeframe.H1, 100, end_time=END, seed=1)

        assert first == second

    def test_different_seeds_differ(self):
        first = generate_mock_candles("EURUSD", Timeframe.H1, 100, end_time=END, seed=1)
        second = generate_mock_candles("EURUSD", Timeframe.H1, 100, end_time=END, seed=2)

        assert first != second

    @pytest.mark.parametrize("timeframe,step", [(Timeframe.M5, timedelta(minutes=5)), (Timeframe.D1, timedelta(days=1))])
    def test_timestamps_spaced_by_timeframe(self, timeframe, step):
        candles = generate_mock_candles("GBPUSD", timeframe, 50, end_time=END, seed=3)

        assert len(candles) == 50
        assert candles[-1].timestamp == END - step
        for prev, cur in zip(candles, candles[1:]):
            assert cur.timestamp - prev.timestamp == step

    @pytest.mark.parametrize("symbol", ["EURUSD", "USDJPY", "XAUUSD"])
    def test_candles_are_well_formed(self, symbol):
        candles = generate_mock_candles(symbol, Timeframe.H1, 300, end_time=END, seed=5)

        for c in candles:
            assert c.high >= max(c.open, c.close)
            assert c.low <= min(c.open, c.close)
            assert c.low > 0

    def test_starts_near_base_price(self):
        candles = generate_mock_candles("USDJPY", Timeframe.H1, 10, end_time=END, seed=5)

        assert candles[0].open == pytest.approx(SYMBOL_BASE_PRICES["USDJPY"])

    def test_unknown_symbol_base_price(self):
        price = get_base_price("ABCXYZ")

        assert 0.5 <= price <= 1.5
        assert get_base_price("EURUSD") == SYMBOL_BASE_PRICES["EURUSD"]
