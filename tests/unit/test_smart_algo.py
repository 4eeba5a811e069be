"""
Unit tests for the Smart Algo signal engine.
"""
import pytest

from fxsignal.schemas.indicators import SmartAlgoConfig
from fxsignal.services.indicators.smart_algo import calculate_smart_algo

CUSTOM_CONFIG = SmartAlgoConfig(
    trend_length=5,
    ema_filter_length=10,
    atr_length=7,
    macd_fast=5,
    macd_slow=15,
    macd_signal=4,
    adx_length=7,
)


@pytest.mark.unit
class TestSmartAlgoConfig:

    def test_default_windows(self):
        config = SmartAlgoConfig()

        assert config.min_bars_required == 34
        assert config.start_index == 33

    def test_custom_windows(self):
        assert CUSTOM_CONFIG.min_bars_required == 15
        assert CUSTOM_CONFIG.start_index == 14

    def test_camel_case_keys(self):
        config = SmartAlgoConfig.model_validate({"emaFilterLength": 50, "adxThreshold": 25})

        assert config.ema_filter_length == 50
        assert config.adx_threshold == 25


@pytest.mark.unit
class TestSmartAlgo:

    def test_insufficient_data(self, mock_candles):
        assert calculate_smart_algo(mock_candles(33)) == []

    def test_records_start_after_warm_up(self, mock_candles):
        candles = mock_candles(200)
        results = calculate_smart_algo(candles)

        assert len(results) == 200 - 33
        assert [r.timestamp for r in results] == [c.timestamp for c in candles[33:]]

    def test_custom_config_start(self, mock_candles):
        candles = mock_candles(50)
        results = calculate_smart_algo(candles, CUSTOM_CONFIG)

        assert len(results) == 36
        assert results[0].timestamp == candles[14].timestamp

    def test_minimum_bars_gives_one_record(self, mock_candles):
        assert len(calculate_smart_algo(mock_candles(34))) == 1

    def test_confidence_and_flags_consistent(self, mock_candles):
        results = calculate_smart_algo(mock_candles(500))

        for r in results:
            assert 0 <= r.confidence <= 4
            assert not (r.buy_signal and r.sell_signal)
            assert not (r.bullish_trend and r.bearish_trend)
            if r.buy_signal:
                assert r.bullish_trend and r.momentum_buy and r.high_volatility and not r.chop
                assert r.confidence == 4
            if r.sell_signal:
                assert r.bearish_trend and r.momentum_sell and r.high_volatility and not r.chop
                assert r.confidence == 4

    def test_oscillation_crosses_macd(self, sine_candles):
        results = calculate_smart_algo(sine_candles(300))

        assert any(r.momentum_buy for r in results)
        assert any(r.momentum_sell for r in results)
        assert not any(r.momentum_buy and r.momentum_sell for r in results)

    def test_uptrend(self, uptrend_candles):
        results = calculate_smart_algo(uptrend_candles(80))
        last = results[-1]

        assert last.bullish_trend is True
        assert last.bearish_trend is False
        assert last.chop is False
        assert last.adx == pytest.approx(100.0)
        assert last.atr == pytest.approx(5.0)
        assert last.ema_filter < uptrend_candles(80)[-1].close
        # True range equals ATR, so no volatility expansion
        assert last.high_volatility is False
        assert not any(r.buy_signal or r.sell_signal for r in results)

    def test_accepts_mappings(self, mock_candles):
        candles = mock_candles(80)

        assert calculate_smart_algo([c.model_dump() for c in candles]) == calculate_smart_algo(
            candles
        )
