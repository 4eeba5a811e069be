"""
Unit tests for incremental primitives: they must agree with the array
implementations bar for bar.
"""
import numpy as np
import pytest

from fxsignal.services.indicators import calculations as calc
from fxsignal.services.indicators.incremental import (
    AdaptiveEMA,
    EMAChain,
    IncrementalEMA,
    RollingWindow,
    WilderATR,
    WilderRSI,
    round_half_up,
)


@pytest.fixture
def series():
    rng = np.random.default_rng(11)
    return 100 + np.cumsum(rng.normal(0, 1, 120))


def _assert_matches(incremental_values, reference):
    assert len(incremental_values) == len(reference)
    for got, expected in zip(incremental_values, reference):
        if np.isnan(expected):
            assert got is None
        else:
            assert got == pytest.approx(expected, rel=1e-9)


@pytest.mark.unit
class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(7.0) == 7

    def test_non_halves(self):
        assert round_half_up(1.49) == 1
        assert round_half_up(1.51) == 2


@pytest.mark.unit
class TestIncrementalEMA:

    def test_matches_array_ema(self, series):
        ema = IncrementalEMA(10)
        _assert_matches([ema.update(x) for x in series], calc.ema(series, 10))

    def test_not_ready_until_seeded(self):
        ema = IncrementalEMA(3)

        assert ema.update(1.0) is None
        assert ema.update(2.0) is None
        assert not ema.ready
        assert ema.update(3.0) == pytest.approx(2.0)
        assert ema.ready

    def test_period_one_is_identity(self):
        ema = IncrementalEMA(1)

        assert ema.update(5.0) == 5.0
        assert ema.update(-2.0) == -2.0

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            IncrementalEMA(0)


@pytest.mark.unit
class TestEMAChain:

    def test_matches_nested_array_ema(self, series):
        chain = EMAChain((14, 7, 7))
        values = [chain.update(x) for x in series]
        reference = calc.ema(calc.ema(calc.ema(series, 14), 7), 7)

        _assert_matches(values, reference)
        assert chain.consumed == len(series)


@pytest.mark.unit
class TestAdaptiveEMA:

    def test_equals_full_recomputation_with_changing_periods(self, series):
        adaptive = AdaptiveEMA()
        periods = [3, 5, 4, 5, 3, 8]

        for i, x in enumerate(series):
            adaptive.append(x)
            period = periods[i % len(periods)]
            history = np.array(adaptive.history)
            expected = calc.value_at(calc.ema(history, period), len(history) - 1)

            got = adaptive.value((period,))
            if expected is None:
                assert got is None
            else:
                assert got == pytest.approx(expected, rel=1e-9)

    def test_chain_periods(self, series):
        adaptive = AdaptiveEMA()
        for x in series:
            adaptive.append(x)

        reference = calc.ema(calc.ema(series, 6), 3)
        assert adaptive.value((6, 3)) == pytest.approx(reference[-1], rel=1e-9)
        assert len(adaptive) == len(series)


@pytest.mark.unit
class TestRollingWindow:

    def test_statistics_none_until_full(self):
        window = RollingWindow(3)
        window.append(1.0)
        window.append(2.0)

        assert not window.full
        assert window.mean() is None
        assert window.wma() is None
        assert window.pstdev() is None

    def test_statistics_match_arrays(self, series):
        window = RollingWindow(20)
        sma_ref = calc.sma(series, 20)
        wma_ref = calc.wma(series, 20)
        std_ref = calc.rolling_std(series, 20)

        for i, x in enumerate(series):
            window.append(x)
            if i < 19:
                continue
            assert window.mean() == pytest.approx(sma_ref[i], rel=1e-9)
            assert window.wma() == pytest.approx(wma_ref[i], rel=1e-9)
            assert window.pstdev() == pytest.approx(std_ref[i], rel=1e-6)

        assert len(window) == 20

    def test_constant_window_has_zero_stdev(self):
        window = RollingWindow(14)
        for _ in range(30):
            window.append(200.0)

        assert window.pstdev() == 0.0
        assert window.mean() == pytest.approx(200.0)


@pytest.mark.unit
class TestWilder:

    def test_rsi_matches_array_rsi(self, series):
        rsi = WilderRSI(5)
        _assert_matches([rsi.update(x) for x in series], calc.rsi(series, 5))

    def test_rsi_flat_prices(self):
        rsi = WilderRSI(5)
        values = [rsi.update(100.0) for _ in range(10)]

        assert values[:5] == [None] * 5
        assert values[5:] == [100.0] * 5

    def test_atr_matches_array_atr(self, series):
        highs = series + 1.5
        lows = series - 0.5
        atr = WilderATR(14)

        values = [atr.update(h, l, c) for h, l, c in zip(highs, lows, series)]

        _assert_matches(values, calc.atr(highs, lows, series, 14))
        assert atr.value == pytest.approx(values[-1])
