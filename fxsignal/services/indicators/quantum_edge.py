"""
Quantum Edge FX Indicator

Multi-stage momentum oscillator over OHLC candles:

    adaptive lookback (RSI 5)  ->  triple-EMA momentum  ->  normalization
    ->  predictive wave (WMA + EMA)  ->  volatility gate (ATR 14 / SMA 20)
    ->  quantum edge (EMA 5 -> EMA 3)  ->  trend line, trend strength,
    crossover signals and dynamic zones

The computation is a single causal pass: the record for bar i only depends
on candles[0..i]. All rolling state lives in a QuantumEdgeState built fresh
for every call.
"""

import logging
from collections import deque
from typing import Any, Mapping, Optional, Sequence, Union

from fxsignal.schemas.market import Candle
from fxsignal.schemas.indicators import QuantumEdgeConfig, QuantumEdgeResult, ZoneColor
from fxsignal.services.indicators.incremental import (
    AdaptiveEMA,
    IncrementalEMA,
    RollingWindow,
    WilderATR,
    WilderRSI,
    round_half_up,
)

logger = logging.getLogger(__name__)

RSI_LENGTH = 5
ATR_LENGTH = 14
ATR_SMA_LENGTH = 20
EDGE_LENGTH = 5
EDGE_SMOOTH_LENGTH = 3
TREND_LENGTH = 9
STRENGTH_LENGTH = 14
STRENGTH_THRESHOLD = 20
ZONE_LENGTH = 14
ZONE_WIDTH = 1.5

# RSI tops out at 100, so the adaptive lookback never exceeds 10 * length
MAX_ADAPTIVE_FACTOR = 10


def to_candles(candles: Sequence[Union[Candle, Mapping[str, Any]]]) -> list[Candle]:
    """Accept Candle models or plain OHLC mappings."""
    return [c if isinstance(c, Candle) else Candle.model_validate(c) for c in candles]


class QuantumEdgeState:
    """
    Rolling state for one Quantum Edge run.

    Feed candles in time order through `update`; each call returns the record
    for that bar. Bars before the warm-up index only advance the price-based
    statistics (RSI, ATR, close history).
    """

    def __init__(self, config: QuantumEdgeConfig) -> None:
        self.config = config
        self.warm_up_index = config.min_bars_required - 1
        self.bar_index = -1

        max_lookback = config.length * (MAX_ADAPTIVE_FACTOR if config.use_adaptive else 1)
        self._closes: deque[float] = deque(maxlen=max_lookback + 2)
        self._rsi = WilderRSI(RSI_LENGTH)
        self._atr = WilderATR(ATR_LENGTH)
        self._atr_window = RollingWindow(ATR_SMA_LENGTH)

        # Momentum series; periods follow the adaptive lookback
        self._momentum = AdaptiveEMA()
        self._abs_momentum = AdaptiveEMA()

        # Predictive wave
        self._normalized = RollingWindow(config.predictive_length)
        self._wave_ema = IncrementalEMA(
            max(1, round_half_up(config.predictive_length / config.smooth_factor))
        )

        # Quantum edge, trend and zones
        self._edge_ema = IncrementalEMA(EDGE_LENGTH)
        self._edge_smooth_ema = IncrementalEMA(EDGE_SMOOTH_LENGTH)
        self._trend_ema = IncrementalEMA(TREND_LENGTH)
        self._strength_ema = IncrementalEMA(STRENGTH_LENGTH)
        self._zone_ema = IncrementalEMA(ZONE_LENGTH)
        self._zone_window = RollingWindow(ZONE_LENGTH)

        self._last_smoothed: Optional[float] = None
        self._last_cross_point: Optional[tuple[float, float]] = None

    def final_length(self, rsi: Optional[float]) -> int:
        if not self.config.use_adaptive or rsi is None:
            return self.config.length
        return max(1, round_half_up((rsi / 10) * self.config.length))

    def update(self, candle: Candle) -> QuantumEdgeResult:
        self.bar_index += 1
        close = candle.close

        self._closes.append(close)
        rsi = self._rsi.update(close)
        atr = self._atr.update(candle.high, candle.low, close)
        if atr is not None:
            self._atr_window.append(atr)

        result = QuantumEdgeResult(timestamp=candle.timestamp)
        if self.bar_index < self.warm_up_index:
            return result

        normalized = self._normalized_momentum(close, self.final_length(rsi))
        wave_smoothed = self._predictive_wave(normalized)
        volatility_ratio = self._volatility_ratio(atr)
        volatility_filter = 1 if volatility_ratio > self.config.volatility_threshold else 0

        smoothed = None
        if normalized is not None and wave_smoothed is not None:
            edge = self._edge_ema.update(normalized * volatility_filter + wave_smoothed)
            if edge is not None:
                smoothed = self._edge_smooth_ema.update(edge)

        result.normalized_momentum = normalized
        result.volatility_ratio = volatility_ratio
        if smoothed is None:
            return result

        trend = self._trend_ema.update(smoothed)
        strength = None
        if self._last_smoothed is not None:
            strength = self._strength_ema.update(abs(smoothed - self._last_smoothed))
        self._last_smoothed = smoothed

        result.quantum_edge_smoothed = smoothed
        result.trend_direction = trend
        result.trend_strength = strength

        if trend is not None:
            buy, sell = self._crossings(smoothed, trend, strength)
            result.buy_signal = self.config.show_signals and buy
            result.sell_signal = self.config.show_signals and sell

        self._apply_zones(result, smoothed)
        return result

    def _normalized_momentum(self, close: float, final_length: int) -> Optional[float]:
        if self.bar_index < final_length:
            return None

        raw = close - self._closes[-1 - final_length]
        self._momentum.append(raw)
        self._abs_momentum.append(abs(raw))

        half = max(1, round_half_up(final_length / 2))
        momentum = self._momentum.value((final_length, half, half))
        if momentum is None:
            return None

        ema_abs = self._abs_momentum.value((final_length,))
        if not ema_abs:
            return 0.0
        return momentum / ema_abs * 100

    def _predictive_wave(self, normalized: Optional[float]) -> Optional[float]:
        if normalized is None:
            return None
        self._normalized.append(normalized)
        wave = self._normalized.wma()
        if wave is None:
            return None
        return self._wave_ema.update(wave)

    def _volatility_ratio(self, atr: Optional[float]) -> float:
        atr_sma = self._atr_window.mean()
        if atr is None or not atr_sma:
            return 0.0
        return atr / atr_sma

    def _crossings(
        self, smoothed: float, trend: float, strength: Optional[float]
    ) -> tuple[bool, bool]:
        """Crossover / crossunder against the previous (smoothed, trend) point."""
        previous = self._last_cross_point
        self._last_cross_point = (smoothed, trend)
        if previous is None or strength is None or strength <= STRENGTH_THRESHOLD:
            return False, False

        prev_smoothed, prev_trend = previous
        buy = smoothed > trend and prev_smoothed <= prev_trend
        sell = smoothed < trend and prev_smoothed >= prev_trend
        return buy, sell

    def _apply_zones(self, result: QuantumEdgeResult, smoothed: float) -> None:
        middle = self._zone_ema.update(smoothed)
        self._zone_window.append(smoothed)
        stdev = self._zone_window.pstdev()
        if middle is None or stdev is None:
            return

        result.upper_zone = middle + stdev * ZONE_WIDTH
        result.lower_zone = middle - stdev * ZONE_WIDTH

        if not self.config.show_zones:
            return
        if smoothed > result.upper_zone:
            result.zone_color = ZoneColor.GREEN
        elif smoothed < result.lower_zone:
            result.zone_color = ZoneColor.RED
        else:
            result.zone_color = ZoneColor.BLUE


def calculate_quantum_edge(
    candles: Sequence[Union[Candle, Mapping[str, Any]]],
    config: Optional[QuantumEdgeConfig] = None,
) -> list[QuantumEdgeResult]:
    """
    Calculate Quantum Edge FX values and signals for every candle.

    Returns one record per candle, in order, or an empty list when there are
    fewer candles than `config.min_bars_required`.
    """
    config = config or QuantumEdgeConfig()
    candles = to_candles(candles)

    min_bars = config.min_bars_required
    if len(candles) < min_bars:
        logger.warning(
            f"Not enough data for Quantum Edge: requires {min_bars} bars, got {len(candles)}"
        )
        return []

    state = QuantumEdgeState(config)
    return [state.update(candle) for candle in candles]
