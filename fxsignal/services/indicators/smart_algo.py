"""
Smart Algo Signal Indicator

Confirmed entries need all four filters to agree:
    - trend:      close vs EMA filter, plus average candle body direction
    - volatility: true range expanding beyond ATR * factor
    - momentum:   MACD line crossing its signal line
    - chop:       ADX at or above threshold

Each bar also gets a 0-4 confidence score counting the filters that pass.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np

from fxsignal.schemas.market import Candle
from fxsignal.schemas.indicators import SmartAlgoConfig, SmartAlgoSignal
from fxsignal.services.indicators.calculations import (
    adx,
    atr,
    ema,
    macd,
    true_range,
    value_at,
)
from fxsignal.services.indicators.quantum_edge import to_candles

logger = logging.getLogger(__name__)


def _macd_cross(
    macd_line: np.ndarray, signal_line: np.ndarray, histogram: np.ndarray, i: int
) -> tuple[bool, bool]:
    """(momentum_buy, momentum_sell) for bar i; False while MACD is warming up."""
    current = (value_at(macd_line, i), value_at(signal_line, i), value_at(histogram, i))
    previous = (value_at(macd_line, i - 1), value_at(signal_line, i - 1))
    if None in current or None in previous:
        return False, False

    line, signal, hist = current
    prev_line, prev_signal = previous
    buy = hist > 0 and line > signal and prev_line <= prev_signal
    sell = hist < 0 and line < signal and prev_line >= prev_signal
    return buy, sell


def calculate_smart_algo(
    candles: Sequence[Union[Candle, Mapping[str, Any]]],
    config: Optional[SmartAlgoConfig] = None,
) -> list[SmartAlgoSignal]:
    """
    Evaluate Smart Algo signals.

    Returns one record per candle from `config.start_index` onward, or an
    empty list when there are fewer candles than `config.min_bars_required`.
    """
    config = config or SmartAlgoConfig()
    candles = to_candles(candles)

    if len(candles) < config.min_bars_required:
        logger.warning(
            f"Not enough data for Smart Algo: requires {config.min_bars_required} bars, "
            f"got {len(candles)}"
        )
        return []

    opens = np.array([c.open for c in candles])
    highs = np.array([c.high for c in candles])
    lows = np.array([c.low for c in candles])
    closes = np.array([c.close for c in candles])

    ema_filter = ema(closes, config.ema_filter_length)
    atr_arr = atr(highs, lows, closes, config.atr_length)
    tr_arr = true_range(highs, lows, closes)
    adx_arr, _, _ = adx(highs, lows, closes, config.adx_length)
    macd_line, signal_line, histogram = macd(
        closes, config.macd_fast, config.macd_slow, config.macd_signal
    )
    bodies = closes - opens

    signals = []
    for i in range(config.start_index, len(candles)):
        close = float(closes[i])
        current_ema = value_at(ema_filter, i)
        current_atr = value_at(atr_arr, i)
        current_adx = value_at(adx_arr, i)

        # Average body over the previous trend_length bars (current bar excluded)
        if i >= config.trend_length:
            body_avg = float(np.mean(bodies[i - config.trend_length : i]))
        else:
            body_avg = 0.0

        # === TREND ===
        bullish_trend = current_ema is not None and close > current_ema and body_avg > 0
        bearish_trend = current_ema is not None and close < current_ema and -body_avg > 0

        # === VOLATILITY EXPANSION ===
        high_volatility = (
            current_atr is not None and float(tr_arr[i]) > current_atr * config.volatility_factor
        )

        # === MOMENTUM ===
        momentum_buy, momentum_sell = _macd_cross(macd_line, signal_line, histogram, i)

        # === CHOP FILTER ===
        strong_trend = current_adx is not None and current_adx >= config.adx_threshold
        chop = current_adx is not None and current_adx < config.adx_threshold

        confidence = sum(
            [
                bullish_trend or bearish_trend,
                high_volatility,
                strong_trend,
                momentum_buy or momentum_sell,
            ]
        )

        signals.append(
            SmartAlgoSignal(
                timestamp=candles[i].timestamp,
                buy_signal=bullish_trend and momentum_buy and high_volatility and strong_trend,
                sell_signal=bearish_trend and momentum_sell and high_volatility and strong_trend,
                confidence=confidence,
                ema_filter=current_ema,
                adx=current_adx,
                atr=current_atr,
                chop=chop,
                bullish_trend=bullish_trend,
                bearish_trend=bearish_trend,
                high_volatility=high_volatility,
                momentum_buy=momentum_buy,
                momentum_sell=momentum_sell,
            )
        )

    return signals
