"""
Technical Indicator Calculations

Array implementations of the indicators the engines use.
Every function takes full arrays and returns an array aligned with its
input, NaN where the lookback is not yet satisfied.

The bar-by-bar objects in `incremental` follow the same seeding rules, so
the two agree index for index.
"""

from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


def _first_valid(data: np.ndarray) -> int:
    """Index of the first non-NaN value, len(data) if there is none."""
    valid = np.flatnonzero(~np.isnan(data))
    return int(valid[0]) if len(valid) > 0 else len(data)


def _windowed(data: np.ndarray, period: int, reducer) -> np.ndarray:
    """Apply `reducer` to every trailing window of `period` values."""
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result
    result[period - 1 :] = reducer(sliding_window_view(data, period))
    return result


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    return _windowed(data, period, lambda windows: windows.mean(axis=1))


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first `period` valid values. Leading NaNs
    (the warm-up of an upstream indicator) are skipped.
    """
    result = np.full(len(data), np.nan)
    start = _first_valid(data)
    if len(data) - start < period:
        return result

    multiplier = 2 / (period + 1)
    result[start + period - 1] = np.mean(data[start : start + period])

    for i in range(start + period, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


def rma(data: np.ndarray, period: int) -> np.ndarray:
    """Wilder's smoothing (RMA), seeded with the SMA of the first `period` values."""
    result = np.full(len(data), np.nan)
    start = _first_valid(data)
    if len(data) - start < period:
        return result

    result[start + period - 1] = np.mean(data[start : start + period])

    for i in range(start + period, len(data)):
        result[i] = (result[i - 1] * (period - 1) + data[i]) / period

    return result


def wma(data: np.ndarray, period: int) -> np.ndarray:
    """Linearly weighted moving average, newest value weighted `period`."""
    weights = np.arange(1, period + 1)
    return _windowed(data, period, lambda windows: windows @ weights / weights.sum())


def rolling_std(data: np.ndarray, period: int) -> np.ndarray:
    """Population standard deviation over a trailing window."""
    return _windowed(data, period, lambda windows: windows.std(axis=1))


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index (Wilder).

    The first value sits at index `period`; a window with no losses is 100.
    """
    result = np.full(len(closes), np.nan)
    if len(closes) < period + 1:
        return result

    deltas = np.diff(closes)
    avg_gain = rma(np.where(deltas > 0, deltas, 0.0), period)
    avg_loss = rma(np.where(deltas < 0, -deltas, 0.0), period)

    with np.errstate(divide="ignore", invalid="ignore"):
        values = 100 - 100 / (1 + avg_gain / avg_loss)
    values = np.where(avg_loss == 0, 100.0, values)

    result[period:] = values[period - 1 :]
    return result


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    macd_line = ema(closes, fast_period) - ema(closes, slow_period)

    # Signal line starts once the slow EMA exists
    signal_line = ema(macd_line, signal_period)

    return macd_line, signal_line, macd_line - signal_line


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True Range. The first bar has no previous close and uses high - low."""
    tr = highs - lows
    if len(closes) < 2:
        return tr.astype(float)

    prev_close = closes[:-1]
    tr[1:] = np.maximum.reduce(
        [
            highs[1:] - lows[1:],
            np.abs(highs[1:] - prev_close),
            np.abs(lows[1:] - prev_close),
        ]
    )
    return tr


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> np.ndarray:
    """Average True Range (Wilder smoothing of the true range)."""
    return rma(true_range(highs, lows, closes), period)


# =============================================================================
# TREND INDICATORS
# =============================================================================


def adx(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Average Directional Index, directional movement smoothed with EMAs.

    Returns: (adx, plus_di, minus_di)
    """
    if len(closes) < period + 1:
        nan_arr = np.full(len(closes), np.nan)
        return nan_arr, nan_arr, nan_arr

    up_move = np.diff(highs)
    down_move = -np.diff(lows)

    plus_dm = np.zeros(len(closes))
    minus_dm = np.zeros(len(closes))
    plus_dm[1:] = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm[1:] = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)

    smoothed_tr = ema(true_range(highs, lows, closes), period)
    started = ~np.isnan(smoothed_tr)

    with np.errstate(divide="ignore", invalid="ignore"):
        plus_di = 100 * ema(plus_dm, period) / smoothed_tr
        minus_di = 100 * ema(minus_dm, period) / smoothed_tr

    # Keep the warm-up NaNs, zero out 0/0 once the smoothing has started
    plus_di = np.where(started, np.nan_to_num(plus_di, nan=0), np.nan)
    minus_di = np.where(started, np.nan_to_num(minus_di, nan=0), np.nan)

    with np.errstate(divide="ignore", invalid="ignore"):
        dx = 100 * np.abs(plus_di - minus_di) / (plus_di + minus_di)
    dx = np.where(started, np.nan_to_num(dx, nan=0), np.nan)

    return ema(dx, period), plus_di, minus_di


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def value_at(arr: np.ndarray, index: int) -> Optional[float]:
    """Value of `arr` at `index` as a float, None for NaN or out of range."""
    if index < 0 or index >= len(arr) or np.isnan(arr[index]):
        return None
    return float(arr[index])
