"""
Incremental Indicator Primitives

Bar-by-bar counterparts of the array functions in `calculations`. Each
object consumes one value per `update` call and returns the indicator value
for that point, or None while its lookback is not yet satisfied.

Seeding and recursion follow `calculations` exactly (EMA seeded with the SMA
of its first `period` inputs, Wilder smoothing for RSI and ATR), so a value
produced here matches the array implementation at the same index.
"""

import math
from collections import deque
from itertools import islice
from typing import Optional

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (JavaScript Math.round)."""
    return int(math.floor(value + 0.5))


class IncrementalEMA:
    """Exponential moving average with O(1) per-value update."""

    __slots__ = ("period", "multiplier", "value", "_count", "_seed_sum")

    def __init__(self, period: int) -> None:
        if period < 1:
            raise ValueError(f"EMA period must be >= 1, got {period}")
        self.period = period
        self.multiplier = 2 / (period + 1)
        self.value: Optional[float] = None
        self._count = 0
        self._seed_sum = 0.0

    @property
    def ready(self) -> bool:
        return self.value is not None

    def update(self, x: float) -> Optional[float]:
        self._count += 1
        if self._count < self.period:
            self._seed_sum += x
            return None
        if self._count == self.period:
            self._seed_sum += x
            self.value = self._seed_sum / self.period
        else:
            self.value = (x - self.value) * self.multiplier + self.value
        return self.value


class EMAChain:
    """
    Stacked EMAs where each stage smooths the output of the previous one.

    A stage only receives input once the stage before it is seeded, which is
    the same as running `ema` over the (NaN-stripped) output array of the
    previous stage.
    """

    __slots__ = ("periods", "consumed", "value", "_stages")

    def __init__(self, periods: tuple[int, ...]) -> None:
        self.periods = periods
        self.consumed = 0
        self.value: Optional[float] = None
        self._stages = [IncrementalEMA(p) for p in periods]

    def update(self, x: float) -> Optional[float]:
        self.consumed += 1
        value: Optional[float] = x
        for stage in self._stages:
            value = stage.update(value)
            if value is None:
                return None
        self.value = value
        return value


class AdaptiveEMA:
    """
    EMA chain over a growing series whose periods may change from bar to bar.

    The series is stored and one `EMAChain` is kept per distinct period
    tuple. A chain is brought up to date lazily when its periods are asked
    for, so the value returned always equals a full recomputation of that
    chain over the whole series. A fixed period costs O(1) per bar; each new
    period replays the series once.
    """

    def __init__(self) -> None:
        self.history: list[float] = []
        self._chains: dict[tuple[int, ...], EMAChain] = {}

    def __len__(self) -> int:
        return len(self.history)

    def append(self, x: float) -> None:
        self.history.append(x)

    def value(self, periods: tuple[int, ...]) -> Optional[float]:
        chain = self._chains.get(periods)
        if chain is None:
            chain = self._chains[periods] = EMAChain(periods)
        for x in islice(self.history, chain.consumed, None):
            chain.update(x)
        return chain.value


class RollingWindow:
    """Fixed-size trailing window with SMA, WMA and population stdev."""

    __slots__ = ("size", "_buffer", "_sum")

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Window size must be >= 1, got {size}")
        self.size = size
        self._buffer: deque[float] = deque(maxlen=size)
        self._sum = 0.0

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def full(self) -> bool:
        return len(self._buffer) == self.size

    def append(self, x: float) -> None:
        if self.full:
            self._sum -= self._buffer[0]
        self._buffer.append(x)
        self._sum += x

    def _array(self) -> np.ndarray:
        return np.fromiter(self._buffer, dtype=float, count=len(self._buffer))

    def mean(self) -> Optional[float]:
        """Running-sum SMA over the window, None until full."""
        if not self.full:
            return None
        return self._sum / self.size

    def wma(self) -> Optional[float]:
        """Linearly weighted average, newest value weighted `size`."""
        if not self.full:
            return None
        weights = np.arange(1, self.size + 1)
        return float(np.sum(self._array() * weights) / np.sum(weights))

    def pstdev(self) -> Optional[float]:
        if not self.full:
            return None
        return float(np.std(self._array()))


class WilderRSI:
    """Relative Strength Index with Wilder smoothing."""

    __slots__ = ("period", "_prev", "_count", "_avg_gain", "_avg_loss")

    def __init__(self, period: int = 14) -> None:
        self.period = period
        self._prev: Optional[float] = None
        self._count = 0
        self._avg_gain = 0.0
        self._avg_loss = 0.0

    def update(self, close: float) -> Optional[float]:
        if self._prev is None:
            self._prev = close
            return None

        delta = close - self._prev
        self._prev = close
        gain = delta if delta > 0 else 0.0
        loss = -delta if delta < 0 else 0.0
        self._count += 1

        if self._count < self.period:
            self._avg_gain += gain
            self._avg_loss += loss
            return None
        if self._count == self.period:
            self._avg_gain = (self._avg_gain + gain) / self.period
            self._avg_loss = (self._avg_loss + loss) / self.period
        else:
            self._avg_gain = (self._avg_gain * (self.period - 1) + gain) / self.period
            self._avg_loss = (self._avg_loss * (self.period - 1) + loss) / self.period

        if self._avg_loss == 0:
            return 100.0
        rs = self._avg_gain / self._avg_loss
        return 100 - (100 / (1 + rs))


class WilderATR:
    """Average True Range; the first bar's true range is high - low."""

    __slots__ = ("period", "value", "_prev_close", "_count", "_seed_sum")

    def __init__(self, period: int = 14) -> None:
        self.period = period
        self.value: Optional[float] = None
        self._prev_close: Optional[float] = None
        self._count = 0
        self._seed_sum = 0.0

    def update(self, high: float, low: float, close: float) -> Optional[float]:
        if self._prev_close is None:
            tr = high - low
        else:
            tr = max(
                high - low,
                abs(high - self._prev_close),
                abs(low - self._prev_close),
            )
        self._prev_close = close
        self._count += 1

        if self._count < self.period:
            self._seed_sum += tr
            return None
        if self._count == self.period:
            self.value = (self._seed_sum + tr) / self.period
        else:
            self.value = (self.value * (self.period - 1) + tr) / self.period
        return self.value
