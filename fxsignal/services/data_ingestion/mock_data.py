"""
Mock Data Generator

Generates realistic mock forex candles for development and testing.
A seed makes the series reproducible.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from fxsignal.schemas.market import Candle, Timeframe


# Base prices for common pairs
SYMBOL_BASE_PRICES = {
    "EURUSD": 1.0850,
    "GBPUSD": 1.2650,
    "USDJPY": 149.50,
    "USDCHF": 0.8820,
    "AUDUSD": 0.6550,
    "USDCAD": 1.3520,
    "NZDUSD": 0.6100,
    "EURJPY": 162.20,
    "GBPJPY": 189.10,
    "XAUUSD": 2035.0,
}

# Quote decimals per pair (JPY crosses and gold quote fewer)
SYMBOL_DECIMALS = {
    "USDJPY": 3,
    "EURJPY": 3,
    "GBPJPY": 3,
    "XAUUSD": 2,
}

# Timeframe to milliseconds
TIMEFRAME_MS = {
    Timeframe.M1: 60_000,
    Timeframe.M5: 300_000,
    Timeframe.M15: 900_000,
    Timeframe.M30: 1_800_000,
    Timeframe.H1: 3_600_000,
    Timeframe.H4: 14_400_000,
    Timeframe.D1: 86_400_000,
    Timeframe.W1: 604_800_000,
}


def get_base_price(symbol: str, rng: Optional[random.Random] = None) -> float:
    """Get base price for a pair; unknown pairs get a random price near 1."""
    if symbol in SYMBOL_BASE_PRICES:
        return SYMBOL_BASE_PRICES[symbol]
    rng = rng or random.Random()
    return 0.5 + rng.random()


def generate_mock_candles(
    symbol: str,
    timeframe: Timeframe = Timeframe.H1,
    count: int = 500,
    end_time: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> list[Candle]:
    """
    Generate `count` time-ordered mock candles ending at `end_time`.

    Random walk with a per-bar range of about 0.2% of price.
    """
    rng = random.Random(seed)
    if end_time is None:
        end_time = datetime.now(timezone.utc)

    candles = []
    interval = timedelta(milliseconds=TIMEFRAME_MS[timeframe])
    decimals = SYMBOL_DECIMALS.get(symbol, 5)
    price = get_base_price(symbol, rng)
    volatility = price * 0.002

    timestamp = end_time - interval * count

    for _ in range(count):
        # Random walk
        change = (rng.random() - 0.5) * volatility

        open_price = price
        close_price = open_price + change
        high_price = max(open_price, close_price) + rng.random() * volatility * 0.5
        low_price = min(open_price, close_price) - rng.random() * volatility * 0.5

        candles.append(
            Candle(
                timestamp=timestamp,
                open=round(open_price, decimals),
                high=round(high_price, decimals),
                low=round(low_price, decimals),
                close=round(close_price, decimals),
                volume=rng.randint(100, 5_000),
            )
        )

        price = close_price
        timestamp += interval

    return candles
