"""
CONTRACT 1: Market Data

Candles consumed by the indicator engines. Candles are supplied by an
external market-data provider (or the mock generator) already time-ordered.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


# =============================================================================
# Candle
# =============================================================================


class Candle(BaseModel):
    """
    Single OHLC bar.

    `timestamp` is an opaque ordering key carried through to every result
    record; engines never interpret it.
    """

    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    timestamp: Optional[Union[datetime, int, str]] = None
    volume: float = Field(default=0, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "open": 1.0852,
                "high": 1.0861,
                "low": 1.0847,
                "close": 1.0858,
                "timestamp": "2024-02-04T10:00:00Z",
            }
        }
