"""
fxsignal Schema Contracts

This module defines the contracts between the market data supplier, the
indicator engines and their consumers (chart overlays, alert evaluation).
"""

from fxsignal.schemas.market import (
    Candle,
    Timeframe,
)
from fxsignal.schemas.indicators import (
    IndicatorName,
    ZoneColor,
    SignalType,
    QuantumEdgeConfig,
    SmartAlgoConfig,
    QuantumEdgeResult,
    SmartAlgoSignal,
    SignalRequest,
    SignalEvent,
    SignalOutput,
)

__all__ = [
    # Market
    "Candle",
    "Timeframe",
    # Indicators
    "IndicatorName",
    "ZoneColor",
    "SignalType",
    "QuantumEdgeConfig",
    "SmartAlgoConfig",
    "QuantumEdgeResult",
    "SmartAlgoSignal",
    "SignalRequest",
    "SignalEvent",
    "SignalOutput",
]
