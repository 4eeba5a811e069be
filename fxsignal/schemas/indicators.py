"""
CONTRACT 2: Indicator Engine

Input: candles + indicator configuration
Output: one record per bar (Quantum Edge) or per evaluated bar (Smart Algo)

Configs and results accept/serialize camelCase keys as well, matching the
option objects and records the chart and alert front end works with.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from fxsignal.schemas.market import Candle, Timeframe


# =============================================================================
# ENUMS
# =============================================================================


class IndicatorName(str, Enum):
    QUANTUM_EDGE = "quantum_edge"
    SMART_ALGO = "smart_algo"


class ZoneColor(str, Enum):
    GREEN = "green"
    RED = "red"
    BLUE = "blue"


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


# =============================================================================
# INPUT: Indicator configurations
# =============================================================================


class QuantumEdgeConfig(BaseModel):
    """Quantum Edge FX parameters. Immutable for a run."""

    length: int = Field(default=14, ge=1, description="Base sensitivity")
    predictive_length: int = Field(default=28, ge=1, description="Predictive strength")
    volatility_threshold: float = Field(default=0.75, description="ATR ratio gate")
    smooth_factor: float = Field(default=2.0, gt=0, description="Predictive wave smoothing")
    use_adaptive: bool = Field(default=True, description="RSI-driven lookback")
    show_zones: bool = True
    show_signals: bool = True

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel

    @property
    def min_bars_required(self) -> int:
        # 14: ATR length, 20: SMA of ATR length
        return max(self.length, self.predictive_length, 14, 20)


class SmartAlgoConfig(BaseModel):
    """Smart Algo signal parameters."""

    trend_length: int = Field(default=21, ge=1)
    ema_filter_length: int = Field(default=34, ge=1)
    atr_length: int = Field(default=14, ge=1)
    volatility_factor: float = Field(default=1.5, gt=0)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    adx_length: int = Field(default=14, ge=1)
    adx_threshold: float = Field(default=20, ge=0, description="Chop filter threshold")

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel

    @property
    def min_bars_required(self) -> int:
        return max(
            self.ema_filter_length,
            self.trend_length,
            self.atr_length,
            self.macd_fast,
            self.macd_slow,
            self.adx_length,
        )

    @property
    def start_index(self) -> int:
        """First bar index that gets a signal record."""
        return max(
            self.ema_filter_length, self.atr_length, self.macd_slow, self.adx_length, 2
        ) - 1


# =============================================================================
# OUTPUT: per-bar records
# =============================================================================


class QuantumEdgeResult(BaseModel):
    """Quantum Edge values for one bar. All None during warm-up."""

    timestamp: Optional[Union[datetime, int, str]] = None
    quantum_edge_smoothed: Optional[float] = None
    trend_direction: Optional[float] = None
    buy_signal: bool = False
    sell_signal: bool = False
    zone_color: Optional[ZoneColor] = None
    upper_zone: Optional[float] = None
    lower_zone: Optional[float] = None

    # Diagnostics
    normalized_momentum: Optional[float] = None
    volatility_ratio: Optional[float] = None
    trend_strength: Optional[float] = None

    class Config:
        populate_by_name = True
        alias_generator = to_camel


class SmartAlgoSignal(BaseModel):
    """Smart Algo evaluation of one bar."""

    timestamp: Optional[Union[datetime, int, str]] = None
    buy_signal: bool
    sell_signal: bool
    confidence: int = Field(..., ge=0, le=4)
    ema_filter: Optional[float] = None
    adx: Optional[float] = None
    atr: Optional[float] = None
    chop: bool
    bullish_trend: bool
    bearish_trend: bool
    high_volatility: bool
    momentum_buy: bool
    momentum_sell: bool

    class Config:
        populate_by_name = True
        alias_generator = to_camel


# =============================================================================
# SERVICE CONTRACT
# =============================================================================


class SignalRequest(BaseModel):
    """
    Request for a signal calculation.
    Sent by: chart overlay / alert evaluation callers
    Received by: Indicator Service
    """

    symbol: str = Field(..., description="Instrument, e.g. 'EURUSD'")
    timeframe: Timeframe = Timeframe.H1
    indicator: IndicatorName = IndicatorName.QUANTUM_EDGE
    candles: list[Candle] = Field(..., min_length=1)
    quantum_edge: QuantumEdgeConfig = Field(default_factory=QuantumEdgeConfig)
    smart_algo: SmartAlgoConfig = Field(default_factory=SmartAlgoConfig)


class SignalEvent(BaseModel):
    """A bar on which a buy or sell signal fired."""

    index: int = Field(..., ge=0, description="Bar index in the request candles")
    timestamp: Optional[Union[datetime, int, str]] = None
    signal: SignalType
    price: float


class SignalOutput(BaseModel):
    """
    Complete signal calculation for a symbol.
    Returned by: Indicator Service
    """

    symbol: str
    indicator: IndicatorName
    timeframe: Timeframe
    generated_at: datetime
    bars_processed: int = Field(..., ge=0)
    results: list[Union[QuantumEdgeResult, SmartAlgoSignal]] = Field(default_factory=list)
    events: list[SignalEvent] = Field(default_factory=list)
    latest_signal: SignalType = SignalType.NEUTRAL
    warnings: list[str] = Field(default_factory=list)
