"""
Indicator Service Implementation

Runs the Quantum Edge or Smart Algo engine for a request and packages the
per-bar records with the signal events derived from them.
NO I/O - pure computation over the candles in the request.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

from fxsignal.core.config import settings
from fxsignal.schemas.indicators import (
    IndicatorName,
    QuantumEdgeConfig,
    QuantumEdgeResult,
    SignalEvent,
    SignalOutput,
    SignalRequest,
    SignalType,
    SmartAlgoConfig,
    SmartAlgoSignal,
)
from fxsignal.services.base import CalculationError, ServiceError, ValidationError
from fxsignal.services.indicators.interface import IndicatorServiceInterface
from fxsignal.services.indicators.quantum_edge import calculate_quantum_edge
from fxsignal.services.indicators.smart_algo import calculate_smart_algo

logger = logging.getLogger(__name__)

Record = Union[QuantumEdgeResult, SmartAlgoSignal]


def _signal_type(record: Record) -> SignalType:
    if record.buy_signal:
        return SignalType.BUY
    if record.sell_signal:
        return SignalType.SELL
    return SignalType.NEUTRAL


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Service.

    Configs omitted from a request fall back to the service defaults, which
    come from settings when the service is created by get_indicator_service().
    """

    def __init__(
        self,
        quantum_edge_defaults: Optional[QuantumEdgeConfig] = None,
        smart_algo_defaults: Optional[SmartAlgoConfig] = None,
    ):
        self._quantum_edge_defaults = quantum_edge_defaults or QuantumEdgeConfig()
        self._smart_algo_defaults = smart_algo_defaults or SmartAlgoConfig()

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def validate_input(self, input_data: SignalRequest) -> SignalRequest:
        """Candles must be in non-decreasing timestamp order where timestamps are given."""
        timestamps = [c.timestamp for c in input_data.candles if c.timestamp is not None]
        try:
            ordered = all(a <= b for a, b in zip(timestamps, timestamps[1:]))
        except TypeError as e:
            raise ValidationError(
                self.name,
                "Candle timestamps are not comparable",
                {"symbol": input_data.symbol, "error": str(e)},
            ) from e

        if not ordered:
            raise ValidationError(
                self.name,
                "Candles must be sorted by timestamp",
                {"symbol": input_data.symbol},
            )
        return input_data

    async def execute(self, input_data: SignalRequest) -> SignalOutput:
        """Run the requested indicator."""
        candles = input_data.candles
        warnings = []

        try:
            if input_data.indicator == IndicatorName.QUANTUM_EDGE:
                config = self._quantum_edge_config(input_data)
                results = calculate_quantum_edge(candles, config)
                offset = 0
            else:
                config = self._smart_algo_config(input_data)
                results = calculate_smart_algo(candles, config)
                offset = config.start_index
        except Exception as e:
            raise CalculationError(
                self.name,
                f"{input_data.indicator.value} failed for {input_data.symbol}: {e}",
                {"symbol": input_data.symbol},
            ) from e

        if not results:
            warnings.append(
                f"Insufficient data: {input_data.indicator.value} requires at least "
                f"{config.min_bars_required} candles, got {len(candles)}"
            )

        events = []
        for position, record in enumerate(results):
            signal = _signal_type(record)
            if signal == SignalType.NEUTRAL:
                continue
            index = position + offset
            events.append(
                SignalEvent(
                    index=index,
                    timestamp=candles[index].timestamp,
                    signal=signal,
                    price=candles[index].close,
                )
            )

        return SignalOutput(
            symbol=input_data.symbol,
            indicator=input_data.indicator,
            timeframe=input_data.timeframe,
            generated_at=datetime.now(timezone.utc),
            bars_processed=len(candles),
            results=results,
            events=events,
            latest_signal=_signal_type(results[-1]) if results else SignalType.NEUTRAL,
            warnings=warnings,
        )

    async def calculate_batch(
        self, requests: list[SignalRequest]
    ) -> dict[str, SignalOutput]:
        """Run every request, skipping (and logging) the ones that fail."""
        outputs = {}

        for request in requests:
            try:
                outputs[request.symbol] = await self.run(request)
            except ServiceError as e:
                # Log error but continue with other symbols
                logger.error(f"Error calculating {request.indicator.value} for {request.symbol}: {e}")

        return outputs

    def _quantum_edge_config(self, request: SignalRequest) -> QuantumEdgeConfig:
        if "quantum_edge" in request.model_fields_set:
            return request.quantum_edge
        return self._quantum_edge_defaults

    def _smart_algo_config(self, request: SignalRequest) -> SmartAlgoConfig:
        if "smart_algo" in request.model_fields_set:
            return request.smart_algo
        return self._smart_algo_defaults

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance with settings defaults."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService(
            quantum_edge_defaults=settings.quantum_edge_defaults(),
            smart_algo_defaults=settings.smart_algo_defaults(),
        )
    return _service_instance
