"""
Indicator Engine Service

CONTRACT:
    Input:  SignalRequest (candles + indicator configuration)
    Output: SignalOutput

RESPONSIBILITIES:
    - Quantum Edge FX oscillator, trend line, crossover signals and zones
    - Smart Algo confirmed entries with confidence score
    - Buy/sell event extraction for chart overlays and alert evaluation

PURE PYTHON - NumPy for array math, incremental state for bar-by-bar math.
All math is deterministic and reproducible.
"""

from fxsignal.services.indicators.interface import IndicatorServiceInterface
from fxsignal.services.indicators.quantum_edge import QuantumEdgeState, calculate_quantum_edge
from fxsignal.services.indicators.smart_algo import calculate_smart_algo
from fxsignal.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
    "QuantumEdgeState",
    "calculate_quantum_edge",
    "calculate_smart_algo",
]
