"""
fxsignal - indicator signal engine for forex candles.
"""

from fxsignal.services.indicators import calculate_quantum_edge, calculate_smart_algo

__version__ = "0.1.0"

__all__ = ["calculate_quantum_edge", "calculate_smart_algo", "__version__"]
