"""
Market Data Ingestion

Live candles come from an external market-data provider; this package only
ships the mock generator used for development, demos and tests.
"""

from fxsignal.services.data_ingestion.mock_data import (
    generate_mock_candles,
    get_base_price,
    SYMBOL_BASE_PRICES,
)

__all__ = [
    "generate_mock_candles",
    "get_base_price",
    "SYMBOL_BASE_PRICES",
]
