"""
Application Configuration

All settings loaded from environment variables (or a .env file).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings

from fxsignal.schemas.indicators import QuantumEdgeConfig, SmartAlgoConfig


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "fxsignal"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Quantum Edge FX defaults
    qefx_length: int = 14
    qefx_predictive_length: int = 28
    qefx_volatility_threshold: float = 0.75
    qefx_smooth_factor: float = 2.0
    qefx_use_adaptive: bool = True
    qefx_show_zones: bool = True
    qefx_show_signals: bool = True

    # Smart Algo defaults
    smart_algo_trend_length: int = 21
    smart_algo_ema_filter_length: int = 34
    smart_algo_atr_length: int = 14
    smart_algo_volatility_factor: float = 1.5
    smart_algo_adx_threshold: float = 20

    # Mock market data
    mock_candle_count: int = 500
    mock_seed: int = 42

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def quantum_edge_defaults(self) -> QuantumEdgeConfig:
        return QuantumEdgeConfig(
            length=self.qefx_length,
            predictive_length=self.qefx_predictive_length,
            volatility_threshold=self.qefx_volatility_threshold,
            smooth_factor=self.qefx_smooth_factor,
            use_adaptive=self.qefx_use_adaptive,
            show_zones=self.qefx_show_zones,
            show_signals=self.qefx_show_signals,
        )

    def smart_algo_defaults(self) -> SmartAlgoConfig:
        return SmartAlgoConfig(
            trend_length=self.smart_algo_trend_length,
            ema_filter_length=self.smart_algo_ema_filter_length,
            atr_length=self.smart_algo_atr_length,
            volatility_factor=self.smart_algo_volatility_factor,
            adx_threshold=self.smart_algo_adx_threshold,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
