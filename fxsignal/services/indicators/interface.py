"""
Indicator Service Interface

Defines the contract for the signal calculation layer.
"""

from abc import abstractmethod

from fxsignal.services.base import BaseService
from fxsignal.schemas.indicators import SignalRequest, SignalOutput


class IndicatorServiceInterface(BaseService[SignalRequest, SignalOutput]):
    """
    Indicator Service Contract.

    INPUT: SignalRequest
        - symbol, timeframe, candles
        - which indicator to run and its configuration

    OUTPUT: SignalOutput
        - per-bar records from the chosen engine
        - buy/sell events and the latest signal
        - warnings (e.g. not enough candles)
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: SignalRequest) -> SignalOutput:
        """Run the requested indicator over the request candles."""
        pass

    @abstractmethod
    async def calculate_batch(
        self, requests: list[SignalRequest]
    ) -> dict[str, SignalOutput]:
        """
        Run several requests, keyed by symbol.

        A request that fails is logged and left out of the result; the
        others are still returned.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
