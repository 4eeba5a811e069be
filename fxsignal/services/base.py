"""
Base Service Interface

Services take a validated pydantic request, do their work and return a
pydantic response. `run` is the entry point callers use: it validates,
executes and logs how long the call took.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """Base class for all services."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Execute the service's main function on already validated input.

        Raises:
            ServiceError: If execution fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    async def validate_input(self, input_data: InputT) -> InputT:
        """
        Checks beyond what the pydantic schema enforces.
        Returns the (possibly normalized) input or raises ValidationError.
        """
        return input_data

    async def run(self, input_data: InputT) -> OutputT:
        """Validate, then execute."""
        started = time.perf_counter()
        validated = await self.validate_input(input_data)
        output = await self.execute(validated)
        latency_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"{self.name} completed in {latency_ms:.1f}ms")
        return output


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Request failed service-level validation."""
    pass


class CalculationError(ServiceError):
    """An indicator engine failed on input that passed validation."""
    pass
