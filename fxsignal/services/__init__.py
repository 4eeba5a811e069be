"""
fxsignal Services

Each service has a defined interface (contract) and implementation.
"""

from fxsignal.services.base import BaseService, ServiceError, ValidationError, CalculationError

__all__ = ["BaseService", "ServiceError", "ValidationError", "CalculationError"]
