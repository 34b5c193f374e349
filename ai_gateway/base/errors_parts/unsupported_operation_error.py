"""Sentinel error for operations an adapter does not implement."""
from __future__ import annotations

from .adapter_error import AdapterError
from .error_level import ErrorLevel


class UnsupportedOperationError(AdapterError):
    """Raised by the base adapter for every operation a provider does not override."""

    default_level_hint = ErrorLevel.REQUEST

    def __init__(self, provider: str, operation: str) -> None:
        super().__init__(f"Unsupported operation: {operation} is not available for provider {provider}")
        self.provider = provider
        self.operation = operation


__all__ = ["UnsupportedOperationError"]
