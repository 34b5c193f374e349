"""
Single exception type raised by the service manager on classified failures.

All five failure tiers travel through this one type; callers branch on
``exc.level`` or ``exc.retry_recommended`` instead of catching per-tier
subclasses.
"""
from __future__ import annotations

from .classified_error import ClassifiedError
from .error_level import ErrorLevel


class GatewayError(Exception):
    """Raised when a provider operation fails and has been classified.

    Attributes:
        error: The :class:`ClassifiedError` describing the failure.
        operation: Operation name that was being invoked, when known.
    """

    def __init__(self, error: ClassifiedError, operation: str | None = None) -> None:
        super().__init__(error.message or error.description)
        self.error = error
        self.operation = operation

    @property
    def level(self) -> ErrorLevel:
        return self.error.level

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def provider(self) -> str:
        return self.error.provider

    @property
    def retry_recommended(self) -> bool:
        return self.error.retry_recommended

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, level, code, and message."""
        return f"{self.error.provider} [{self.error.level_name}] {self.error.code}: {self.error.message}"


__all__ = ["GatewayError"]
