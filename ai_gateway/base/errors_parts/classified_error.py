"""
Immutable classified error value.

Produced exactly once per failure by the ``ErrorClassifier`` and surfaced to
callers inside :class:`GatewayError`. Fields are stable and JSON friendly via
``to_dict`` so the value can be forwarded to log sinks without adaptation.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from .error_level import ErrorLevel


@dataclass(frozen=True)
class ClassifiedError:
    """Structured, retry-annotated description of a provider failure.

    Attributes:
        provider: Provider id the failure was observed on (e.g. ``"openai"``).
        status_code: HTTP-like status code, ``0`` when none was available.
        level: Failure tier (:class:`ErrorLevel`).
        level_name: Human label of ``level``.
        code: Short machine-readable code (e.g. ``"rate_limit_exceeded"``).
        message: Original failure text.
        description: Human text resolved from level and code.
        retry_recommended: Whether a caller-side retry is advisable.
        recovery_strategy: Operator-facing guidance string.
        timestamp: UTC time of classification.
    """

    provider: str
    status_code: int
    level: ErrorLevel
    level_name: str
    code: str
    message: str
    description: str
    retry_recommended: bool
    recovery_strategy: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping of the error."""
        return {
            "provider": self.provider,
            "status_code": self.status_code,
            "level": int(self.level),
            "level_name": self.level_name,
            "code": self.code,
            "message": self.message,
            "description": self.description,
            "retry_recommended": self.retry_recommended,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp.isoformat(),
        }


__all__ = ["ClassifiedError"]
