"""Connection test outcome types returned by the ``ConnectionTester``."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..errors import ClassifiedError


@dataclass(frozen=True)
class TestResult:
    """Outcome of one ``ConnectionTester.run_test`` call.

    Attributes:
        success: Whether any attempt succeeded.
        message: Outcome text (success message or last failure).
        latency_ms: Latency of the last attempt in milliseconds.
        provider_status: Provider-reported details of the last attempt.
        timestamp: UTC completion time.
        attempts: Number of ``test_connection`` calls performed.
        elapsed_ms: Total duration including backoff sleeps.
        error: Classification of the last failure, when it raised.
    """

    __test__ = False  # not a pytest test class

    success: bool
    message: str
    latency_ms: float
    timestamp: datetime
    attempts: int
    elapsed_ms: float = 0.0
    provider_status: Dict[str, Any] = field(default_factory=dict)
    error: Optional[ClassifiedError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "latency_ms": round(self.latency_ms, 2),
            "elapsed_ms": round(self.elapsed_ms, 2),
            "attempts": self.attempts,
            "provider_status": dict(self.provider_status),
            "timestamp": self.timestamp.isoformat(),
            "error": self.error.to_dict() if self.error else None,
        }


@dataclass(frozen=True)
class CapabilityCheck:
    """Support status of one content operation."""

    supported: bool
    label: str
    tested: bool = False
    success: bool = False
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "supported": self.supported,
            "label": self.label,
            "tested": self.tested,
            "success": self.success,
            "message": self.message,
        }


__all__ = ["TestResult", "CapabilityCheck"]
