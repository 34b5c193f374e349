"""
Failure tier enumeration for classified gateway errors.

Levels are ordered by where in the call lifecycle the fault originates:
transport first, response parsing last. Integer values are part of the
public contract (dashboards and persisted diagnostics key on them).
"""
from __future__ import annotations

from enum import IntEnum


class ErrorLevel(IntEnum):
    """Enumerated failure tiers used by the error classifier."""

    NETWORK = 1
    AUTH = 2
    REQUEST = 3
    PROVIDER = 4
    RESPONSE = 5

    @property
    def label(self) -> str:
        """Human-readable tier label (e.g. ``"Network/Connection"``)."""
        return _LABELS[self]


_LABELS = {
    ErrorLevel.NETWORK: "Network/Connection",
    ErrorLevel.AUTH: "Authentication/Authorization",
    ErrorLevel.REQUEST: "Request Format/Validation",
    ErrorLevel.PROVIDER: "Provider-Specific",
    ErrorLevel.RESPONSE: "Response Processing",
}


__all__ = ["ErrorLevel"]
