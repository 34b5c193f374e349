"""Outcome of a single ``test_connection`` call on an adapter."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ConnectionStatus:
    """Connection probe result.

    Attributes:
        success: Whether the provider answered as expected.
        message: Short human-readable outcome.
        provider_status: Provider-reported details (HTTP status, model count, ...).
    """

    success: bool
    message: str = ""
    provider_status: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message, "provider_status": dict(self.provider_status)}


__all__ = ["ConnectionStatus"]
