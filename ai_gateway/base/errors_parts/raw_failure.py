"""Raw failure facts extracted from an exception prior to classification."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_level import ErrorLevel


@dataclass(frozen=True)
class RawFailure:
    """Inputs for the error classifier derived from one exception.

    Attributes:
        status_code: Extracted status (``0`` for transport faults) or ``None``.
        message: Failure text.
        provider_code: Structured provider error code, if any.
        level_hint: Tier to use when ``status_code`` is ``None``.
    """

    status_code: Optional[int]
    message: str
    provider_code: Optional[str] = None
    level_hint: Optional[ErrorLevel] = None


__all__ = ["RawFailure"]
