"""
Raw adapter failure type.

Adapters raise ``AdapterError`` (or a subclass) for every failure they
detect. The exception carries only raw facts; classification happens once,
in the service manager.
"""
from __future__ import annotations

from typing import Optional

from .error_level import ErrorLevel


class AdapterError(Exception):
    """Unclassified failure surfaced by a provider adapter.

    Attributes:
        message: Failure text as reported by the provider or transport.
        status_code: HTTP status when a response was received, ``0`` for
            transport failures, ``None`` when no status applies.
        provider_code: Structured error code from the provider payload
            (e.g. ``"insufficient_quota"``), when available.
        level_hint: Failure tier to use when ``status_code`` is ``None``.
    """

    default_level_hint: Optional[ErrorLevel] = None

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        provider_code: Optional[str] = None,
        level_hint: Optional[ErrorLevel] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.provider_code = provider_code
        self.level_hint = level_hint if level_hint is not None else self.default_level_hint


__all__ = ["AdapterError"]
