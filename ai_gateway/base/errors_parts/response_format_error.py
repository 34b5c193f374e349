"""Adapter error raised when a provider reply cannot be parsed."""
from __future__ import annotations

from .adapter_error import AdapterError
from .error_level import ErrorLevel


class ResponseFormatError(AdapterError):
    """Provider returned a body with an unexpected or unparseable shape."""

    default_level_hint = ErrorLevel.RESPONSE


__all__ = ["ResponseFormatError"]
