"""
Failure description helpers feeding the error classifier.

Turns an arbitrary exception into :class:`RawFailure` facts: status code,
message, structured provider code and level hint. Adapter errors carry these
explicitly; other exceptions are probed for HTTP status attributes, and
timeouts or transport faults map to status ``0`` (the Network tier).
"""
from __future__ import annotations

from typing import Optional

import httpx

from .adapter_error import AdapterError
from .error_level import ErrorLevel
from .raw_failure import RawFailure


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _message_of(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__


def describe_failure(exc: BaseException) -> RawFailure:
    """Describe an exception as classifier inputs.

    Precedence:
        1. ``AdapterError`` passthrough of its explicit fields.
        2. Timeouts (``TimeoutError``, ``httpx.TimeoutException``) as status 0.
        3. Transport and connection faults as status 0.
        4. HTTP status attributes.
        5. ``ValueError`` without status (JSON decoding and similar) hinted
           at the Response tier.
        6. No status; the classifier falls back to the Provider tier.
    """
    if isinstance(exc, AdapterError):
        return RawFailure(
            status_code=exc.status_code,
            message=exc.message,
            provider_code=exc.provider_code,
            level_hint=exc.level_hint,
        )
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return RawFailure(status_code=0, message=f"Connection timed out: {_message_of(exc)}")
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return RawFailure(status_code=0, message=f"API endpoint unreachable: {_message_of(exc)}")
    status = _extract_status(exc)
    if isinstance(exc, ValueError) and status is None:
        return RawFailure(status_code=None, message=_message_of(exc), level_hint=ErrorLevel.RESPONSE)
    return RawFailure(status_code=status, message=_message_of(exc))


__all__ = [
    "describe_failure",
    "_extract_status",
]
