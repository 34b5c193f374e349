"""Cancellation error type.

Defines the public ``CancelledError`` used to signal that a caller cancelled
an in-flight provider call or connection test.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from classified failures: the service manager logs it and
    re-raises it unchanged rather than wrapping it in a ``GatewayError``.
    """

__all__ = ["CancelledError"]
