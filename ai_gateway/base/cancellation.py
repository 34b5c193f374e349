"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``ai_gateway.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is passed to ``ServiceManager.invoke`` and
  ``ConnectionTester.run_test``; the HTTP layer observes it through
  ``ai_gateway.base.http.bind_cancellation`` so cancellation reaches the
  underlying transport call, not only the waiting caller.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
