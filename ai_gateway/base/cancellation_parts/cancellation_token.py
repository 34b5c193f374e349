"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the service manager, the
connection tester and the cancellable HTTP transport. Besides polling via
``raise_if_cancelled``, callbacks registered with ``on_cancel`` fire once on
cancellation so blocked transport reads can be interrupted.
"""

from __future__ import annotations

import contextlib
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel``, ``on_cancel`` and ``raise_if_cancelled``.
    Child tokens inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
        for callback in callbacks:
            # a failing callback must not prevent the others from running
            with contextlib.suppress(Exception):
                callback()
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run on cancellation.

        Runs immediately when the token is already cancelled. Returns a
        function that unregisters the callback.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                run_now = False
            else:
                run_now = True
        if run_now:
            callback()

        def _unregister() -> None:
            with self._lock:
                with contextlib.suppress(ValueError):
                    self._state.callbacks.remove(callback)

        return _unregister

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
