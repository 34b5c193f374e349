"""Cancellation-aware httpx transport.

Purpose:
    Let a :class:`CancellationToken` reach the underlying HTTP call instead of
    only the waiting caller. The token is bound to the current context with
    :func:`bind_cancellation`; :class:`CancellableTransport` reads it for each
    request.

External dependencies:
    - ``httpx`` transport and byte stream base classes.

Cancellation semantics:
    - A cancelled token fails the request before it is sent.
    - While the response body is read, the token is checked between chunks,
      and cancelling closes the response stream so a blocked read returns.
    - Connect and write phases are bounded by the per-call timeout only.
"""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import Callable, Iterator, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError

_CURRENT_TOKEN: ContextVar[Optional[CancellationToken]] = ContextVar("ai_gateway_cancel_token", default=None)


@contextlib.contextmanager
def bind_cancellation(token: Optional[CancellationToken]) -> Iterator[None]:
    """Bind ``token`` to HTTP calls made in the current context.

    Raises ``CancelledError`` immediately when the token is already cancelled.
    ``None`` leaves the current binding untouched.
    """
    if token is None:
        yield
        return
    token.raise_if_cancelled()
    reset = _CURRENT_TOKEN.set(token)
    try:
        yield
    finally:
        _CURRENT_TOKEN.reset(reset)


def current_cancellation() -> Optional[CancellationToken]:
    """Return the token bound to the current context, if any."""
    return _CURRENT_TOKEN.get()


class _CancellableStream(httpx.SyncByteStream):
    def __init__(
        self,
        inner: httpx.SyncByteStream,
        token: CancellationToken,
        unregister: Callable[[], None],
    ) -> None:
        self._inner = inner
        self._token = token
        self._unregister = unregister

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._inner:
            self._token.raise_if_cancelled()
            yield chunk
        self._token.raise_if_cancelled()

    def close(self) -> None:
        self._unregister()
        self._inner.close()


class CancellableTransport(httpx.BaseTransport):
    """Transport wrapper observing the context-bound cancellation token."""

    def __init__(self, inner: Optional[httpx.BaseTransport] = None) -> None:
        self._inner = inner if inner is not None else httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        token = _CURRENT_TOKEN.get()
        if token is None:
            return self._inner.handle_request(request)
        token.raise_if_cancelled()
        response = self._inner.handle_request(request)
        stream = response.stream
        if not isinstance(stream, httpx.SyncByteStream):  # pragma: no cover - async streams are not used
            return response

        def _close_stream() -> None:
            with contextlib.suppress(Exception):
                stream.close()

        unregister = token.on_cancel(_close_stream)
        if token.cancelled:
            unregister()
            raise CancelledError(token.reason or "operation cancelled")
        return httpx.Response(
            status_code=response.status_code,
            headers=response.headers,
            stream=_CancellableStream(stream, token, unregister),
            extensions=response.extensions,
            request=request,
        )

    def close(self) -> None:
        self._inner.close()


__all__ = ["CancellableTransport", "bind_cancellation", "current_cancellation"]
