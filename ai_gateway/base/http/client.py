"""HTTP client construction for provider adapters.

Purpose:
    Build one ``httpx.Client`` per adapter, wired through
    :class:`CancellableTransport` so context-bound cancellation tokens reach
    the network call. Each adapter owns its client and closes it in
    ``close()``; there is no process-wide pool.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - The client default is the adapter's default timeout; adapters still
      pass an explicit per-call ``timeout`` resolved from operation options.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from ..timeouts import DEFAULT_INVOKE_TIMEOUT_SECONDS
from .transport import CancellableTransport


def build_http_client(
    base_url: Optional[str],
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_INVOKE_TIMEOUT_SECONDS,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return a new ``httpx.Client`` for one adapter.

    Parameters:
        base_url: API base URL; relative request paths resolve against it.
        headers: Static headers sent with every request.
        timeout: Default timeout in seconds.
        transport: Inner transport (``httpx.MockTransport`` in tests); a
            regular ``httpx.HTTPTransport`` when omitted.

    Returns:
        A client whose transport honours :func:`bind_cancellation`.
    """
    kwargs = {
        "headers": dict(headers or {}),
        "timeout": timeout,
        "transport": CancellableTransport(transport),
    }
    if base_url:
        kwargs["base_url"] = base_url
    return httpx.Client(**kwargs)


__all__ = ["build_http_client"]
