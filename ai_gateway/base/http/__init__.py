"""HTTP utilities package for adapters.

Exposes the per-adapter client builder and the cancellation binding. The
JSON adapter base lives in ``ai_gateway.base.http.json_adapter``.
"""

from .client import build_http_client
from .transport import CancellableTransport, bind_cancellation, current_cancellation

__all__ = ["build_http_client", "CancellableTransport", "bind_cancellation", "current_cancellation"]
