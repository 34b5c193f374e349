"""Shared base for adapters speaking JSON over HTTP.

Purpose:
    Centralize the request path every HTTP adapter follows: resolve the
    per-call timeout, report the request and the reply through the bound
    ``RequestLogger``, and turn transport faults, HTTP error statuses and
    unparseable bodies into raw :class:`AdapterError` failures.

External dependencies:
    - ``httpx`` (client built by :func:`build_http_client`).

Failure mapping:
    - ``httpx.TimeoutException``: ``AdapterError`` status 0, message
      "Connection timed out: ...".
    - other ``httpx.TransportError``: status 0, "API endpoint unreachable: ...".
    - HTTP status >= 400: ``AdapterError`` with the status, the payload's
      error message and its structured ``code``/``type`` when present.
    - 2xx with a non-JSON body: ``ResponseFormatError``.

Logging:
    The reply is recorded without an error string; the single error entry of
    a failed call is written where the failure is classified.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..errors import AdapterError, ResponseFormatError
from ..interfaces import ProviderAdapter
from ..logging import get_logger
from ..timeouts import DEFAULT_INVOKE_TIMEOUT_SECONDS, resolve_timeout
from .client import build_http_client

_MAX_ERROR_TEXT = 300


class JsonHttpAdapter(ProviderAdapter):
    """Adapter base owning one ``httpx.Client`` for its provider."""

    default_base_url: str = ""
    default_model: Optional[str] = None

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        request_logger=None,
    ) -> None:
        super().__init__(request_logger=request_logger)
        self._api_key = api_key
        self._base_url = (base_url or self.default_base_url).rstrip("/")
        self._model = model or self.default_model
        self._default_timeout = float(timeout_seconds or DEFAULT_INVOKE_TIMEOUT_SECONDS)
        self._client = build_http_client(
            self._base_url,
            headers=headers,
            timeout=self._default_timeout,
            transport=transport,
        )
        self._logger = get_logger(f"ai_gateway.{self.provider_name}")

    @property
    def model(self) -> Optional[str]:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    def _auth_headers(self) -> Dict[str, str]:
        """Credential headers for each request (redacted by the logger)."""
        return {}

    def _model_for(self, options: Optional[Mapping[str, Any]]) -> Optional[str]:
        if options and options.get("model"):
            return str(options["model"])
        return self._model

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        payload: Any = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            AdapterError: transport failure or HTTP error status.
            ResponseFormatError: success status with a non-JSON body.
        """
        timeout = resolve_timeout(options, self._default_timeout)
        headers = {"Content-Type": "application/json", **self._auth_headers()}
        self.request_logger.log_request(
            f"{method.upper()} {self._base_url}{path}",
            headers,
            payload,
            {"timeout": timeout},
            provider=self.provider_name,
        )
        started = time.monotonic()
        try:
            response = self._client.request(
                method,
                path,
                json=payload,
                headers=headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as exc:
            raise AdapterError(f"Connection timed out: {exc}", status_code=0, provider_code="timeout") from exc
        except httpx.TransportError as exc:
            raise AdapterError(
                f"API endpoint unreachable: {exc}", status_code=0, provider_code="unreachable"
            ) from exc
        duration = time.monotonic() - started
        body = _decode_body(response)
        self.request_logger.log_response(
            response.status_code,
            dict(response.headers),
            body,
            duration,
            provider=self.provider_name,
        )
        if response.is_error:
            message, code = _extract_error(body, response.status_code)
            raise AdapterError(message, status_code=response.status_code, provider_code=code)
        if not isinstance(body, (dict, list)):
            raise ResponseFormatError(
                f"Invalid response format: expected JSON, got {str(body)[:_MAX_ERROR_TEXT]!r}"
            )
        return body

    def close(self) -> None:
        self._client.close()


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _extract_error(body: Any, status_code: int) -> Tuple[str, Optional[str]]:
    """Return ``(message, structured_code)`` from an error payload.

    Handles ``{"error": {"message", "code"|"type"}}`` (OpenAI, Anthropic),
    ``{"error": "text"}`` (HuggingFace) and plain-text bodies.
    """
    message: Optional[str] = None
    code: Optional[str] = None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            message = err.get("message")
            code = err.get("code") or err.get("type")
        elif isinstance(err, str):
            message = err
        if message is None and isinstance(body.get("message"), str):
            message = body["message"]
        if code is None and isinstance(body.get("type"), str) and body.get("type") != "error":
            code = body["type"]
    elif isinstance(body, str) and body.strip():
        message = body.strip()[:_MAX_ERROR_TEXT]
    if not message:
        message = f"HTTP error {status_code}"
    return str(message), (str(code) if code else None)


__all__ = ["JsonHttpAdapter"]
