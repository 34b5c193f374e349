"""
Request/response/error trail for provider calls.

Purpose
-------
Capture what adapters send and receive, redact secrets at the point of
storage, and keep a bounded most-recent-first ring buffer for diagnosis.

Semantics
---------
- ``log_request`` / ``log_response`` always update ``last_request`` /
  ``last_response``; they append to the buffer only while debug is enabled.
- ``log_response`` with a non-empty ``error`` always routes to ``log_error``.
- ``log_error`` always appends, regardless of debug, and forwards a
  structured event to the sink when one is configured, otherwise a plain
  text line to the fallback diagnostic logger.
- Redaction happens once, before storage; unredacted values are never kept.

Concurrency
-----------
One lock guards the buffer and the last-request/response fields. Insertion
and oldest-first eviction happen in a single ``deque.appendleft`` under that
lock. Sink forwarding happens outside the lock.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional

from ..errors import ClassifiedError
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from .log_entry import ErrorRecord, LogEntry, LogEntryKind, RequestRecord, ResponseRecord
from .redaction import redact_headers, redact_payload

DEFAULT_LOG_CAPACITY = 50
ERROR_LINE_FORMAT = "AI Provider Error (%s): %s (Status: %d)"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestLogger:
    """Bounded, redacting diagnostic trail shared by adapters and diagnostics.

    Args:
        provider: Provider-context name used when a call does not pass one.
        debug: Initial state of the request/response trace gate.
        capacity: Ring buffer size (oldest entries are evicted first).
        sink: Optional structured log sink receiving JSON error events (and
            debug-level request/response events while debug is enabled).
        fallback_logger: Logger receiving plain error lines when no sink is set.
        clock: Timestamp source; injectable for tests.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        *,
        debug: bool = False,
        capacity: int = DEFAULT_LOG_CAPACITY,
        sink: Optional[logging.Logger] = None,
        fallback_logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._provider = provider
        self._debug = bool(debug)
        self._capacity = capacity
        self._sink = sink
        self._fallback = fallback_logger or get_logger("ai_gateway.diagnostics")
        self._clock = clock
        self._lock = threading.Lock()
        self._log: Deque[LogEntry] = deque(maxlen=capacity)
        self._last_request: Optional[RequestRecord] = None
        self._last_response: Optional[ResponseRecord] = None

    # ------------------------------------------------------------------
    # Debug gate

    def enable_debug(self) -> None:
        self._debug = True

    def disable_debug(self) -> None:
        self._debug = False

    def is_debug_enabled(self) -> bool:
        return self._debug

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def provider(self) -> Optional[str]:
        return self._provider

    @property
    def sink(self) -> Optional[logging.Logger]:
        return self._sink

    # ------------------------------------------------------------------
    # Logging operations

    def log_request(
        self,
        endpoint: str,
        headers: Optional[Mapping[str, Any]] = None,
        payload: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        *,
        provider: Optional[str] = None,
    ) -> RequestRecord:
        """Record an outbound call; appended to the buffer only in debug mode."""
        record = RequestRecord(
            endpoint=str(endpoint),
            headers=redact_headers(headers),
            payload=redact_payload(payload),
            options=redact_payload(dict(options or {})),
            timestamp=self._clock(),
            provider=provider or self._provider,
        )
        debug = self._debug
        with self._lock:
            self._last_request = record
            if debug:
                self._log.appendleft(LogEntry(LogEntryKind.REQUEST, record))
        if debug and self._sink is not None:
            log_event(
                self._sink,
                "gateway.request",
                LogContext(provider=record.provider),
                level=logging.DEBUG,
                endpoint=record.endpoint,
                headers=record.headers,
                payload=record.payload,
            )
        return record

    def log_response(
        self,
        status_code: int,
        headers: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        duration: float = 0.0,
        error: str = "",
        *,
        provider: Optional[str] = None,
        classified: Optional[ClassifiedError] = None,
        request: Optional[RequestRecord] = None,
    ) -> ResponseRecord:
        """Record a reply; a non-empty ``error`` is always routed to ``log_error``."""
        record = ResponseRecord(
            status_code=int(status_code or 0),
            headers=redact_headers(headers),
            body=redact_payload(body),
            duration=float(duration or 0.0),
            error=str(error or ""),
            timestamp=self._clock(),
            provider=provider or self._provider,
        )
        debug = self._debug
        with self._lock:
            self._last_response = record
            if debug:
                self._log.appendleft(LogEntry(LogEntryKind.RESPONSE, record))
        if debug and self._sink is not None:
            log_event(
                self._sink,
                "gateway.response",
                LogContext(provider=record.provider),
                level=logging.DEBUG,
                status_code=record.status_code,
                duration=record.duration,
                error=record.error or None,
            )
        if record.error:
            self.log_error(
                record.error,
                record.status_code,
                record.duration,
                classified=classified,
                provider=record.provider,
                request=request,
            )
        return record

    def log_error(
        self,
        message: str,
        status_code: int = 0,
        duration: float = 0.0,
        *,
        classified: Optional[ClassifiedError] = None,
        request: Optional[RequestRecord] = None,
        provider: Optional[str] = None,
    ) -> ErrorRecord:
        """Record an error unconditionally and forward it to the sink or fallback.

        ``request`` is the record returned by :meth:`log_request` for the failed
        call. When omitted, the last request seen by this logger is attached,
        which under concurrent use may belong to another call.
        """
        resolved_provider = provider or (classified.provider if classified else None) or self._provider
        with self._lock:
            record = ErrorRecord(
                provider=resolved_provider,
                message=str(message),
                status_code=int(status_code or 0),
                duration=float(duration or 0.0),
                timestamp=self._clock(),
                request=request if request is not None else self._last_request,
                classified=classified,
            )
            self._log.appendleft(LogEntry(LogEntryKind.ERROR, record))
        self._forward_error(record)
        return record

    def _forward_error(self, record: ErrorRecord) -> None:
        if self._sink is None:
            self._fallback.warning(
                ERROR_LINE_FORMAT, record.provider or "unknown", record.message, record.status_code
            )
            return
        classified = record.classified
        normalized_log_event(
            self._sink,
            "gateway.error",
            LogContext(provider=record.provider),
            phase="error",
            error_code=classified.code if classified else None,
            level=logging.ERROR,
            error_level=int(classified.level) if classified else None,
            level_name=classified.level_name if classified else None,
            retry_recommended=classified.retry_recommended if classified else None,
            message=record.message,
            status_code=record.status_code,
            duration=record.duration,
            timestamp=record.timestamp.isoformat(),
        )

    # ------------------------------------------------------------------
    # Accessors

    def get_log(self) -> List[LogEntry]:
        """Return a copy of the buffer, most recent first."""
        with self._lock:
            return list(self._log)

    def clear_log(self) -> None:
        with self._lock:
            self._log.clear()

    def get_last_request_details(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._last_request
        return record.to_dict() if record else None

    def get_last_response_details(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._last_response
        return record.to_dict() if record else None


__all__ = ["RequestLogger", "DEFAULT_LOG_CAPACITY", "ERROR_LINE_FORMAT"]
