"""
Health probes against provider adapters.

Purpose
-------
Run ``adapter.test_connection`` with retries and exponential backoff,
report which content operations an adapter supports, and fetch models and
usage without ever propagating adapter exceptions. Health checks built on
this class are safe to poll unconditionally.

Retry and timeout semantics
---------------------------
- Up to ``retry_attempts + 1`` attempts; the loop stops at the first success.
- Before retry ``n`` (never before the first attempt) the tester sleeps
  ``backoff_base * 2**(n-1)`` seconds (0.5s, 1s, 2s, ... by default).
- Each attempt receives ``{"timeout": options.timeout}``.
- ``options.max_duration`` bounds the whole test: a retry whose backoff
  would end past the budget is not started.
- A cancelled token ends the loop; the result reports the cancellation.

Logging
-------
Every attempt is recorded with ``log_request``; raised failures are
classified and recorded with ``log_error``; the final outcome is recorded
with ``log_response`` (200 on success, 500 otherwise).
"""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..cancellation import CancellationToken, CancelledError
from ..capabilities.core import implements_operation, merge_capabilities, reported_operations
from ..capabilities.operations import CONTENT_OPERATIONS, OP_TEST_CONNECTION, OPERATION_LABELS
from ..dto.test_options import TestOptions
from ..errors import ClassifiedError, describe_failure
from ..http.transport import bind_cancellation
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ConnectionStatus
from ..resilience.retry import RetryConfig
from ..timeouts import DEFAULT_BACKOFF_BASE_SECONDS
from .error_classifier import ErrorClassifier
from .log_entry import RequestRecord
from .request_logger import RequestLogger
from .test_result import CapabilityCheck, TestResult

UNSUPPORTED_MESSAGE = "Provider does not support connection testing"
INVALID_FORMAT_MESSAGE = "Invalid response format from provider"
CANCELLED_MESSAGE = "Connection test cancelled"
BUDGET_MESSAGE = "Connection test exceeded its maximum duration"


def _provider_name(adapter: Any) -> str:
    name = getattr(adapter, "provider_name", None)
    return str(name) if name else type(adapter).__name__.lower()


def _parse_outcome(outcome: Any) -> Optional[Tuple[bool, str, Dict[str, Any]]]:
    """Return ``(success, message, provider_status)`` or ``None`` if malformed."""
    if isinstance(outcome, ConnectionStatus):
        return outcome.success, outcome.message, dict(outcome.provider_status)
    if isinstance(outcome, Mapping) and "success" in outcome:
        status = outcome.get("provider_status") or {}
        return (
            bool(outcome["success"]),
            str(outcome.get("message") or ""),
            dict(status) if isinstance(status, Mapping) else {"value": status},
        )
    return None


class ConnectionTester:
    """Runs connection and capability probes against adapters.

    Args:
        request_logger: Diagnostic trail; a private one is created when omitted.
        classifier: Classifier for raised attempt failures.
        sleep: Sleep function used for backoff (injectable for tests).
        clock: Monotonic clock in seconds (injectable for tests).
        backoff_base: Delay before the first retry in seconds.
    """

    def __init__(
        self,
        request_logger: Optional[RequestLogger] = None,
        classifier: Optional[ErrorClassifier] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        backoff_base: float = DEFAULT_BACKOFF_BASE_SECONDS,
    ) -> None:
        self._request_logger = request_logger or RequestLogger("connection_tester")
        self._classifier = classifier or ErrorClassifier()
        self._sleep = sleep
        self._clock = clock
        self._backoff_base = backoff_base
        self._logger = get_logger("ai_gateway.diagnostics")

    @property
    def request_logger(self) -> RequestLogger:
        return self._request_logger

    @staticmethod
    def _coerce_options(options: Union[TestOptions, Mapping[str, Any], None]) -> TestOptions:
        if options is None:
            return TestOptions()
        if isinstance(options, TestOptions):
            return options
        return TestOptions.model_validate(dict(options))

    def run_test(
        self,
        adapter: Any,
        options: Union[TestOptions, Mapping[str, Any], None] = None,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> TestResult:
        """Probe ``adapter`` with retries; always returns a :class:`TestResult`."""
        opts = self._coerce_options(options)
        provider = _provider_name(adapter)
        started = self._clock()

        if not implements_operation(adapter, OP_TEST_CONNECTION):
            return self._finish(provider, started, False, UNSUPPORTED_MESSAGE, 0.0, {}, 0, None)

        backoff = RetryConfig(max_attempts=opts.retry_attempts + 1, delay_base=self._backoff_base)
        success = False
        message = ""
        latency_ms = 0.0
        provider_status: Dict[str, Any] = {}
        error: Optional[ClassifiedError] = None
        attempts = 0
        attempt_record: Optional[RequestRecord] = None

        for attempt in range(backoff.max_attempts):
            if attempt > 0:
                delay = backoff.delay_before(attempt)
                if opts.max_duration is not None and (self._clock() - started) + delay > opts.max_duration:
                    message = f"{BUDGET_MESSAGE}; last failure: {message}" if message else BUDGET_MESSAGE
                    break
                self._request_logger.log_request(
                    "connection_test_retry",
                    {},
                    {"attempt": attempt},
                    {"timeout": opts.timeout},
                    provider=provider,
                )
                self._sleep(delay)
            if cancel_token is not None and cancel_token.cancelled:
                message = CANCELLED_MESSAGE
                break

            attempts += 1
            attempt_record = self._request_logger.log_request(
                f"{provider}.test_connection",
                {},
                {"attempt": attempts},
                {"timeout": opts.timeout},
                provider=provider,
            )
            normalized_log_event(
                self._logger,
                "connection_test.attempt",
                LogContext(provider=provider, operation=OP_TEST_CONNECTION),
                phase="attempt",
                attempt=attempts,
                level=logging.DEBUG,
            )
            attempt_started = self._clock()
            try:
                with bind_cancellation(cancel_token):
                    outcome = adapter.test_connection({"timeout": opts.timeout})
            except CancelledError as exc:
                latency_ms = (self._clock() - attempt_started) * 1000
                message = f"{CANCELLED_MESSAGE}: {exc}"
                break
            except Exception as exc:  # noqa: BLE001 - probes never propagate adapter failures
                latency_ms = (self._clock() - attempt_started) * 1000
                raw = describe_failure(exc)
                error = self._classifier.classify(
                    provider,
                    raw.status_code,
                    raw.message,
                    provider_code=raw.provider_code,
                    level_hint=raw.level_hint,
                )
                message = raw.message
                provider_status = {}
                self._request_logger.log_error(
                    message,
                    error.status_code,
                    latency_ms / 1000,
                    classified=error,
                    provider=provider,
                    request=attempt_record,
                )
                continue

            latency_ms = (self._clock() - attempt_started) * 1000
            # a returned outcome supersedes any earlier raised failure
            error = None
            parsed = _parse_outcome(outcome)
            if parsed is None:
                message = INVALID_FORMAT_MESSAGE
                provider_status = {}
                continue
            success, message, provider_status = parsed
            if success:
                break

        return self._finish(
            provider, started, success, message, latency_ms, provider_status, attempts, error, attempt_record
        )

    def _finish(
        self,
        provider: str,
        started: float,
        success: bool,
        message: str,
        latency_ms: float,
        provider_status: Dict[str, Any],
        attempts: int,
        error: Optional[ClassifiedError],
        request: Optional[RequestRecord] = None,
    ) -> TestResult:
        result = TestResult(
            success=success,
            message=message,
            latency_ms=latency_ms,
            timestamp=datetime.now(timezone.utc),
            attempts=attempts,
            elapsed_ms=(self._clock() - started) * 1000,
            provider_status=provider_status,
            error=error,
        )
        self._request_logger.log_response(
            200 if success else 500,
            {},
            result.to_dict(),
            latency_ms / 1000,
            "" if success else message,
            provider=provider,
            classified=error,
            request=request,
        )
        normalized_log_event(
            self._logger,
            "connection_test.end",
            LogContext(provider=provider, operation=OP_TEST_CONNECTION),
            phase="finalize",
            attempt=attempts,
            error_code=error.code if error else None,
            emitted=success,
            latency_ms=round(latency_ms, 2),
        )
        return result

    def test_capabilities(self, adapter: Any) -> Dict[str, CapabilityCheck]:
        """Report support of each content operation.

        Structural detection first; the adapter's self-report may add
        support but never remove it.
        """
        structural = {op for op in CONTENT_OPERATIONS if implements_operation(adapter, op)}
        reported: Iterable[str] = ()
        if callable(getattr(adapter, "get_capabilities", None)):
            try:
                reported = reported_operations(adapter.get_capabilities())
            except Exception as exc:  # noqa: BLE001
                self._request_logger.log_error(
                    f"Error retrieving capabilities: {exc}", provider=_provider_name(adapter)
                )
        supported = merge_capabilities(structural, reported)
        return {
            op: CapabilityCheck(supported=op in supported, label=OPERATION_LABELS[op])
            for op in CONTENT_OPERATIONS
        }

    def get_available_models(self, adapter: Any) -> List[Any]:
        """Return ``adapter.get_models()`` or ``[]`` when it fails."""
        try:
            return list(adapter.get_models())
        except Exception as exc:  # noqa: BLE001
            self._request_logger.log_error(f"Error retrieving models: {exc}", provider=_provider_name(adapter))
            return []

    def get_usage_info(self, adapter: Any) -> Dict[str, Any]:
        """Return ``adapter.get_usage_info()`` or ``{}`` when it fails."""
        try:
            return dict(adapter.get_usage_info() or {})
        except Exception as exc:  # noqa: BLE001
            self._request_logger.log_error(
                f"Error retrieving usage info: {exc}", provider=_provider_name(adapter)
            )
            return {}


__all__ = [
    "ConnectionTester",
    "UNSUPPORTED_MESSAGE",
    "INVALID_FORMAT_MESSAGE",
    "CANCELLED_MESSAGE",
    "BUDGET_MESSAGE",
]
