"""Service manager: the single entry point the content pipeline talks to.

Purpose
-------
Own the registry of provider adapters, route tasks to providers, and run
every provider call through the same envelope: request logging, timeout and
cancellation binding, error classification, usage counting.

Failure semantics
-----------------
- ``invoke`` is the single classification point. Any adapter exception
  becomes a :class:`GatewayError` carrying a :class:`ClassifiedError`,
  chained to the original exception.
- Failures are classified against the adapter's ``provider_name`` so a
  section registered as ``claude`` still resolves Anthropic error codes.
- :class:`CancelledError` is logged and re-raised unchanged.
- Lookup failures raise :class:`UnknownProviderError` or
  :class:`NoProviderAvailableError`; unknown operation names raise
  ``ValueError``.
- ``invoke`` performs no retries; retry policy belongs to the caller
  (see ``ai_gateway.base.resilience.retry``).

Concurrency
-----------
``invoke`` may be called from many threads. The registry is guarded by a
lock; the shared ``RequestLogger`` and the usage counters lock internally.
No background threads are started.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.cancellation import CancellationToken, CancelledError
from ..base.capabilities import (
    ALL_OPERATIONS,
    CONTENT_OPERATIONS,
    OP_CLASSIFY,
    OP_EXTRACT_ENTITIES,
    OP_GENERATE_KEYWORDS,
    OP_QUALITY_SCORE,
    OP_SUMMARIZE,
    OP_TEST_CONNECTION,
    normalize_operation,
)
from ..base.capabilities.core import coerce_capabilities, detect_capabilities
from ..base.diagnostics import (
    CapabilityCheck,
    ConnectionTester,
    ErrorClassifier,
    RequestLogger,
    TestResult,
)
from ..base.dto.test_options import TestOptions
from ..base.errors import (
    ErrorLevel,
    GatewayError,
    InvalidProviderError,
    NoProviderAvailableError,
    UnknownProviderError,
    UnsupportedOperationError,
    describe_failure,
)
from ..base.http import bind_cancellation
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.metrics import ProviderUsageCounters
from ..base.models import Capabilities
from ..config.defaults import DEFAULT_TIMEOUT_SECONDS


def _task_key(task: str) -> str:
    try:
        return normalize_operation(task)
    except ValueError:
        return (task or "").strip().lower()


def _as_payload(result: Any) -> Any:
    """Return a JSON-friendly view of an operation result for the trail."""
    if hasattr(result, "to_dict"):
        return result.to_dict()
    if isinstance(result, (list, tuple)):
        return [_as_payload(item) for item in result]
    return result


class ServiceManager:
    """Registry and invocation envelope for provider adapters.

    Args:
        request_logger: Shared diagnostic trail bound to every registered
            adapter. A private one is created when omitted.
        classifier: Error classifier used for every failure.
        tester: Connection tester used by ``get_provider_status``; defaults to
            one sharing this manager's logger and classifier.
        default_provider: Provider used when a task has no preference. The
            first registered provider becomes the default when unset.
        task_preferences: ``task -> provider`` routing hints. Task names are
            operation names or their aliases.
        timeout_seconds: Timeout injected into ``options["timeout"]`` when the
            caller does not pass one.
    """

    def __init__(
        self,
        request_logger: Optional[RequestLogger] = None,
        classifier: Optional[ErrorClassifier] = None,
        tester: Optional[ConnectionTester] = None,
        *,
        default_provider: Optional[str] = None,
        task_preferences: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._request_logger = request_logger or RequestLogger("service_manager")
        self._classifier = classifier or ErrorClassifier()
        self._tester = tester or ConnectionTester(self._request_logger, self._classifier)
        self._default_provider = default_provider
        self._task_preferences: Dict[str, str] = {
            _task_key(task): name for task, name in (task_preferences or {}).items()
        }
        self._timeout_seconds = timeout_seconds
        self._lock = threading.RLock()
        self._providers: Dict[str, Any] = {}
        self._counters: Dict[str, ProviderUsageCounters] = {}
        self._logger = get_logger("ai_gateway.service")

    # ------------------------------------------------------------------
    # Accessors

    @property
    def request_logger(self) -> RequestLogger:
        return self._request_logger

    @property
    def classifier(self) -> ErrorClassifier:
        return self._classifier

    @property
    def tester(self) -> ConnectionTester:
        return self._tester

    @property
    def default_provider(self) -> Optional[str]:
        with self._lock:
            return self._default_provider

    # ------------------------------------------------------------------
    # Registry

    def register_provider(self, name: str, adapter: Any) -> None:
        """Register ``adapter`` under ``name``, replacing any previous one.

        Raises:
            InvalidProviderError: ``adapter`` lacks one of the contract methods.
            ValueError: ``name`` is blank.
        """
        key = (name or "").strip()
        if not key:
            raise ValueError("Provider name must be a non-empty string")
        missing = tuple(op for op in ALL_OPERATIONS if not callable(getattr(adapter, op, None)))
        if missing:
            raise InvalidProviderError(key, missing)
        binder = getattr(adapter, "bind_request_logger", None)
        if callable(binder):
            binder(self._request_logger)
        with self._lock:
            self._providers[key] = adapter
            self._counters.setdefault(key, ProviderUsageCounters(key))
            if self._default_provider is None:
                self._default_provider = key
        log_event(self._logger, "provider.registered", LogContext(provider=key), adapter=type(adapter).__name__)

    def unregister_provider(self, name: str) -> Optional[Any]:
        """Remove and return the adapter registered under ``name``."""
        with self._lock:
            adapter = self._providers.pop(name, None)
            self._counters.pop(name, None)
            if adapter is not None and self._default_provider == name:
                self._default_provider = next(iter(self._providers), None)
        if adapter is not None:
            log_event(self._logger, "provider.unregistered", LogContext(provider=name))
        return adapter

    def get_provider(self, name: str) -> Any:
        """Return the adapter registered under ``name``.

        Raises:
            UnknownProviderError: no such provider.
        """
        with self._lock:
            adapter = self._providers.get(name)
        if adapter is None:
            raise UnknownProviderError(f"Provider '{name}' is not registered")
        return adapter

    def providers(self) -> List[str]:
        """Registered provider names in registration order."""
        with self._lock:
            return list(self._providers)

    def set_default_provider(self, name: str) -> None:
        self.get_provider(name)
        with self._lock:
            self._default_provider = name

    def set_task_preference(self, task: str, name: str) -> None:
        with self._lock:
            self._task_preferences[_task_key(task)] = name

    def provider_for_task(self, task: str) -> str:
        """Return the provider name serving ``task``.

        Resolution order: the task preference (when registered), then the
        default provider (when registered), then the first registered one.

        Raises:
            NoProviderAvailableError: nothing is registered.
        """
        with self._lock:
            preferred = self._task_preferences.get(_task_key(task))
            if preferred in self._providers:
                return preferred
            if self._default_provider in self._providers:
                return self._default_provider
            if self._providers:
                return next(iter(self._providers))
        raise NoProviderAvailableError(task)

    def get_provider_for_task(self, task: str) -> Any:
        """Return the adapter serving ``task`` (see :meth:`provider_for_task`)."""
        return self.get_provider(self.provider_for_task(task))

    # ------------------------------------------------------------------
    # Invocation

    def _resolve(self, provider_id: str, operation: str) -> Any:
        try:
            return self.get_provider(provider_id)
        except UnknownProviderError as exc:
            self._request_logger.log_error(str(exc), provider=provider_id)
            normalized_log_event(
                self._logger,
                "invoke.error",
                LogContext(provider=provider_id, operation=operation),
                phase="resolve",
                error_code="unknown_provider",
                emitted=False,
                level=logging.WARNING,
            )
            raise

    def _capabilities(self, provider_id: str, adapter: Any) -> Capabilities:
        try:
            return coerce_capabilities(adapter.get_capabilities(), adapter)
        except Exception as exc:  # noqa: BLE001 - fall back to structural detection
            log_event(
                self._logger,
                "capabilities.fallback",
                LogContext(provider=provider_id),
                level=logging.WARNING,
                error=str(exc),
            )
            return Capabilities(supported_operations=detect_capabilities(adapter))

    def _reject_unsupported(self, provider_id: str, family: str, operation: str) -> GatewayError:
        message = UnsupportedOperationError(provider_id, operation).message
        error = self._classifier.classify(
            family,
            None,
            message,
            provider_code="unsupported_operation",
            level_hint=ErrorLevel.REQUEST,
        )
        self._request_logger.log_error(message, classified=error, provider=provider_id)
        normalized_log_event(
            self._logger,
            "invoke.error",
            LogContext(provider=provider_id, operation=operation),
            phase="dispatch",
            error_code=error.code,
            emitted=False,
            level=logging.WARNING,
        )
        return GatewayError(error, operation)

    def _options(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        options = dict(args.get("options") or {})
        options.setdefault("timeout", self._timeout_seconds)
        return options

    @staticmethod
    def _dispatch(adapter: Any, operation: str, args: Mapping[str, Any], options: Dict[str, Any]) -> Any:
        text = args.get("text", "")
        if operation == OP_CLASSIFY:
            return adapter.classify(text, args.get("categories"), options)
        if operation in CONTENT_OPERATIONS:
            return getattr(adapter, operation)(text, options)
        if operation == OP_TEST_CONNECTION:
            return adapter.test_connection(options)
        return getattr(adapter, operation)()

    def invoke(
        self,
        provider_id: str,
        operation: str,
        args: Optional[Mapping[str, Any]] = None,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Any:
        """Run ``operation`` on provider ``provider_id``.

        Args:
            provider_id: Registered provider name.
            operation: Canonical operation name or alias (``score_quality``).
            args: ``text``, ``categories`` (classify) and ``options``.
            cancel_token: Cooperative cancellation, bound to the HTTP transport
                for the duration of the call.

        Returns:
            The adapter's result (``str``, result model or list of models).

        Raises:
            UnknownProviderError: ``provider_id`` is not registered.
            ValueError: ``operation`` is not a known operation name.
            GatewayError: the call failed or the operation is unsupported.
            CancelledError: ``cancel_token`` was cancelled.
        """
        adapter = self._resolve(provider_id, operation)
        family = str(getattr(adapter, "provider_name", None) or provider_id)
        op = normalize_operation(operation)
        call_args: Dict[str, Any] = dict(args or {})
        ctx = LogContext(provider=provider_id, operation=op)

        if op in CONTENT_OPERATIONS and not self._capabilities(provider_id, adapter).supports(op):
            raise self._reject_unsupported(provider_id, family, op)

        options = self._options(call_args)
        text = call_args.get("text") or ""
        counters = self._counters_for(provider_id)
        request_record = self._request_logger.log_request(
            f"{provider_id}.{op}",
            {},
            {k: v for k, v in call_args.items() if k != "options"},
            options,
            provider=provider_id,
        )
        normalized_log_event(self._logger, "invoke.start", ctx, phase="start", level=logging.DEBUG)
        counters.record_start(op, len(text) if isinstance(text, str) else 0)
        started = time.monotonic()
        try:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            with bind_cancellation(cancel_token):
                result = self._dispatch(adapter, op, call_args, options)
        except CancelledError as exc:
            elapsed = time.monotonic() - started
            counters.record_cancelled()
            self._request_logger.log_error(
                f"Operation cancelled: {exc}", 0, elapsed, provider=provider_id, request=request_record
            )
            normalized_log_event(
                self._logger,
                "invoke.error",
                ctx,
                phase="finalize",
                error_code="cancelled",
                emitted=False,
                level=logging.INFO,
            )
            raise
        except Exception as exc:  # noqa: BLE001 - every adapter failure is classified
            elapsed = time.monotonic() - started
            raw = describe_failure(exc)
            error = self._classifier.classify(
                family,
                raw.status_code,
                raw.message,
                provider_code=raw.provider_code,
                level_hint=raw.level_hint,
            )
            self._request_logger.log_error(
                raw.message,
                error.status_code,
                elapsed,
                classified=error,
                provider=provider_id,
                request=request_record,
            )
            counters.record_failure(error.code, elapsed * 1000)
            normalized_log_event(
                self._logger,
                "invoke.error",
                ctx,
                phase="finalize",
                error_code=error.code,
                emitted=False,
                level=logging.WARNING,
                level_name=error.level_name,
                status_code=error.status_code,
            )
            raise GatewayError(error, op) from exc

        elapsed = time.monotonic() - started
        self._request_logger.log_response(200, {}, _as_payload(result), elapsed, provider=provider_id)
        counters.record_success(elapsed * 1000)
        normalized_log_event(
            self._logger,
            "invoke.end",
            ctx,
            phase="finalize",
            emitted=True,
            level=logging.DEBUG,
            duration_ms=round(elapsed * 1000, 3),
        )
        return result

    def _counters_for(self, provider_id: str) -> ProviderUsageCounters:
        with self._lock:
            counters = self._counters.get(provider_id)
            if counters is None:
                counters = self._counters[provider_id] = ProviderUsageCounters(provider_id)
            return counters

    # ------------------------------------------------------------------
    # Task helpers

    def _run_task(
        self,
        task: str,
        args: Dict[str, Any],
        provider: Optional[str],
        cancel_token: Optional[CancellationToken],
    ) -> Any:
        name = provider or self.provider_for_task(task)
        return self.invoke(name, task, args, cancel_token=cancel_token)

    def summarize(self, text: str, options=None, *, provider: Optional[str] = None, cancel_token=None) -> str:
        return self._run_task(OP_SUMMARIZE, {"text": text, "options": options}, provider, cancel_token)

    def extract_entities(self, text: str, options=None, *, provider: Optional[str] = None, cancel_token=None):
        return self._run_task(OP_EXTRACT_ENTITIES, {"text": text, "options": options}, provider, cancel_token)

    def classify(
        self,
        text: str,
        categories: Optional[Sequence[str]] = None,
        options=None,
        *,
        provider: Optional[str] = None,
        cancel_token=None,
    ):
        args = {"text": text, "categories": list(categories) if categories else None, "options": options}
        return self._run_task(OP_CLASSIFY, args, provider, cancel_token)

    def generate_keywords(self, text: str, options=None, *, provider: Optional[str] = None, cancel_token=None):
        return self._run_task(OP_GENERATE_KEYWORDS, {"text": text, "options": options}, provider, cancel_token)

    def calculate_quality_score(self, text: str, options=None, *, provider: Optional[str] = None, cancel_token=None):
        return self._run_task(OP_QUALITY_SCORE, {"text": text, "options": options}, provider, cancel_token)

    # ------------------------------------------------------------------
    # Diagnostics

    def get_provider_status(self, options: Optional[Mapping[str, Any] | TestOptions] = None) -> Dict[str, TestResult]:
        """Run a connection test against every provider, sequentially."""
        return {name: self._tester.run_test(self.get_provider(name), options) for name in self.providers()}

    def get_provider_capabilities(self, name: str) -> Dict[str, CapabilityCheck]:
        return self._tester.test_capabilities(self.get_provider(name))

    def describe_providers(self) -> List[Dict[str, Any]]:
        """Summaries of registered providers for dashboards and the CLI."""
        with self._lock:
            items = list(self._providers.items())
            default = self._default_provider
            preferences = dict(self._task_preferences)
        out: List[Dict[str, Any]] = []
        for name, adapter in items:
            out.append(
                {
                    "name": name,
                    "adapter": type(adapter).__name__,
                    "default": name == default,
                    "capabilities": self._capabilities(name, adapter).to_dict(),
                    "preferred_for": sorted(task for task, pref in preferences.items() if pref == name),
                }
            )
        return out

    def get_usage_stats(self, reset: bool = False) -> Dict[str, Dict[str, Any]]:
        """Per-provider call counters plus the adapter's own usage report."""
        with self._lock:
            items = list(self._providers.items())
            counters = dict(self._counters)
        stats: Dict[str, Dict[str, Any]] = {}
        for name, adapter in items:
            entry = counters[name].as_dict(reset=reset) if name in counters else {}
            entry["provider_usage"] = self._tester.get_usage_info(adapter)
            stats[name] = entry
        return stats

    # ------------------------------------------------------------------
    # Lifecycle

    def close(self) -> None:
        """Close every registered adapter that owns resources."""
        with self._lock:
            adapters = list(self._providers.values())
        for adapter in adapters:
            closer = getattr(adapter, "close", None)
            if callable(closer):
                closer()

    def __enter__(self) -> "ServiceManager":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["ServiceManager"]
