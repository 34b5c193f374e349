"""Deterministic mock adapter backed by JSON fixtures.

Purpose
-------
Implement the full adapter contract without network traffic so tests, the
CLI and demos can exercise the service manager, diagnostics and logging.
Replies come from ``fixtures/responses.json`` (or an injected catalog);
failures can be injected per operation.

External dependencies
---------------------
Standard library only. Fixtures are loaded via ``importlib.resources``.

Failure injection
-----------------
``fail_next(operation, outcome, times=1)`` queues outcomes consumed by the
next calls of ``operation``. An exception outcome is raised; for
``test_connection`` a non-exception outcome (``ConnectionStatus``, mapping,
anything else) is returned as-is so malformed probe results can be
simulated.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import defaultdict, deque
from importlib import resources
from typing import Any, Deque, Dict, Iterable, List, Mapping, Optional, Sequence

from ..base.capabilities.operations import (
    CONTENT_OPERATIONS,
    OP_CLASSIFY,
    OP_EXTRACT_ENTITIES,
    OP_GENERATE_KEYWORDS,
    OP_QUALITY_SCORE,
    OP_SUMMARIZE,
    OP_TEST_CONNECTION,
)
from ..base.errors import UnsupportedOperationError
from ..base.http.transport import current_cancellation
from ..base.interfaces import ProviderAdapter
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    Capabilities,
    CategoryScore,
    ConnectionStatus,
    Entity,
    KeywordScore,
    ModelInfo,
    QualityScore,
)
from ..base.tokens import UsageTally, estimate_tokens
from ..base.utils import (
    min_confidence_option,
    normalize_categories,
    normalize_entities,
    normalize_keywords,
    normalize_quality,
    parse_limit,
)
from ..config.defaults import MOCK_DEFAULT_MODEL

_FIXTURE_PACKAGE = "ai_gateway.mock.fixtures"
_FIXTURE_RESOURCE = "responses.json"

Options = Optional[Mapping[str, Any]]


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled with the mock adapter."""
    data = resources.files(_FIXTURE_PACKAGE).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


def _first_sentence(text: str, limit: int = 120) -> str:
    head = (text or "").strip().split(". ")[0].strip()
    return head if len(head) <= limit else head[: limit - 3].rstrip() + "..."


class MockAdapter(ProviderAdapter):
    """Adapter returning canned replies instead of calling a provider.

    Args:
        provider: Logical provider name reported in logs and errors.
        model: Model id reported by ``get_usage_info`` and ``get_models``.
        catalog: Pre-parsed fixture catalog (defaults to the bundled one).
        supported_operations: Restrict the advertised content operations;
            calls outside the set raise ``UnsupportedOperationError``.
        latency: Seconds to sleep per call (simulated provider latency).
        request_logger: Diagnostic trail for the simulated requests.
        api_key, base_url, timeout_seconds, headers, transport: Accepted
            so the factory can build every provider the same way; ignored.
    """

    def __init__(
        self,
        *,
        provider: str = "mock",
        model: Optional[str] = None,
        catalog: Optional[Dict[str, Any]] = None,
        supported_operations: Optional[Iterable[str]] = None,
        latency: float = 0.0,
        request_logger=None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        transport: Any = None,
    ) -> None:
        self._provider = provider or "mock"
        super().__init__(request_logger=request_logger)
        self._catalog = catalog if catalog is not None else load_fixture_catalog()
        providers = self._catalog.get("providers", {})
        block = providers.get(self._provider, providers.get("*", {}))
        fallback = providers.get("*", {})
        self._model = model or str(block.get("model", self._catalog.get("default_model", MOCK_DEFAULT_MODEL)))
        self._responses: Mapping[str, Any] = block.get("responses", {})
        self._fallback_responses: Mapping[str, Any] = fallback.get("responses", {})
        self._supported = frozenset(supported_operations) if supported_operations is not None else frozenset(CONTENT_OPERATIONS)
        self._latency = max(0.0, float(latency))
        self._lock = threading.Lock()
        self._failures: Dict[str, Deque[Any]] = defaultdict(deque)
        self._calls: Dict[str, int] = defaultdict(int)
        self._usage = UsageTally()
        self._logger = get_logger(f"ai_gateway.mock.{self._provider}")

    @property
    def provider_name(self) -> str:
        return self._provider

    # ------------------------------------------------------------------
    # Failure injection and introspection

    def fail_next(self, operation: str, outcome: Any, times: int = 1) -> None:
        """Queue ``outcome`` for the next ``times`` calls of ``operation``."""
        with self._lock:
            self._failures[operation].extend([outcome] * times)

    def call_count(self, operation: str) -> int:
        with self._lock:
            return self._calls[operation]

    def _begin(self, operation: str, text: str = "", options: Options = None) -> Optional[Any]:
        """Count and log the call; return an injected non-exception outcome, if any."""
        with self._lock:
            self._calls[operation] += 1
            outcome = self._failures[operation].popleft() if self._failures[operation] else None
        self.request_logger.log_request(
            f"mock://{self._provider}/{operation}",
            {},
            {"text": text} if text else {},
            dict(options or {}),
            provider=self._provider,
        )
        normalized_log_event(
            self._logger,
            "mock.call",
            LogContext(provider=self._provider, operation=operation, model=self._model),
            phase="start",
            level=logging.DEBUG,
        )
        if self._latency:
            time.sleep(self._latency)
        token = current_cancellation()
        if token is not None:
            token.raise_if_cancelled()
        if isinstance(outcome, BaseException):
            raise outcome
        if operation in CONTENT_OPERATIONS and operation not in self._supported:
            raise UnsupportedOperationError(self._provider, operation)
        return outcome

    def _finish(self, operation: str, text: str, result: Any) -> None:
        body = result.to_dict() if hasattr(result, "to_dict") else (
            [r.to_dict() for r in result] if isinstance(result, list) else result
        )
        self.request_logger.log_response(200, {}, body, self._latency, provider=self._provider)
        self._usage.add({"prompt": estimate_tokens(text), "completion": estimate_tokens(str(body)), "total": None})

    def _entry(self, text: str) -> Mapping[str, Any]:
        key = (text or "").strip()
        for table in (self._responses, self._fallback_responses):
            for candidate in (key, key.lower(), "*"):
                if candidate in table:
                    return table[candidate]
        return {}

    # ------------------------------------------------------------------
    # Content operations

    def summarize(self, text: str, options: Options = None) -> str:
        self._begin(OP_SUMMARIZE, text, options)
        summary = str(self._entry(text).get("summary") or _first_sentence(text))
        self._finish(OP_SUMMARIZE, text, summary)
        return summary

    def extract_entities(self, text: str, options: Options = None) -> List[Entity]:
        self._begin(OP_EXTRACT_ENTITIES, text, options)
        result = normalize_entities(
            self._entry(text).get("entities", []),
            min_confidence=min_confidence_option(options),
        )
        self._finish(OP_EXTRACT_ENTITIES, text, result)
        return result

    def classify(
        self,
        text: str,
        categories: Optional[Sequence[str]] = None,
        options: Options = None,
    ) -> List[CategoryScore]:
        self._begin(OP_CLASSIFY, text, options)
        result = normalize_categories(self._entry(text).get("categories", []), categories)
        if categories and not result:
            result = [CategoryScore(category=c, score=0.0) for c in categories]
        self._finish(OP_CLASSIFY, text, result)
        return result

    def generate_keywords(self, text: str, options: Options = None) -> List[KeywordScore]:
        self._begin(OP_GENERATE_KEYWORDS, text, options)
        result = normalize_keywords(self._entry(text).get("keywords", []), parse_limit(options))
        self._finish(OP_GENERATE_KEYWORDS, text, result)
        return result

    def calculate_quality_score(self, text: str, options: Options = None) -> QualityScore:
        self._begin(OP_QUALITY_SCORE, text, options)
        raw = self._entry(text).get("quality") or self._fallback_responses.get("*", {}).get("quality")
        result = normalize_quality(raw) if raw else QualityScore(score=50.0)
        self._finish(OP_QUALITY_SCORE, text, result)
        return result

    # ------------------------------------------------------------------
    # Meta operations

    def test_connection(self, options: Options = None) -> Any:
        outcome = self._begin(OP_TEST_CONNECTION, "", options)
        if outcome is not None:
            return outcome
        status = ConnectionStatus(True, "Connection successful", {"status_code": 200, "model": self._model})
        self.request_logger.log_response(200, {}, status.to_dict(), self._latency, provider=self._provider)
        return status

    def get_capabilities(self) -> Capabilities:
        return Capabilities.of(self._supported, default_model=self._model, json_output=True, offline=True)

    def get_models(self) -> List[ModelInfo]:
        return [ModelInfo(id=self._model, name=self._model, provider=self._provider, family="mock")]

    def get_usage_info(self) -> Dict[str, Any]:
        info = self._usage.to_dict()
        info["model"] = self._model
        return info


__all__ = ["MockAdapter", "load_fixture_catalog"]
