"""Fixture-backed MockAdapter behaviour."""
from __future__ import annotations

import pytest

from ai_gateway.base.cancellation import CancellationToken, CancelledError
from ai_gateway.base.diagnostics import LogEntryKind
from ai_gateway.base.errors import AdapterError, UnsupportedOperationError
from ai_gateway.base.http import bind_cancellation
from ai_gateway.mock import MockAdapter, load_fixture_catalog

TEXT = "Acme Corp opened a new office in Berlin."


def test_bundled_catalog_loads():
    catalog = load_fixture_catalog()
    assert catalog["default_model"] == "mock-1"  # nosec B101
    assert "*" in catalog["providers"]


def test_exact_entry_then_wildcard(mock_adapter):
    assert mock_adapter.summarize(TEXT) == "Acme Corp expanded to Berlin."
    assert mock_adapter.summarize("First part. Second part.") == "First part"
    assert [e.text for e in mock_adapter.extract_entities("anything")] == ["Acme Corp", "Berlin"]
    assert mock_adapter.calculate_quality_score(TEXT).score == 72


def test_classify_with_unknown_categories_scores_zero(mock_adapter):
    scores = mock_adapter.classify("anything", ["poetry"])
    assert [(s.category, s.score) for s in scores] == [("poetry", 0.0)]


def test_custom_catalog_per_provider():
    catalog = {
        "providers": {
            "alt": {"model": "alt-2", "responses": {"hello": {"summary": "hi"}}},
            "*": {"responses": {"*": {"summary": "fallback"}}},
        }
    }
    adapter = MockAdapter(provider="alt", catalog=catalog)
    assert adapter.summarize("Hello") == "hi"
    assert adapter.summarize("other") == "fallback"
    assert adapter.get_models()[0].id == "alt-2"
    assert adapter.calculate_quality_score("x").score == 50.0


def test_failure_injection_is_consumed_in_order(mock_adapter):
    mock_adapter.fail_next("summarize", AdapterError("boom", status_code=500), times=2)
    for _ in range(2):
        with pytest.raises(AdapterError):
            mock_adapter.summarize(TEXT)
    assert mock_adapter.summarize(TEXT) == "Acme Corp expanded to Berlin."
    assert mock_adapter.call_count("summarize") == 3


def test_restricted_operations():
    adapter = MockAdapter(supported_operations=["summarize", "classify"])
    assert adapter.get_capabilities().supported_operations == frozenset({"summarize", "classify"})
    with pytest.raises(UnsupportedOperationError):
        adapter.generate_keywords("x")


def test_calls_are_traced(mock_adapter, request_logger):
    mock_adapter.generate_keywords(TEXT, {"limit": 2})
    entries = request_logger.get_log()
    assert [e.kind for e in entries] == [LogEntryKind.RESPONSE, LogEntryKind.REQUEST]
    assert entries[1].data.endpoint == "mock://mock/generate_keywords"
    assert mock_adapter.get_usage_info()["requests"] == 1


def test_bound_cancellation_is_honoured(mock_adapter):
    token = CancellationToken()
    with bind_cancellation(token):
        token.cancel("stop")
        with pytest.raises(CancelledError):
            mock_adapter.summarize(TEXT)


def test_meta_operations(mock_adapter):
    status = mock_adapter.test_connection()
    assert status.success is True
    assert status.provider_status == {"status_code": 200, "model": "mock-1"}
    caps = mock_adapter.get_capabilities()
    assert caps.features["offline"] is True
    assert mock_adapter.get_models()[0].family == "mock"
