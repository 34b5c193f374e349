"""Unit tests for the five-tier ErrorClassifier.

Covers status-to-level mapping, level hints, structured code precedence,
description substring matching, generic fallbacks and retry policy.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ai_gateway.base.diagnostics import ErrorClassifier, is_retry_recommended, level_for_status
from ai_gateway.base.diagnostics.error_codes import GENERIC_CODES, OPENAI_CODES, UNKNOWN_ERROR_CODE
from ai_gateway.base.errors import ErrorLevel


@pytest.fixture()
def classifier() -> ErrorClassifier:
    return ErrorClassifier()


@pytest.mark.parametrize(
    "status, level",
    [
        (0, ErrorLevel.NETWORK),
        (408, ErrorLevel.NETWORK),
        (502, ErrorLevel.NETWORK),
        (503, ErrorLevel.NETWORK),
        (504, ErrorLevel.NETWORK),
        (401, ErrorLevel.AUTH),
        (403, ErrorLevel.AUTH),
        (429, ErrorLevel.AUTH),
        (400, ErrorLevel.REQUEST),
        (405, ErrorLevel.REQUEST),
        (413, ErrorLevel.REQUEST),
        (415, ErrorLevel.REQUEST),
        (422, ErrorLevel.REQUEST),
        (500, ErrorLevel.PROVIDER),
        (501, ErrorLevel.PROVIDER),
        (507, ErrorLevel.PROVIDER),
        (418, ErrorLevel.PROVIDER),
        (404, ErrorLevel.PROVIDER),
    ],
)
def test_status_table(status, level):
    assert level_for_status(status) is level  # nosec B101


def test_level_hint_applies_only_without_status():
    assert level_for_status(None, ErrorLevel.RESPONSE) is ErrorLevel.RESPONSE
    assert level_for_status(None) is ErrorLevel.PROVIDER
    assert level_for_status(401, ErrorLevel.RESPONSE) is ErrorLevel.AUTH


def test_openai_rate_limit_is_retryable_auth(classifier):
    err = classifier.classify("openai", 429, "Rate limit exceeded for requests")
    assert err.level is ErrorLevel.AUTH
    assert err.level_name == "Authentication/Authorization"
    assert err.code == "rate_limit_exceeded"
    assert err.retry_recommended is True
    assert "Wait and retry later" in err.recovery_strategy


def test_invalid_key_is_not_retryable(classifier):
    err = classifier.classify("openai", 401, "Invalid API key provided")
    assert err.code == "invalid_api_key"
    assert err.retry_recommended is False
    assert err.recovery_strategy.startswith("Verify API key")


def test_unknown_provider_falls_back_to_generic_table(classifier):
    err = classifier.classify("acme", 503, "upstream hiccup")
    assert err.level is ErrorLevel.NETWORK
    assert err.code == next(iter(GENERIC_CODES[ErrorLevel.NETWORK]))
    assert err.retry_recommended is True


@pytest.mark.parametrize(
    "message, code",
    [
        ("invalid parameters", "invalid_params"),
        ("Error: unsupported model specified for this endpoint", "unsupported_model"),
        ("INVALID CONTENT TYPE header", "invalid_content_type"),
    ],
)
def test_request_level_description_substring_match(classifier, message, code):
    err = classifier.classify("openai", 400, message)
    assert err.level is ErrorLevel.REQUEST
    assert err.code == code
    assert err.retry_recommended is False


def test_first_code_when_nothing_matches(classifier):
    err = classifier.classify("openai", 400, "something odd")
    assert err.code == next(iter(OPENAI_CODES[ErrorLevel.REQUEST]))


def test_structured_code_beats_substring(classifier):
    # message mentions "Rate limit exceeded" but the payload code says quota
    err = classifier.classify(
        "openai", 500, "Rate limit exceeded", provider_code="insufficient_quota"
    )
    assert err.level is ErrorLevel.PROVIDER
    assert err.code == "quota_exceeded"
    assert err.retry_recommended is False
    assert "quota" in err.recovery_strategy.lower()


def test_structured_code_ignored_when_absent_at_level(classifier):
    err = classifier.classify("openai", 401, "Invalid API key", provider_code="insufficient_quota")
    assert err.level is ErrorLevel.AUTH
    assert err.code == "invalid_api_key"


def test_anthropic_alias_table(classifier):
    err = classifier.classify("Anthropic", 529, "Overloaded", provider_code="overloaded_error")
    assert err.provider == "anthropic"
    assert err.level is ErrorLevel.PROVIDER
    assert err.code == "model_overloaded"
    assert err.retry_recommended is True


def test_content_policy_is_permanent(classifier):
    err = classifier.classify("openai", None, "Content policy violation detected")
    assert err.level is ErrorLevel.PROVIDER
    assert err.code == "content_policy_violation"
    assert err.retry_recommended is False


def test_response_hint_without_status(classifier):
    err = classifier.classify("huggingface", None, "garbled", level_hint=ErrorLevel.RESPONSE)
    assert err.level is ErrorLevel.RESPONSE
    assert err.status_code == 0
    assert err.retry_recommended is False


def test_unknown_error_when_no_table_has_codes():
    bare = ErrorClassifier(code_tables={}, code_aliases={})
    err = bare.classify("openai", 500, "boom")
    assert err.code == UNKNOWN_ERROR_CODE
    assert err.description == "Unknown error"


def test_classification_is_pure_apart_from_timestamp(classifier):
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    a = classifier.classify("openai", 503, "Service Unavailable", timestamp=ts)
    b = classifier.classify("openai", 503, "Service Unavailable", timestamp=ts)
    assert a == b
    assert a.to_dict()["timestamp"] == b.to_dict()["timestamp"]


def test_never_raises_on_odd_inputs(classifier):
    err = classifier.classify("", "not-a-status", None)  # type: ignore[arg-type]
    assert err.level is ErrorLevel.PROVIDER
    assert err.provider == "generic"


def test_retry_policy_table():
    assert is_retry_recommended(ErrorLevel.NETWORK, "anything") is True
    assert is_retry_recommended(ErrorLevel.AUTH, "rate_limit") is True
    assert is_retry_recommended(ErrorLevel.AUTH, "forbidden") is False
    assert is_retry_recommended(ErrorLevel.REQUEST, "bad_request") is False
    assert is_retry_recommended(ErrorLevel.RESPONSE, "parse_error") is False
    assert is_retry_recommended(ErrorLevel.PROVIDER, "service_error") is True
    assert is_retry_recommended(ErrorLevel.PROVIDER, "content_filtered") is False


def test_error_levels_and_codes_for_level(classifier):
    assert classifier.error_levels() == {
        1: "Network/Connection",
        2: "Authentication/Authorization",
        3: "Request Format/Validation",
        4: "Provider-Specific",
        5: "Response Processing",
    }
    assert "model_loading" in classifier.codes_for_level("huggingface", ErrorLevel.PROVIDER)
