"""ConnectionTester retry, budget, cancellation and capability checks.

Backoff sleeps go through ``FakeClock`` so the schedule is asserted without
waiting.
"""
from __future__ import annotations

from typing import Any, Dict, List

import pytest

from ai_gateway.base.cancellation import CancellationToken
from ai_gateway.base.diagnostics import (
    BUDGET_MESSAGE,
    CANCELLED_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    UNSUPPORTED_MESSAGE,
    ConnectionTester,
    LogEntryKind,
    RequestLogger,
)
from ai_gateway.base.dto import TestOptions
from ai_gateway.base.errors import AdapterError, ErrorLevel
from ai_gateway.base.models import Capabilities, ConnectionStatus
from ai_gateway.mock import MockAdapter

from .utils import FakeClock


@pytest.fixture()
def tester(request_logger: RequestLogger, clock: FakeClock) -> ConnectionTester:
    return ConnectionTester(request_logger, sleep=clock.sleep, clock=clock)


def test_first_attempt_success_does_not_sleep(tester, clock, mock_adapter):
    result = tester.run_test(mock_adapter)
    assert result.success is True  # nosec B101
    assert result.message == "Connection successful"
    assert result.attempts == 1
    assert result.error is None
    assert result.provider_status["status_code"] == 200
    assert clock.sleeps == []


def test_backoff_schedule_until_success(tester, clock, mock_adapter):
    mock_adapter.fail_next("test_connection", AdapterError("Service unavailable", status_code=503), times=2)
    result = tester.run_test(mock_adapter, TestOptions(retry_attempts=2))
    assert result.success is True
    assert result.attempts == 3
    assert clock.sleeps == [0.5, 1.0]
    assert result.error is None
    assert mock_adapter.call_count("test_connection") == 3


def test_exhausted_retries_report_last_classified_failure(tester, clock, mock_adapter, request_logger):
    mock_adapter.fail_next("test_connection", AdapterError("Service unavailable", status_code=503), times=3)
    result = tester.run_test(mock_adapter, {"retryAttempts": 2})
    assert result.success is False
    assert result.attempts == 3
    assert result.message == "Service unavailable"
    assert result.error is not None
    assert result.error.level is ErrorLevel.NETWORK
    assert result.error.provider == "mock"
    assert result.error.retry_recommended is True
    assert clock.sleeps == [0.5, 1.0]

    errors = [e for e in request_logger.get_log() if e.kind is LogEntryKind.ERROR]
    # three attempt failures plus the final error-bearing response
    assert len(errors) == 4


def test_zero_retries_means_single_attempt(tester, clock, mock_adapter):
    mock_adapter.fail_next("test_connection", AdapterError("down", status_code=500))
    result = tester.run_test(mock_adapter, TestOptions(retry_attempts=0))
    assert result.success is False
    assert result.attempts == 1
    assert clock.sleeps == []


def test_reported_failure_is_retried_without_classification(tester, mock_adapter):
    mock_adapter.fail_next("test_connection", ConnectionStatus(False, "Invalid API key"), times=3)
    result = tester.run_test(mock_adapter)
    assert result.success is False
    assert result.message == "Invalid API key"
    assert result.attempts == 3
    assert result.error is None


@pytest.mark.parametrize(
    "later, message",
    [
        (ConnectionStatus(False, "Invalid API key"), "Invalid API key"),
        ("pong", INVALID_FORMAT_MESSAGE),
    ],
)
def test_returned_failure_replaces_earlier_classification(tester, mock_adapter, request_logger, later, message):
    mock_adapter.fail_next("test_connection", AdapterError("Service unavailable", status_code=503))
    mock_adapter.fail_next("test_connection", later, times=2)
    result = tester.run_test(mock_adapter)
    assert result.success is False
    assert result.attempts == 3
    assert result.message == message
    assert result.error is None

    final = request_logger.get_log()[0]
    assert final.kind is LogEntryKind.ERROR
    assert final.data.message == message
    assert final.data.classified is None
    assert final.data.request.endpoint == "mock.test_connection"
    assert final.data.request.payload == {"attempt": 3}


def test_mapping_outcome_is_accepted(tester, mock_adapter):
    mock_adapter.fail_next("test_connection", {"success": True, "message": "ok", "provider_status": {"v": 1}})
    result = tester.run_test(mock_adapter)
    assert result.success is True
    assert result.provider_status == {"v": 1}


def test_malformed_outcome_reports_invalid_format(tester, mock_adapter):
    mock_adapter.fail_next("test_connection", "pong", times=3)
    result = tester.run_test(mock_adapter)
    assert result.success is False
    assert result.message == INVALID_FORMAT_MESSAGE


def test_adapter_without_test_connection(tester, clock):
    class Bare:
        provider_name = "bare"

    result = tester.run_test(Bare())
    assert result.success is False
    assert result.message == UNSUPPORTED_MESSAGE
    assert result.attempts == 0
    assert clock.sleeps == []


def test_max_duration_stops_before_backoff_crosses_budget(tester, clock, mock_adapter):
    mock_adapter.fail_next("test_connection", AdapterError("timeout", status_code=0), times=5)
    result = tester.run_test(mock_adapter, TestOptions(retry_attempts=4, max_duration=1.0))
    # 0.5s fits the budget, the following 1.0s backoff would end at 1.5s
    assert clock.sleeps == [0.5]
    assert result.attempts == 2
    assert result.success is False
    assert result.message.startswith(BUDGET_MESSAGE)


def test_cancelled_token_stops_before_first_attempt(tester, mock_adapter):
    token = CancellationToken()
    token.cancel("shutdown")
    result = tester.run_test(mock_adapter, cancel_token=token)
    assert result.success is False
    assert result.message == CANCELLED_MESSAGE
    assert result.attempts == 0
    assert mock_adapter.call_count("test_connection") == 0


def test_cancellation_during_backoff_ends_the_loop(request_logger, clock, mock_adapter):
    token = CancellationToken()

    def sleep(seconds: float) -> None:
        clock.sleep(seconds)
        token.cancel("user abort")

    tester = ConnectionTester(request_logger, sleep=sleep, clock=clock)
    mock_adapter.fail_next("test_connection", AdapterError("down", status_code=502), times=3)
    result = tester.run_test(mock_adapter, cancel_token=token)
    assert result.attempts == 1
    assert result.message == CANCELLED_MESSAGE


def test_each_attempt_receives_timeout_option(tester):
    seen: List[Dict[str, Any]] = []

    class Recorder:
        provider_name = "recorder"

        def test_connection(self, options=None):
            seen.append(dict(options or {}))
            return {"success": True, "message": "ok"}

    assert tester.run_test(Recorder(), {"timeout": 3}).success is True
    assert seen == [{"timeout": 3.0}]


def test_result_to_dict_is_json_friendly(tester, mock_adapter):
    mock_adapter.fail_next("test_connection", AdapterError("Invalid API key", status_code=401), times=3)
    data = tester.run_test(mock_adapter).to_dict()
    assert data["success"] is False
    assert data["error"]["level"] == int(ErrorLevel.AUTH)
    assert isinstance(data["timestamp"], str)


def test_capabilities_merge_structure_and_self_report(tester):
    adapter = MockAdapter(supported_operations=["summarize"])
    checks = tester.test_capabilities(adapter)
    assert set(checks) == {
        "summarize",
        "extract_entities",
        "classify",
        "generate_keywords",
        "calculate_quality_score",
    }
    assert checks["summarize"].label == "Content Summarization"
    # structural overrides are never removed by a narrower self-report
    assert all(check.supported for check in checks.values())


def test_capabilities_for_duck_typed_adapter(tester):
    class Partial:
        provider_name = "partial"

        def summarize(self, text, options=None):
            return text

        def get_capabilities(self):
            return Capabilities.of(["classify"])

    checks = tester.test_capabilities(Partial())
    assert checks["summarize"].supported is True
    assert checks["classify"].supported is True
    assert checks["generate_keywords"].supported is False


def test_failing_self_report_is_logged_not_raised(tester, request_logger):
    class Broken:
        provider_name = "broken"

        def summarize(self, text, options=None):
            return text

        def get_capabilities(self):
            raise RuntimeError("no report")

        def get_models(self):
            raise RuntimeError("no models")

        def get_usage_info(self):
            raise RuntimeError("no usage")

    adapter = Broken()
    assert tester.test_capabilities(adapter)["summarize"].supported is True
    assert tester.get_available_models(adapter) == []
    assert tester.get_usage_info(adapter) == {}
    messages = [e.data.message for e in request_logger.get_log() if e.kind is LogEntryKind.ERROR]
    assert "Error retrieving capabilities: no report" in messages
    assert "Error retrieving models: no models" in messages
    assert "Error retrieving usage info: no usage" in messages


def test_models_and_usage_pass_through(tester, mock_adapter):
    models = tester.get_available_models(mock_adapter)
    assert [m.id for m in models] == ["mock-1"]
    assert tester.get_usage_info(mock_adapter)["model"] == "mock-1"
