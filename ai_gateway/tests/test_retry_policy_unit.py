"""Backoff schedule and the opt-in retry decorator."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ai_gateway.base.diagnostics import ErrorClassifier
from ai_gateway.base.errors import GatewayError
from ai_gateway.base.resilience import RetryConfig, retry


def _gateway_error(status: int, message: str) -> GatewayError:
    classified = ErrorClassifier().classify("openai", status, message, timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))
    return GatewayError(classified, "summarize")


def test_delay_schedule():
    config = RetryConfig(max_attempts=4, delay_base=0.5)
    assert config.delay_before(0) == 0.0  # nosec B101
    assert list(config.delays()) == [0.5, 1.0, 2.0]


def test_retries_retryable_errors_then_succeeds():
    sleeps = []
    attempts = []
    outcomes = iter([_gateway_error(503, "unavailable"), _gateway_error(429, "Rate limit exceeded"), "ok"])

    @retry(RetryConfig(max_attempts=3, sleep=sleeps.append, attempt_logger=lambda **kw: attempts.append(kw)))
    def call():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    assert call() == "ok"
    assert sleeps == [0.5, 1.0]
    assert [a["attempt"] for a in attempts] == [0, 1, 2]
    assert attempts[-1]["error"] is None


def test_non_retryable_error_raises_immediately():
    sleeps = []

    @retry(RetryConfig(sleep=sleeps.append))
    def call():
        raise _gateway_error(401, "Invalid API key")

    with pytest.raises(GatewayError):
        call()
    assert sleeps == []


def test_gives_up_after_max_attempts():
    calls = []

    @retry(RetryConfig(max_attempts=2, sleep=lambda s: None))
    def call():
        calls.append(1)
        raise _gateway_error(503, "unavailable")

    with pytest.raises(GatewayError):
        call()
    assert len(calls) == 2


def test_other_exceptions_are_not_retried():
    @retry(RetryConfig(sleep=lambda s: pytest.fail("slept")))
    def call():
        raise KeyError("x")

    with pytest.raises(KeyError):
        call()
