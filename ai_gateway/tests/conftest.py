"""Shared fixtures for the gateway test suite.

Nothing here touches the network: HTTP adapters are driven through
``httpx.MockTransport`` and connection-test backoff sleeps are recorded
instead of slept.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from ai_gateway.base.diagnostics import RequestLogger
from ai_gateway.base.logging import BASE_LOGGER_NAME, LOG_LEVEL_ENV, get_logger
from ai_gateway.mock import MockAdapter

from .utils import FakeClock, ListHandler


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def request_logger() -> RequestLogger:
    return RequestLogger("test", debug=True)


@pytest.fixture()
def mock_adapter(request_logger: RequestLogger) -> MockAdapter:
    return MockAdapter(request_logger=request_logger)


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[ListHandler]:
    """Attach a collector to the shared gateway logger at DEBUG level."""
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    base = get_logger(BASE_LOGGER_NAME)
    handler = ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
