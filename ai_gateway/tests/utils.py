"""Shared testing utilities for the gateway test suite.

Exports:
    - ListHandler: log record collector with JSON decoding
    - FakeClock: monotonic clock advanced by recorded sleeps
    - json_transport: ``httpx.MockTransport`` builder for adapter tests
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional

import httpx


class ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[Dict[str, Any]]:
        """Decode JSON messages; non-JSON lines are skipped."""
        out: List[Dict[str, Any]] = []
        for record in self.records:
            try:
                out.append(json.loads(record.getMessage()))
            except ValueError:
                continue
        return out


class FakeClock:
    """Monotonic clock advanced by the recorded sleeps."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def json_transport(handler: Callable[[httpx.Request], Any], calls: Optional[List[httpx.Request]] = None) -> httpx.MockTransport:
    """Build a MockTransport whose handler may return a Response or ``(status, json)``."""

    def _handle(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        outcome = handler(request)
        if isinstance(outcome, httpx.Response):
            return outcome
        status, body = outcome
        return httpx.Response(status, json=body)

    return httpx.MockTransport(_handle)


__all__ = ["ListHandler", "FakeClock", "json_transport"]
