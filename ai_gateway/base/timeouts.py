"""Timeout values and per-call timeout resolution.

Key Components
--------------
DEFAULT_* constants
    The gateway's default bounds: one adapter operation, one connection
    probe attempt, and the first backoff delay between probe attempts.
    Nothing here reads the environment; hosts pass overrides explicitly.

resolve_timeout(options, default)
    Return the effective per-call timeout from an operation ``options``
    mapping, falling back to ``default`` for missing, non-numeric or
    non-positive values.

Failure Modes
-------------
Pure functions; never raise for malformed option values.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

DEFAULT_INVOKE_TIMEOUT_SECONDS = 10.0
DEFAULT_CONNECTION_TEST_TIMEOUT_SECONDS = 10.0
DEFAULT_BACKOFF_BASE_SECONDS = 0.5


def _as_positive_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        val = float(value)
    except (TypeError, ValueError):
        return None
    return val if val > 0 else None


def resolve_timeout(options: Optional[Mapping[str, Any]], default: float = DEFAULT_INVOKE_TIMEOUT_SECONDS) -> float:
    """Return ``options["timeout"]`` when it is a positive number, else ``default``."""
    if not options:
        return default
    resolved = _as_positive_float(options.get("timeout"))
    return resolved if resolved is not None else default


__all__ = [
    "resolve_timeout",
    "DEFAULT_INVOKE_TIMEOUT_SECONDS",
    "DEFAULT_CONNECTION_TEST_TIMEOUT_SECONDS",
    "DEFAULT_BACKOFF_BASE_SECONDS",
]
