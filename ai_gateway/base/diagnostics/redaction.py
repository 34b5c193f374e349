"""Secret redaction for headers and payloads stored in diagnostic logs.

Redaction produces new containers; inputs are never mutated. Matching is
case-insensitive on header names and payload keys.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

REDACTED = "[REDACTED]"

SENSITIVE_HEADERS = frozenset({"authorization", "api-key", "x-api-key"})
SENSITIVE_KEYS = frozenset({"api_key", "apikey", "key", "token", "secret"})


def redact_headers(headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``headers`` with credential headers replaced by ``REDACTED``."""
    if not headers:
        return {}
    return {
        str(name): (REDACTED if str(name).lower() in SENSITIVE_HEADERS else value)
        for name, value in headers.items()
    }


def redact_payload(value: Any) -> Any:
    """Recursively redact sensitive keys through mappings, lists and tuples."""
    if isinstance(value, Mapping):
        return {
            k: (REDACTED if isinstance(k, str) and k.lower() in SENSITIVE_KEYS else redact_payload(v))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_payload(item) for item in value]
    return value


__all__ = [
    "REDACTED",
    "SENSITIVE_HEADERS",
    "SENSITIVE_KEYS",
    "redact_headers",
    "redact_payload",
]
