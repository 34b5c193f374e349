"""
Five-tier error classifier.

Purpose
-------
Map a raw failure ``(provider id, status code, message)`` to an immutable
:class:`ClassifiedError` carrying a level, a machine-readable code, a retry
recommendation and operator-facing recovery guidance.

Level derivation
----------------
1. A status code is mapped through a fixed table:
   ``{0,408,502,503,504}`` Network, ``{401,403,429}`` Auth,
   ``{400,405,413,415,422}`` Request, ``{500,501,507}`` Provider; any other
   status is Provider.
2. Without a status code the call-site ``level_hint`` is used, else Provider.

Code determination
------------------
Within the level, the provider's code table is consulted (generic table
when the provider has none for that level):

1. a structured provider code (``error.code``/``error.type`` of the payload),
   translated through the provider alias table, if the result exists at
   that level;
2. the first code whose description is a case-insensitive substring of the
   message;
3. the first code of the level;
4. ``unknown_error`` when no table has codes for the level.

Message matching is heuristic and can pick an imprecise code for free-form
provider messages; structured codes are preferred whenever adapters can
extract them. Level derivation is exact.

Failure modes
-------------
``classify`` never raises. Classification is a pure function of its inputs;
only ``timestamp`` varies between calls unless passed explicitly.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

from ..errors import ClassifiedError, ErrorLevel
from .error_codes import (
    GENERIC_PROVIDER,
    PERMANENT_PROVIDER_CODES,
    PROVIDER_CODE_ALIASES,
    PROVIDER_CODES,
    RATE_LIMIT_CODES,
    UNKNOWN_ERROR_CODE,
    CodeTable,
)

STATUS_LEVELS: Mapping[int, ErrorLevel] = {
    0: ErrorLevel.NETWORK,
    408: ErrorLevel.NETWORK,
    502: ErrorLevel.NETWORK,
    503: ErrorLevel.NETWORK,
    504: ErrorLevel.NETWORK,
    401: ErrorLevel.AUTH,
    403: ErrorLevel.AUTH,
    429: ErrorLevel.AUTH,
    400: ErrorLevel.REQUEST,
    405: ErrorLevel.REQUEST,
    413: ErrorLevel.REQUEST,
    415: ErrorLevel.REQUEST,
    422: ErrorLevel.REQUEST,
    500: ErrorLevel.PROVIDER,
    501: ErrorLevel.PROVIDER,
    507: ErrorLevel.PROVIDER,
}

_RECOVERY_NETWORK = "Retry with exponential backoff. If persistent, check connection or try a different provider."
_RECOVERY_RATE_LIMIT = "Wait and retry later. Consider implementing rate limiting or adjusting request frequency."
_RECOVERY_AUTH = "Verify API key is valid and has sufficient permissions."
_RECOVERY_REQUEST = "Check request format and parameters. Consult provider documentation for correct usage."
_RECOVERY_QUOTA = "Upgrade plan or wait for quota reset. Consider implementing usage limits."
_RECOVERY_POLICY = "Modify content to comply with provider policies. Consider content pre-filtering."
_RECOVERY_PROVIDER = "Try a different provider or retry later. Check provider status page for outages."
_RECOVERY_RESPONSE = "Check response parsing logic. Ensure compatibility with provider API version."
_RECOVERY_UNKNOWN = "Check logs for more details and contact support if the issue persists."

_POLICY_CODES = frozenset({"content_policy_violation", "content_policy", "content_filtered"})


def _coerce_status(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


def level_for_status(status_code: Optional[int], level_hint: Optional[ErrorLevel] = None) -> ErrorLevel:
    """Return the level for a status code, or for its absence."""
    if status_code is None:
        return level_hint if level_hint is not None else ErrorLevel.PROVIDER
    return STATUS_LEVELS.get(status_code, ErrorLevel.PROVIDER)


def is_retry_recommended(level: ErrorLevel, code: str) -> bool:
    """Deterministic retry policy of a level and code."""
    if level is ErrorLevel.NETWORK:
        return True
    if level is ErrorLevel.AUTH:
        return code in RATE_LIMIT_CODES
    if level is ErrorLevel.PROVIDER:
        return code not in PERMANENT_PROVIDER_CODES
    return False


def recovery_strategy(level: ErrorLevel, code: str) -> str:
    """Operator-facing guidance for a level and code."""
    if level is ErrorLevel.NETWORK:
        return _RECOVERY_NETWORK
    if level is ErrorLevel.AUTH:
        return _RECOVERY_RATE_LIMIT if code in RATE_LIMIT_CODES else _RECOVERY_AUTH
    if level is ErrorLevel.REQUEST:
        return _RECOVERY_REQUEST
    if level is ErrorLevel.PROVIDER:
        if code == "quota_exceeded":
            return _RECOVERY_QUOTA
        if code in _POLICY_CODES:
            return _RECOVERY_POLICY
        return _RECOVERY_PROVIDER
    if level is ErrorLevel.RESPONSE:
        return _RECOVERY_RESPONSE
    return _RECOVERY_UNKNOWN


class ErrorClassifier:
    """Pure classifier of raw provider failures.

    One instance is shared across providers and parameterized per call by
    provider id. Code tables are injectable for hosts adding providers.
    """

    def __init__(
        self,
        code_tables: Optional[Mapping[str, CodeTable]] = None,
        code_aliases: Optional[Mapping[str, Mapping[str, str]]] = None,
    ) -> None:
        self._tables: Mapping[str, CodeTable] = code_tables if code_tables is not None else PROVIDER_CODES
        self._aliases: Mapping[str, Mapping[str, str]] = (
            code_aliases if code_aliases is not None else PROVIDER_CODE_ALIASES
        )

    def classify(
        self,
        provider_id: str,
        status_code: Optional[int] = None,
        message: str = "",
        *,
        provider_code: Optional[str] = None,
        level_hint: Optional[ErrorLevel] = None,
        timestamp: Optional[datetime] = None,
    ) -> ClassifiedError:
        """Classify a raw failure.

        Args:
            provider_id: Provider the failure was observed on.
            status_code: HTTP-like status, ``0`` for transport failures,
                ``None`` when no status applies.
            message: Failure text as reported.
            provider_code: Structured error code from the provider payload.
            level_hint: Level to use when ``status_code`` is ``None``.
            timestamp: Classification time; defaults to now (UTC).

        Returns:
            ClassifiedError: Never raises.
        """
        provider = (provider_id or "").strip().lower() or GENERIC_PROVIDER
        text = "" if message is None else str(message)
        status_code = _coerce_status(status_code)
        level = level_for_status(status_code, level_hint)
        code = self.determine_code(provider, level, text, provider_code)
        return ClassifiedError(
            provider=provider,
            status_code=int(status_code or 0),
            level=level,
            level_name=level.label,
            code=code,
            message=text,
            description=self.describe(provider, level, code),
            retry_recommended=is_retry_recommended(level, code),
            recovery_strategy=recovery_strategy(level, code),
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    def codes_for_level(self, provider_id: str, level: ErrorLevel) -> Mapping[str, str]:
        """Return the ordered ``code -> description`` table used for a level."""
        provider = (provider_id or "").strip().lower()
        table = self._tables.get(provider)
        codes = table.get(level) if table is not None else None
        if codes:
            return codes
        generic = self._tables.get(GENERIC_PROVIDER)
        return (generic.get(level) if generic is not None else None) or {}

    def determine_code(
        self,
        provider_id: str,
        level: ErrorLevel,
        message: str,
        provider_code: Optional[str] = None,
    ) -> str:
        codes = self.codes_for_level(provider_id, level)
        if not codes:
            return UNKNOWN_ERROR_CODE
        if provider_code:
            candidate = self._canonical_code(provider_id, provider_code)
            if candidate in codes:
                return candidate
        lowered = message.lower()
        if lowered:
            for code, description in codes.items():
                if description.lower() in lowered:
                    return code
        return next(iter(codes))

    def describe(self, provider_id: str, level: ErrorLevel, code: str) -> str:
        """Resolve the human description of a code (generic table as fallback)."""
        description = self.codes_for_level(provider_id, level).get(code)
        if description is None:
            generic = self._tables.get(GENERIC_PROVIDER)
            description = ((generic.get(level) if generic is not None else None) or {}).get(code)
        return description or "Unknown error"

    @staticmethod
    def error_levels() -> Dict[int, str]:
        """Return ``{level value: label}`` for all levels."""
        return {int(level): level.label for level in ErrorLevel}

    def _canonical_code(self, provider_id: str, provider_code: str) -> str:
        raw = str(provider_code).strip().lower()
        for key in (provider_id, GENERIC_PROVIDER):
            aliases = self._aliases.get(key)
            if aliases and raw in aliases:
                return aliases[raw]
        return raw


__all__ = [
    "ErrorClassifier",
    "STATUS_LEVELS",
    "level_for_status",
    "is_retry_recommended",
    "recovery_strategy",
]
