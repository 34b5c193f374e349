"""Token usage extraction helpers.

Converts provider-specific ``usage`` objects in JSON replies into the
canonical mapping used by adapters and structured logging:

    {"prompt": <int|None>, "completion": <int|None>, "total": <int|None>}

Supported shapes
----------------
OpenAI:
    ``{"usage": {"prompt_tokens", "completion_tokens", "total_tokens"}}``
Anthropic:
    ``{"usage": {"input_tokens", "output_tokens"}}`` (total derived)

Failure Modes
-------------
Never raises. Missing, non-integer or negative values become ``None``. The
total is derived only when both components are present.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

CanonicalUsage = Dict[str, Optional[int]]

PLACEHOLDER_USAGE: CanonicalUsage = {"prompt": None, "completion": None, "total": None}


def _coerce(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 0 else None


def _finish(prompt: Optional[int], completion: Optional[int], total: Optional[int]) -> CanonicalUsage:
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": total}


def _usage_block(raw: Any) -> Optional[Mapping[str, Any]]:
    usage = raw.get("usage") if isinstance(raw, Mapping) else None
    return usage if isinstance(usage, Mapping) else None


def extract_openai_token_usage(raw: Any) -> CanonicalUsage:
    """Map an OpenAI chat completion ``usage`` block."""
    usage = _usage_block(raw)
    if usage is None:
        return dict(PLACEHOLDER_USAGE)
    return _finish(
        _coerce(usage.get("prompt_tokens")),
        _coerce(usage.get("completion_tokens")),
        _coerce(usage.get("total_tokens")),
    )


def extract_anthropic_token_usage(raw: Any) -> CanonicalUsage:
    """Map an Anthropic Messages ``usage`` block."""
    usage = _usage_block(raw)
    if usage is None:
        return dict(PLACEHOLDER_USAGE)
    return _finish(
        _coerce(usage.get("input_tokens")),
        _coerce(usage.get("output_tokens")),
        _coerce(usage.get("total_tokens")),
    )


def estimate_tokens(text: str) -> int:
    """Rough token estimate (four characters per token) for APIs without usage data."""
    return (len(text or "") + 3) // 4


__all__ = [
    "CanonicalUsage",
    "PLACEHOLDER_USAGE",
    "extract_openai_token_usage",
    "extract_anthropic_token_usage",
    "estimate_tokens",
]
