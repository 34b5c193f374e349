"""Lenient JSON decoding for model replies.

Chat models asked for JSON often wrap it in Markdown fences, prefix it with
commentary, leave trailing commas or stop before closing every bracket.
``parse_json_reply`` tries a strict decode first and falls back to
``attempt_json_repair`` before giving up.
"""
from __future__ import annotations

import json
import re
from typing import Any, List

from ..errors import ResponseFormatError

_TRAILING_COMMA = re.compile(r",\s*(\}|\])")
_CLOSERS = {"{": "}", "[": "]"}


def clean_json_markers(s: str) -> str:
    """Strip Markdown code fences (```json ... ``` or ``` ... ```) and whitespace."""
    s = s.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def _drop_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def _scan(text: str) -> tuple[bool, List[str]]:
    """Return ``(inside_string, open_brackets)`` after scanning ``text``."""
    in_str = False
    escaped = False
    stack: List[str] = []
    for ch in text:
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch in _CLOSERS:
            stack.append(ch)
        elif ch in "}]" and stack and _CLOSERS[stack[-1]] == ch:
            stack.pop()
    return in_str, stack


def attempt_json_repair(s: str) -> str:
    """Best-effort normalization of nearly-JSON text.

    Steps:
        1. Remove Markdown code fences.
        2. Trim leading commentary before the first ``{`` or ``[``.
        3. Remove trailing commas before ``}`` or ``]``.
        4. Close an unterminated string literal.
        5. Append the closers of still-open brackets, innermost first.

    Never raises; the result may still be invalid JSON.
    """
    s = clean_json_markers(s)
    if starts := [i for i in (s.find("{"), s.find("[")) if i != -1]:
        s = s[min(starts):]
    s = _drop_trailing_commas(s)
    in_str, stack = _scan(s)
    if in_str:
        s += '"'
    s += "".join(_CLOSERS[ch] for ch in reversed(stack))
    return _drop_trailing_commas(s)


def parse_json_reply(text: str) -> Any:
    """Decode a model reply expected to contain JSON.

    Raises:
        ResponseFormatError: the text is not JSON even after repair.
    """
    if not isinstance(text, str) or not text.strip():
        raise ResponseFormatError("Invalid response format: empty reply where JSON was expected")
    try:
        return json.loads(text)
    except ValueError:
        pass
    try:
        return json.loads(attempt_json_repair(text))
    except ValueError as exc:
        raise ResponseFormatError(f"Invalid response format: could not parse JSON reply ({exc})") from exc


__all__ = ["clean_json_markers", "attempt_json_repair", "parse_json_reply"]
