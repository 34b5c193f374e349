"""Normalization of provider replies into gateway result models.

Models answer the same prompt in several shapes (``{"entities": [...]}``
versus a bare list, ``entity`` versus ``text`` keys, ``confidence`` versus
``score``). The helpers below accept the known variants, clamp scores into
range and raise :class:`ResponseFormatError` when nothing usable is found.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..errors import ResponseFormatError
from ..models import CategoryScore, Entity, KeywordScore, QualityScore

DEFAULT_ENTITY_CONFIDENCE = 0.8
DEFAULT_KEYWORD_LIMIT = 10

_ENTITY_TEXT_KEYS = ("entity", "text", "word", "name")
_ENTITY_TYPE_KEYS = ("type", "category", "entity_group", "label")
_SCORE_KEYS = ("confidence", "score", "relevance", "probability")
_CATEGORY_KEYS = ("category", "label", "name")
_KEYWORD_KEYS = ("keyword", "text", "word", "term")
_QUALITY_SCORE_KEYS = ("score", "overall", "quality_score", "overall_score")
_BREAKDOWN_KEYS = ("breakdown", "components", "dimensions", "scores")
_SUGGESTION_KEYS = ("suggestions", "improvements", "recommendations")


def clamp(value: Any, low: float = 0.0, high: float = 1.0, default: float = 0.0) -> float:
    """Return ``value`` as a float clamped to ``[low, high]``; ``default`` if not numeric."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return max(low, min(high, number))


def _first(item: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None and value != "":
            return value
    return None


def _items(payload: Any, *wrapper_keys: str) -> Optional[List[Any]]:
    """Return the list carried by ``payload`` directly or under a wrapper key."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in wrapper_keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return None


def int_option(options: Optional[Mapping[str, Any]], key: str, default: int) -> int:
    """Read ``options[key]`` as a positive int; ``default`` when missing or malformed."""
    raw = (options or {}).get(key)
    if isinstance(raw, bool):
        return default
    try:
        value = int(raw) if raw is not None and raw != "" else default
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def parse_limit(options: Optional[Mapping[str, Any]], default: int = DEFAULT_KEYWORD_LIMIT) -> int:
    """Read ``options["limit"]`` as a positive int."""
    return int_option(options, "limit", default)


def min_confidence_option(options: Optional[Mapping[str, Any]]) -> Optional[float]:
    """``options["min_confidence"]`` clamped to [0, 1], or None when unset or not numeric."""
    raw = (options or {}).get("min_confidence")
    if raw is None or isinstance(raw, bool):
        return None
    value = clamp(raw, default=math.nan)
    return None if math.isnan(value) else value


def normalize_entities(payload: Any, *, min_confidence: Optional[float] = None) -> List[Entity]:
    """Build entities from ``{"entities": [...]}`` or a bare list.

    Items lacking a text value are skipped; a missing confidence defaults to
    ``0.8``. Entities below ``min_confidence`` are dropped.
    """
    items = _items(payload, "entities", "results")
    if items is None:
        raise ResponseFormatError("Invalid response format: no entity list in reply")
    entities: List[Entity] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        text = _first(item, _ENTITY_TEXT_KEYS)
        if text is None:
            continue
        raw_score = _first(item, _SCORE_KEYS)
        confidence = DEFAULT_ENTITY_CONFIDENCE if raw_score is None else clamp(raw_score, default=DEFAULT_ENTITY_CONFIDENCE)
        if min_confidence is not None and confidence < min_confidence:
            continue
        entities.append(
            Entity(
                text=str(text).strip(),
                type=str(_first(item, _ENTITY_TYPE_KEYS) or "unknown").lower(),
                confidence=confidence,
            )
        )
    return entities


def normalize_categories(payload: Any, categories: Optional[Sequence[str]] = None) -> List[CategoryScore]:
    """Build category scores sorted by score, highest first.

    Accepts a list of ``{category, confidence}`` items (optionally wrapped
    in ``{"categories": [...]}``), a single ``{"category": ..., "confidence": ...}``
    object, or HuggingFace zero-shot ``{"labels": [...], "scores": [...]}``.
    When ``categories`` is given, results outside it are dropped
    (case-insensitive).
    """
    scores: List[CategoryScore] = []
    if isinstance(payload, Mapping) and isinstance(payload.get("labels"), list):
        labels = payload["labels"]
        values = payload.get("scores") or []
        scores = [
            CategoryScore(category=str(label), score=clamp(values[i] if i < len(values) else 0.0))
            for i, label in enumerate(labels)
        ]
    else:
        items = _items(payload, "categories", "classifications", "results")
        if items is None and isinstance(payload, Mapping) and _first(payload, _CATEGORY_KEYS) is not None:
            items = [payload]
        if items is None:
            raise ResponseFormatError("Invalid response format: no category in reply")
        for item in items:
            if isinstance(item, str):
                scores.append(CategoryScore(category=item, score=1.0))
                continue
            if not isinstance(item, Mapping):
                continue
            name = _first(item, _CATEGORY_KEYS)
            if name is None:
                continue
            raw_score = _first(item, _SCORE_KEYS)
            scores.append(CategoryScore(category=str(name), score=clamp(raw_score, default=1.0) if raw_score is not None else 1.0))
    if categories:
        allowed = {c.lower() for c in categories}
        scores = [s for s in scores if s.category.lower() in allowed]
    return sorted(scores, key=lambda s: s.score, reverse=True)


def normalize_keywords(payload: Any, limit: int = DEFAULT_KEYWORD_LIMIT) -> List[KeywordScore]:
    """Build keyword scores sorted by score, highest first, truncated to ``limit``.

    Plain string items are scored by rank (first = 1.0, decreasing).
    Duplicate keywords keep their highest score.
    """
    items = _items(payload, "keywords", "results")
    if items is None:
        raise ResponseFormatError("Invalid response format: no keyword list in reply")
    best: dict = {}
    total = len(items) or 1
    for index, item in enumerate(items):
        if isinstance(item, str):
            keyword, score = item, 1.0 - index / total
        elif isinstance(item, Mapping):
            keyword = _first(item, _KEYWORD_KEYS)
            if keyword is None:
                continue
            raw_score = _first(item, _SCORE_KEYS)
            score = clamp(raw_score) if raw_score is not None else 1.0 - index / total
        else:
            continue
        keyword = str(keyword).strip()
        if not keyword:
            continue
        if keyword not in best or score > best[keyword]:
            best[keyword] = score
    ranked = sorted(best.items(), key=lambda kv: kv[1], reverse=True)
    return [KeywordScore(keyword=k, score=s) for k, s in ranked[:limit]]


def normalize_quality(payload: Any) -> QualityScore:
    """Build a quality score (0..100) with breakdown and suggestions."""
    if not isinstance(payload, Mapping):
        raise ResponseFormatError("Invalid response format: quality reply is not an object")
    raw_score = _first(payload, _QUALITY_SCORE_KEYS)
    if raw_score is None:
        raise ResponseFormatError("Invalid response format: quality reply has no score")
    breakdown_raw = _first(payload, _BREAKDOWN_KEYS) or {}
    breakdown = (
        {str(k): clamp(v, 0.0, 100.0) for k, v in breakdown_raw.items()}
        if isinstance(breakdown_raw, Mapping)
        else {}
    )
    suggestions_raw = _first(payload, _SUGGESTION_KEYS) or []
    if isinstance(suggestions_raw, str):
        suggestions_raw = [suggestions_raw]
    suggestions = [str(s) for s in suggestions_raw if str(s).strip()] if isinstance(suggestions_raw, list) else []
    return QualityScore(score=clamp(raw_score, 0.0, 100.0), breakdown=breakdown, suggestions=suggestions)


__all__ = [
    "DEFAULT_ENTITY_CONFIDENCE",
    "DEFAULT_KEYWORD_LIMIT",
    "clamp",
    "int_option",
    "parse_limit",
    "min_confidence_option",
    "normalize_entities",
    "normalize_categories",
    "normalize_keywords",
    "normalize_quality",
]
