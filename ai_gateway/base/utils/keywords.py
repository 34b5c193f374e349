"""Rule-based keyword extraction.

Used when a provider has no keyword model or its model call fails. Words are
lower-cased, punctuation is dropped, stop words and words of two characters
or fewer are removed, and each remaining word is scored by its share of the
remaining words.
"""
from __future__ import annotations

import re
from collections import Counter
from typing import List

from ..models import KeywordScore
from .normalizers import DEFAULT_KEYWORD_LIMIT

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "were", "will", "with",
    }
)

_NON_WORD = re.compile(r"[^\w\s]|_", re.UNICODE)


def extract_keywords(text: str, limit: int = DEFAULT_KEYWORD_LIMIT) -> List[KeywordScore]:
    """Return up to ``limit`` keywords ranked by relative frequency.

    Ties keep first-occurrence order.
    """
    words = [
        word
        for word in _NON_WORD.sub(" ", (text or "").lower()).split()
        if len(word) > 2 and word not in STOP_WORDS
    ]
    if not words:
        return []
    counts = Counter(words)
    total = len(words)
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [KeywordScore(keyword=word, score=count / total) for word, count in ranked[:limit]]


__all__ = ["STOP_WORDS", "extract_keywords"]
