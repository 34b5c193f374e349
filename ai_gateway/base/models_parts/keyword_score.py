"""Keyword extraction result entry."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class KeywordScore:
    """A keyword or key phrase with its relevance score in ``[0, 1]``."""

    keyword: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["KeywordScore"]
