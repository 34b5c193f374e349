"""
Quality assessment DTO returned by ``calculate_quality_score``.

``score`` is on a 0..100 scale; ``breakdown`` maps dimension names
(readability, relevance, ...) to per-dimension scores on the same scale.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class QualityScore:
    """Overall content quality with per-dimension breakdown and suggestions."""

    score: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "breakdown": dict(self.breakdown),
            "suggestions": list(self.suggestions),
        }


__all__ = ["QualityScore"]
