"""Classification result entry."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class CategoryScore:
    """One category with its confidence score in ``[0, 1]``."""

    category: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["CategoryScore"]
