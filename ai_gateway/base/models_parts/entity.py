"""Named entity DTO returned by ``extract_entities``."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Entity:
    """A named entity found in the input text.

    Attributes:
        text: Entity surface form as it appears in the text.
        type: Entity type label (``person``, ``organization``, ...).
        confidence: Confidence in ``[0, 1]``.
    """

    text: str
    type: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["Entity"]
