"""
Capability self-report of an adapter.

``supported_operations`` lists canonical operation names (``summarize``,
``extract_entities``, ``classify``, ``generate_keywords``,
``calculate_quality_score``). ``features`` carries provider extras such as
the default model or JSON mode support.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable


@dataclass(frozen=True)
class Capabilities:
    """Operations an adapter advertises, plus free-form feature flags."""

    supported_operations: FrozenSet[str] = frozenset()
    features: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, operations: Iterable[str], **features: Any) -> "Capabilities":
        return cls(supported_operations=frozenset(operations), features=dict(features))

    def supports(self, operation: str) -> bool:
        return operation in self.supported_operations

    def to_dict(self) -> Dict[str, Any]:
        return {"supported_operations": sorted(self.supported_operations), "features": dict(self.features)}


__all__ = ["Capabilities"]
