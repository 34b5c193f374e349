"""Per-provider usage snapshot dataclass."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .latency_stats_snapshot import LatencyStatsSnapshot


@dataclass(frozen=True)
class UsageSnapshot:
    """Point-in-time copy of one provider's usage counters.

    ``calls_by_operation`` counts every dispatched call per canonical
    operation; ``input_chars`` sums the length of the text sent;
    ``failure_by_code`` counts classified failures per error code.
    """

    provider: str
    total: int
    success: int
    failure: int
    cancelled: int
    in_flight: int
    input_chars: int
    calls_by_operation: Dict[str, int]
    failure_by_code: Dict[str, int]
    latency: LatencyStatsSnapshot

    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation suitable for JSON serialization."""
        return asdict(self)


__all__ = ["UsageSnapshot"]
