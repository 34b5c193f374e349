"""Latency statistics snapshot dataclass.

Immutable aggregate of the latencies observed for one provider's calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LatencyStatsSnapshot:
    """Immutable snapshot of aggregated latency statistics.

    Attributes:
        count: Number of completed calls with a recorded latency.
        total_ms: Sum of observed latencies in milliseconds.
        min_ms: Minimum observed latency (ms) or None without samples.
        max_ms: Maximum observed latency (ms) or None without samples.
        avg_ms: Arithmetic mean (ms) or None without samples.
    """

    count: int
    total_ms: float
    min_ms: Optional[float]
    max_ms: Optional[float]
    avg_ms: Optional[float]


__all__ = ["LatencyStatsSnapshot"]
