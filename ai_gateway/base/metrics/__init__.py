"""Usage metrics package.

Exports per-provider usage counters and their snapshots.
"""

from .counters import (
    LatencyStatsSnapshot,
    ProviderUsageCounters,
    UsageSnapshot,
)

__all__ = [
    "ProviderUsageCounters",
    "UsageSnapshot",
    "LatencyStatsSnapshot",
]
