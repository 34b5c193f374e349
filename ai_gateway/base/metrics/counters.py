"""Provider usage counters.

Re-exports the one-class-per-file implementations from
``metrics/counters_parts`` under a single import path.
"""

from .counters_parts import (
    LatencyStatsSnapshot,
    ProviderUsageCounters,
    UsageSnapshot,
)

__all__ = [
    "ProviderUsageCounters",
    "UsageSnapshot",
    "LatencyStatsSnapshot",
]
