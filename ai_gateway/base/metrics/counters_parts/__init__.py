"""One-class-per-file parts for provider usage counters."""

from .latency_stats_snapshot import LatencyStatsSnapshot
from .provider_usage_counters import ProviderUsageCounters
from .usage_snapshot import UsageSnapshot

__all__ = [
    "LatencyStatsSnapshot",
    "ProviderUsageCounters",
    "UsageSnapshot",
]
