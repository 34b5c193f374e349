"""Thread-safe in-memory usage counters for one provider."""

from __future__ import annotations

from threading import RLock
from typing import Dict, Optional

from .latency_stats_snapshot import LatencyStatsSnapshot
from .usage_snapshot import UsageSnapshot


class ProviderUsageCounters:
    """Counts calls dispatched to one provider by the service manager.

    Each call is bracketed by ``record_start`` and exactly one of
    ``record_success``, ``record_failure`` or ``record_cancelled``.
    """

    __slots__ = (
        "_provider",
        "_lock",
        "_total",
        "_success",
        "_failure",
        "_cancelled",
        "_in_flight",
        "_input_chars",
        "_calls_by_operation",
        "_failure_by_code",
        # latency aggregates
        "_latency_count",
        "_latency_total",
        "_latency_min",
        "_latency_max",
    )

    def __init__(self, provider: str):
        self._provider = provider
        self._lock = RLock()
        self._total = 0
        self._success = 0
        self._failure = 0
        self._cancelled = 0
        self._in_flight = 0
        self._input_chars = 0
        self._calls_by_operation: Dict[str, int] = {}
        self._failure_by_code: Dict[str, int] = {}
        self._latency_count = 0
        self._latency_total = 0.0
        self._latency_min: Optional[float] = None
        self._latency_max: Optional[float] = None

    @property
    def provider(self) -> str:
        return self._provider

    # -------------------------- Record Methods -------------------------- #
    def record_start(self, operation: str, input_chars: int = 0) -> None:
        """Record a dispatched call and the size of its text input."""
        with self._lock:
            self._total += 1
            self._in_flight += 1
            self._input_chars += max(0, int(input_chars))
            self._calls_by_operation[operation] = self._calls_by_operation.get(operation, 0) + 1

    def record_success(self, latency_ms: float) -> None:
        with self._lock:
            self._success += 1
            self._in_flight = max(0, self._in_flight - 1)
            self._update_latency(latency_ms)

    def record_failure(self, error_code: str, latency_ms: Optional[float] = None) -> None:
        """Record a classified failure.

        Args:
            error_code: Code of the ``ClassifiedError``.
            latency_ms: Included in the latency aggregate when provided.
        """
        with self._lock:
            self._failure += 1
            self._failure_by_code[error_code] = self._failure_by_code.get(error_code, 0) + 1
            self._in_flight = max(0, self._in_flight - 1)
            if latency_ms is not None:
                self._update_latency(latency_ms)

    def record_cancelled(self) -> None:
        with self._lock:
            self._cancelled += 1
            self._in_flight = max(0, self._in_flight - 1)

    def _update_latency(self, latency_ms: float) -> None:
        if latency_ms < 0:
            return  # ignore invalid
        if self._latency_min is None or latency_ms < self._latency_min:
            self._latency_min = latency_ms
        if self._latency_max is None or latency_ms > self._latency_max:
            self._latency_max = latency_ms
        self._latency_count += 1
        self._latency_total += latency_ms

    # -------------------------- Snapshot API -------------------------- #
    def snapshot(self, reset: bool = False) -> UsageSnapshot:
        """Return an immutable snapshot of the current counters.

        Args:
            reset: Zero the counters after the snapshot (``in_flight`` is kept).
        """
        with self._lock:
            avg_ms = self._latency_total / self._latency_count if self._latency_count else None
            snapshot = UsageSnapshot(
                provider=self._provider,
                total=self._total,
                success=self._success,
                failure=self._failure,
                cancelled=self._cancelled,
                in_flight=self._in_flight,
                input_chars=self._input_chars,
                calls_by_operation=dict(self._calls_by_operation),
                failure_by_code=dict(self._failure_by_code),
                latency=LatencyStatsSnapshot(
                    count=self._latency_count,
                    total_ms=self._latency_total,
                    min_ms=self._latency_min,
                    max_ms=self._latency_max,
                    avg_ms=avg_ms,
                ),
            )
            if reset:
                self._total = 0
                self._success = 0
                self._failure = 0
                self._cancelled = 0
                self._input_chars = 0
                self._calls_by_operation.clear()
                self._failure_by_code.clear()
                self._latency_count = 0
                self._latency_total = 0.0
                self._latency_min = None
                self._latency_max = None
            return snapshot

    def as_dict(self, reset: bool = False) -> Dict[str, object]:
        """Convenience wrapper returning the snapshot converted to a dictionary."""
        return self.snapshot(reset=reset).to_dict()


__all__ = ["ProviderUsageCounters"]
