"""Exponential backoff policy and caller-side retry helper.

``RetryConfig`` describes the backoff schedule ``base * 2**(n-1)`` before
retry ``n`` (0.5s, 1s, 2s, ... with the default base). The connection tester
consumes it directly. ``retry`` is an opt-in decorator for callers that want
to re-run business operations whose :class:`GatewayError` says
``retry_recommended``; the service manager itself never retries.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, Protocol, TypeVar

from ..errors import GatewayError
from ..timeouts import DEFAULT_BACKOFF_BASE_SECONDS

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: GatewayError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Backoff schedule.

    Attributes:
        max_attempts: Total attempts including the first one.
        delay_base: Delay before the first retry, doubled for each later retry.
        attempt_logger: Optional callback invoked after every attempt.
        sleep: Sleep function; injectable for tests.
    """

    max_attempts: int = 3
    delay_base: float = DEFAULT_BACKOFF_BASE_SECONDS
    attempt_logger: AttemptLogger | None = None
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def delay_before(self, attempt: int) -> float:
        """Return the delay before zero-based ``attempt`` (``0`` for the first)."""
        if attempt <= 0:
            return 0.0
        return self.delay_base * (2 ** (attempt - 1))

    def delays(self) -> Iterator[float]:
        """Yield the delay before each retry, in order."""
        for attempt in range(1, self.max_attempts):
            yield self.delay_before(attempt)


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator re-running a call on retry-recommended gateway errors.

    - Retries only when ``GatewayError.retry_recommended`` is true
    - Exponential backoff per ``RetryConfig.delay_before``
    - Other exceptions propagate immediately

    Only wrap idempotent calls; the gateway cannot tell whether a failed
    content operation was partially processed remotely.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            attempt = 0
            while True:
                try:
                    result = func(*args, **kwargs)
                except GatewayError as e:
                    has_next = attempt + 1 < config.max_attempts and e.retry_recommended
                    delay = config.delay_before(attempt + 1) if has_next else None
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if delay is None:
                        raise
                    config.sleep(delay)
                    attempt += 1
                    continue
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
