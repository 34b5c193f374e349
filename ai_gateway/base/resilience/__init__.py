"""Resilience helpers: backoff schedule and opt-in caller retries."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry

__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "retry"]
