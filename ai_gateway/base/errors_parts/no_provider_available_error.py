"""Raised when task routing finds no registered provider at all."""
from __future__ import annotations


class NoProviderAvailableError(LookupError):
    """No provider is registered that could serve the requested task."""

    def __init__(self, task: str) -> None:
        super().__init__(f"No AI provider available for task '{task}'")
        self.task = task


__all__ = ["NoProviderAvailableError"]
