"""Lookup error for provider ids that are not registered or cannot be built."""
from __future__ import annotations


class UnknownProviderError(LookupError):
    """Raised when a provider id cannot be resolved.

    Failure modes include:
    - The id is not registered with the service manager.
    - The factory has no adapter mapping for the id.
    - The adapter module cannot be imported or its constructor raised.
    """


__all__ = ["UnknownProviderError"]
