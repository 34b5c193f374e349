"""Adapter contract public surface.

Re-exports :class:`ProviderAdapter` from ``interfaces_parts`` so adapters and
the service layer import it from a single stable path.
"""

from .interfaces_parts.provider_adapter import Options, ProviderAdapter

__all__ = ["ProviderAdapter", "Options"]
