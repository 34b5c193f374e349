"""Interface parts package (one contract per module)."""

from .provider_adapter import Options, ProviderAdapter

__all__ = ["ProviderAdapter", "Options"]
