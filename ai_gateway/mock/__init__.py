"""Mock provider package exposing a deterministic, fixture-backed adapter."""

from .client import MockAdapter, load_fixture_catalog

__all__ = ["MockAdapter", "load_fixture_catalog"]
