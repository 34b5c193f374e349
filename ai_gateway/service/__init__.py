"""Service layer: the manager, its settings-driven bootstrap and the CLI."""

from .bootstrap import build_service_manager
from .manager import ServiceManager

__all__ = ["ServiceManager", "build_service_manager"]
