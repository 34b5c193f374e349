"""Host-side configuration helpers.

Nothing under ``ai_gateway.base`` imports this package; hosts and the CLI call
:func:`load_settings` explicitly and hand the result to
:func:`ai_gateway.service.bootstrap.build_service_manager`.
"""
from __future__ import annotations

from .settings import (
    GatewaySettings,
    ProviderSettings,
    SettingsError,
    expand_env_refs,
    load_settings,
)

__all__ = [
    "GatewaySettings",
    "ProviderSettings",
    "SettingsError",
    "expand_env_refs",
    "load_settings",
]
