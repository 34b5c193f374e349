"""Wire a :class:`ServiceManager` from :class:`GatewaySettings`.

This is the host-side composition root: it is the only place where settings
become adapters. Each enabled provider section is built through
``ProviderFactory`` and registered under its section name; disabled sections
are skipped.

``transports`` maps section names to ``httpx`` transports and is how tests
(and hosts with custom networking) route adapter traffic without patching.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..base.diagnostics import ConnectionTester, ErrorClassifier, RequestLogger
from ..base.dto.adapter_params import AdapterParams
from ..base.factory import ProviderFactory
from ..base.logging import get_logger, log_event
from ..config.settings import GatewaySettings
from .manager import ServiceManager


def build_service_manager(
    settings: GatewaySettings,
    transports: Optional[Mapping[str, httpx.BaseTransport]] = None,
    *,
    sink: Optional[logging.Logger] = None,
) -> ServiceManager:
    """Build a manager with one adapter per enabled provider section.

    Args:
        settings: Validated gateway settings.
        transports: Optional per-section ``httpx`` transports.
        sink: Structured log sink for the shared ``RequestLogger``.

    Raises:
        UnknownProviderError: a section names an unknown adapter type.
    """
    request_logger = RequestLogger(
        "service_manager",
        debug=settings.debug,
        capacity=settings.log_capacity,
        sink=sink,
    )
    classifier = ErrorClassifier()
    manager = ServiceManager(
        request_logger,
        classifier,
        ConnectionTester(request_logger, classifier),
        default_provider=settings.default_provider,
        task_preferences=settings.task_preferences,
        timeout_seconds=settings.timeout_seconds,
    )
    logger = get_logger("ai_gateway.service")
    for name, section in settings.providers.items():
        if not section.enabled:
            log_event(logger, "provider.skipped", provider=name, reason="disabled")
            continue
        provider_type = settings.provider_type(name)
        params = AdapterParams(
            provider=provider_type,
            model=section.model,
            api_key=section.api_key,
            base_url=section.base_url,
            timeout_seconds=section.timeout_seconds or settings.timeout_seconds,
            headers=dict(section.headers),
            extra=dict(section.extra),
        )
        kwargs: dict[str, Any] = {"request_logger": request_logger}
        if transports and name in transports:
            kwargs["transport"] = transports[name]
        if provider_type == "mock":
            kwargs.setdefault("provider", name)
        adapter = ProviderFactory.create(provider_type, params=params, **kwargs)
        manager.register_provider(name, adapter)
    return manager


__all__ = ["build_service_manager"]
