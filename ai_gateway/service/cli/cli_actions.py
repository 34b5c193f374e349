"""CLI action handlers.

Purpose
-------
Subcommand handlers for the ``ai-gateway`` CLI, keeping the entrypoint
minimal (thin presentation layer). This module has no top-level side effects
and is safe to import in tests.

Host boundary
-------------
The CLI acts as the host: it is the one place that reads a settings file and,
with ``--env``, the process environment. The gateway core never does.

Error semantics
---------------
- Results are printed to stdout as JSON.
- Configuration and lookup errors print ``{"error": ...}`` to stderr and
  return ``2``; classified provider failures print the classified error and
  return ``1``; failed connection tests return ``1``.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Dict, Optional

from ...base.diagnostics import ErrorClassifier
from ...base.errors import GatewayError, NoProviderAvailableError, UnknownProviderError
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...config.settings import GatewaySettings, ProviderSettings, SettingsError, load_settings
from ..bootstrap import build_service_manager
from ..manager import ServiceManager


def to_jsonable(value: Any) -> Any:
    """Convert result models (and lists/dicts of them) to plain JSON data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def _emit(data: Any) -> None:
    print(json.dumps(to_jsonable(data), ensure_ascii=False, default=str, indent=2))


def _fail(message: str, code: int = 2) -> int:
    print(json.dumps({"error": message}), file=sys.stderr)
    return code


def _parse_option_value(raw: str) -> Any:
    """Interpret ``--option`` values as JSON when possible (``3``, ``true``)."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def load_cli_settings(args: argparse.Namespace) -> GatewaySettings:
    """Return settings from ``--config`` or a single offline mock provider.

    Raises
    ------
    SettingsError
        The settings file cannot be read or validated.
    """
    if args.config:
        settings = load_settings(args.config, environ=os.environ if args.env else None)
    else:
        name = args.default_provider
        settings = GatewaySettings(providers={name: ProviderSettings(type="mock")}, default_provider=name)
    if getattr(args, "debug", False):
        settings = settings.model_copy(update={"debug": True})
    return settings


def build_manager(args: argparse.Namespace) -> ServiceManager:
    return build_service_manager(load_cli_settings(args))


def handle_classify(args: argparse.Namespace) -> int:
    """Classify a failure offline and print the classified error."""
    error = ErrorClassifier().classify(args.provider, args.status, args.message, provider_code=args.code)
    _emit(error)
    return 0


def handle_status(args: argparse.Namespace) -> int:
    """Run connection tests; ``0`` only when every provider is reachable."""
    try:
        manager = build_manager(args)
    except (SettingsError, UnknownProviderError) as exc:
        return _fail(str(exc))
    options: Dict[str, Any] = {}
    if args.timeout is not None:
        options["timeout"] = args.timeout
    if args.retries is not None:
        options["retry_attempts"] = args.retries
    with manager:
        results = manager.get_provider_status(options or None)
    _emit(results)
    return 0 if results and all(r.success for r in results.values()) else 1


def handle_capabilities(args: argparse.Namespace) -> int:
    """Print each provider's summary plus its capability checks."""
    try:
        manager = build_manager(args)
    except (SettingsError, UnknownProviderError) as exc:
        return _fail(str(exc))
    with manager:
        providers = manager.describe_providers()
        if args.provider:
            providers = [p for p in providers if p["name"] == args.provider]
            if not providers:
                return _fail(f"Provider '{args.provider}' is not registered")
        for entry in providers:
            entry["checks"] = manager.get_provider_capabilities(entry["name"])
    _emit(providers)
    return 0


def handle_invoke(args: argparse.Namespace) -> int:
    """Invoke one operation through the service manager."""
    try:
        manager = build_manager(args)
    except (SettingsError, UnknownProviderError) as exc:
        return _fail(str(exc))
    options = {key: _parse_option_value(raw) for key, raw in args.options}
    call_args: Dict[str, Any] = {"options": options}
    if args.text is not None:
        call_args["text"] = args.text
    if args.categories:
        call_args["categories"] = args.categories

    logger = get_logger("ai_gateway.cli")
    with manager:
        try:
            provider: Optional[str] = args.provider or manager.provider_for_task(args.operation)
            ctx = LogContext(provider=provider, operation=args.operation)
            normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1)
            result = manager.invoke(provider, args.operation, call_args)
        except (UnknownProviderError, NoProviderAvailableError, ValueError) as exc:
            return _fail(str(exc))
        except GatewayError as exc:
            normalized_log_event(
                logger, "cli.error", ctx, phase="finalize", error_code=exc.code, emitted=False
            )
            print(json.dumps({"error": exc.error.to_dict()}, default=str), file=sys.stderr)
            return 1
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=True)
    _emit({"provider": provider, "operation": args.operation, "result": result})
    return 0


__all__ = [
    "to_jsonable",
    "load_cli_settings",
    "build_manager",
    "handle_classify",
    "handle_status",
    "handle_capabilities",
    "handle_invoke",
]
