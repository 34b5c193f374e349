"""CLI parser construction for ai-gateway.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...config.defaults import CLI_DEFAULT_PROVIDER


def _add_settings_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--config``/``--env`` to a subcommand working on live providers.

    Notes
    -----
    - Without ``--config`` a single offline ``mock`` provider is used.
    - ``--env`` expands ``${VAR}`` references in the settings file from the
      process environment; without it references are left as written.
    """
    parser.add_argument("--config", default=None, help="JSON or YAML gateway settings file")
    parser.add_argument("--env", action="store_true", help="Expand ${VAR} from the process environment")
    parser.add_argument("--debug", action="store_true", help="Keep request/response traces in the log buffer")


def _option_pair(value: str) -> tuple[str, str]:
    key, sep, raw = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected key=value, got '{value}'")
    return key.strip(), raw


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``classify``, ``status``, ``capabilities`` and ``invoke``.
    """
    p = argparse.ArgumentParser(prog="ai-gateway", description="AI provider gateway diagnostics")
    sub = p.add_subparsers(dest="cmd", required=True)

    # classify (offline, no providers involved)
    p_cls = sub.add_parser("classify", help="Classify a provider failure without calling anything")
    p_cls.add_argument("--provider", default="generic")
    p_cls.add_argument("--status", type=int, default=None, help="HTTP status (0 for transport faults)")
    p_cls.add_argument("--message", default="")
    p_cls.add_argument("--code", default=None, help="Structured provider error code")

    # status
    p_status = sub.add_parser("status", help="Run connection tests against configured providers")
    _add_settings_flags(p_status)
    p_status.add_argument("--timeout", type=float, default=None)
    p_status.add_argument("--retries", type=int, default=None)

    # capabilities
    p_caps = sub.add_parser("capabilities", help="Report provider capabilities")
    _add_settings_flags(p_caps)
    p_caps.add_argument("--provider", default=None, help="Limit the report to one provider")

    # invoke
    p_inv = sub.add_parser("invoke", help="Run one operation through the service manager")
    _add_settings_flags(p_inv)
    p_inv.add_argument("operation")
    p_inv.add_argument("--provider", default=None, help="Defaults to the task routing choice")
    p_inv.add_argument("--text", default=None)
    p_inv.add_argument("--categories", nargs="+", default=None)
    p_inv.add_argument("--option", dest="options", action="append", type=_option_pair, default=[])

    p.set_defaults(default_provider=CLI_DEFAULT_PROVIDER)
    return p


__all__ = ["build_parser"]
