"""ai-gateway CLI (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; performs no
provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_capabilities, handle_classify, handle_invoke, handle_status
from .cli_parser import build_parser

_HANDLERS = {
    "classify": handle_classify,
    "status": handle_status,
    "capabilities": handle_capabilities,
    "invoke": handle_invoke,
}


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    return _HANDLERS[args.cmd](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
