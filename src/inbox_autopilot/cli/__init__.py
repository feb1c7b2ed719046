"""CLI module for Inbox Autopilot.

This module provides the command-line interface for the engine.
"""

from __future__ import annotations

from collections.abc import Sequence

from .commands import cmd_demo, cmd_init, cmd_run, cmd_schema, cmd_validate, cmd_workflows
from .parser import build_parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Optional sequence of CLI arguments (without the program name).

    Returns:
        Process exit code. 0 for success.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    handlers = {
        "init": cmd_init,
        "validate": cmd_validate,
        "schema": cmd_schema,
        "workflows": cmd_workflows,
        "run": cmd_run,
        "demo": cmd_demo,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


__all__ = ["main", "build_parser"]
