"""CLI command handlers."""

from .automation import cmd_demo, cmd_run, cmd_workflows
from .basic import cmd_init, cmd_schema, cmd_validate

__all__ = [
    "cmd_init",
    "cmd_validate",
    "cmd_schema",
    "cmd_workflows",
    "cmd_run",
    "cmd_demo",
]
