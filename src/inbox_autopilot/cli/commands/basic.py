"""Configuration commands: init, validate, schema."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import yaml

from ...automation import default_workflows
from ...core.validation import generate_json_schema, lint_workflows, validate_yaml_config
from ..base import AutopilotConfig, console, load_config, logger


def cmd_init(args: argparse.Namespace) -> int:
    """Handle init command.

    Args:
        args: Parsed arguments

    Returns:
        Exit code
    """
    output_path = Path(args.output)

    if output_path.exists() and not args.force:
        print(f"{output_path} already exists. Use --force to overwrite.")
        return 1

    default_config = AutopilotConfig(workflows=default_workflows()).to_dict()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(default_config, f, default_flow_style=False, sort_keys=False)

    print(f"✓ Configuration file created: {output_path}")
    print("\nNext steps:")
    print(f"1. Edit the workflows in {output_path}")
    print(f"2. Evaluate a message: inbox-autopilot run message.yaml -c {output_path}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    is_valid, errors = validate_yaml_config(args.config)
    if not is_valid:
        console.print(f"[red]✗ Configuration invalid:[/] {args.config}")
        for error in errors:
            console.print(f"  - {error}")
        return 1

    config = load_config(args.config)
    console.print(
        f"[green]✓ Configuration valid:[/] {args.config} ({len(config.workflows)} workflows)"
    )
    for warning in lint_workflows(config):
        console.print(f"  [yellow]![/] {warning}")
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    """Handle schema command."""
    try:
        schema = generate_json_schema(args.output)
    except OSError as e:
        logger.error("Error writing schema: %s", e, exc_info=True)
        print(f"Error: {e}")
        return 1

    if args.output:
        print(f"✓ Schema written to {args.output}")
    else:
        print(json.dumps(schema, indent=2))
    return 0
