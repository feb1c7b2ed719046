"""CLI argument parser."""

from __future__ import annotations

import argparse

from .. import __version__


def _add_config_argument(parser: argparse.ArgumentParser, required: bool = False) -> None:
    parser.add_argument(
        "-c",
        "--config",
        required=required,
        default=None,
        help="Path to configuration file (YAML or JSON)"
        + ("" if required else "; built-in sample workflows when omitted"),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="inbox-autopilot",
        description="Inbox Autopilot - route messages to declarative automation workflows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate a config with the sample workflows
  inbox-autopilot init -o config.yaml

  # Evaluate one message
  inbox-autopilot run message.yaml -c config.yaml --seed 7

  # Process a batch of sample messages
  inbox-autopilot demo --count 6
        """,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    init_parser = subparsers.add_parser("init", help="Write a default configuration file")
    init_parser.add_argument(
        "-o", "--output", default="config.yaml", help="Output path (default: config.yaml)"
    )
    init_parser.add_argument(
        "-f", "--force", action="store_true", help="Overwrite an existing file"
    )

    # validate
    validate_parser = subparsers.add_parser("validate", help="Validate a configuration file")
    _add_config_argument(validate_parser, required=True)

    # schema
    schema_parser = subparsers.add_parser("schema", help="Print or save the config JSON schema")
    schema_parser.add_argument("-o", "--output", default=None, help="Write schema to this file")

    # workflows
    workflows_parser = subparsers.add_parser("workflows", help="List configured workflows")
    _add_config_argument(workflows_parser)

    # run
    run_parser = subparsers.add_parser("run", help="Evaluate one message file")
    run_parser.add_argument("message", help="Message file (YAML or JSON)")
    _add_config_argument(run_parser)
    run_parser.add_argument("--seed", type=int, default=None, help="Seed for simulated runtimes")
    run_parser.add_argument("--json", action="store_true", help="Print the run as JSON")

    # demo
    demo_parser = subparsers.add_parser("demo", help="Ingest sample messages and process them")
    _add_config_argument(demo_parser)
    demo_parser.add_argument("--count", type=int, default=3, help="Number of sample messages")
    demo_parser.add_argument("--seed", type=int, default=None, help="Seed for simulated runtimes")
    demo_parser.add_argument(
        "--workers", type=int, default=None, help="Worker pool size (default from config)"
    )

    return parser
