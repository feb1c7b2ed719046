"""Automation CLI commands: workflows, run, demo."""

from __future__ import annotations

import argparse
import json

from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from ...automation import (
    AutomationDesk,
    AutomationEngine,
    WorkflowRegistry,
    generate_sample_message,
)
from ...core import AutomationRun, AutopilotConfig, AutopilotError, Message
from ..base import configure_logging, console, load_config, load_document, logger


def _with_seed(config: AutopilotConfig, seed: int | None) -> AutopilotConfig:
    if seed is None:
        return config
    engine = config.engine.model_copy(update={"seed": seed})
    return config.model_copy(update={"engine": engine})


def _print_run(run: AutomationRun) -> None:
    result = run.result
    console.print(
        Panel(
            f"[bold]{result.message.subject}[/]\n"
            f"From: {result.message.sender}\n\n"
            f"{result.summary}\n"
            f"Confidence: [cyan]{result.confidence:.2f}[/]\n"
            f"Workflows: {', '.join(result.matched_workflow_ids) or '-'}",
            title="[bold white]Automation brief[/]",
            border_style="blue",
            expand=False,
        )
    )

    if result.actions:
        table = Table(title="Action Log")
        table.add_column("#", justify="right")
        table.add_column("Workflow", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Summary")
        table.add_column("Runtime", justify="right", style="green")
        for index, action in enumerate(result.actions, start=1):
            table.add_row(
                str(index),
                action.workflow_id,
                action.type.value,
                action.summary,
                f"{action.runtime_seconds:.1f}s",
            )
        console.print(table)

    for notification in run.notifications:
        console.print(f"[green]WhatsApp → {notification.to}:[/] {notification.message}")


def cmd_workflows(args: argparse.Namespace) -> int:
    """List workflows in registry order."""
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error: {e}")
        return 1

    if not config.workflows:
        console.print("[yellow]No workflows configured.[/]")
        return 0

    table = Table(title="Workflows")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Keywords", style="magenta")
    table.add_column("Auto-detect")
    table.add_column("Autopilot")
    table.add_column("Actions", style="green", justify="right")
    table.add_column("SLA", justify="right")

    for workflow in config.workflows:
        table.add_row(
            workflow.id,
            workflow.name,
            ", ".join(workflow.trigger.keywords) or "-",
            "[green]yes[/]" if workflow.trigger.auto_detect else "[red]no[/]",
            "[green]yes[/]" if workflow.autopilot else "[yellow]confirm[/]",
            str(len(workflow.actions)),
            f"{workflow.sla_minutes}m",
        )

    console.print(table)
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Evaluate one message file against the configured workflows."""
    try:
        config = _with_seed(load_config(args.config), args.seed)
        configure_logging(config, args)
        message = Message.model_validate(load_document(args.message))
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error: {e}")
        return 1

    engine = AutomationEngine.from_config(config)
    try:
        run = engine.evaluate(message, WorkflowRegistry.from_config(config))
    except AutopilotError as e:
        logger.error("Automation failed: %s", e)
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(run.to_dict(), indent=2))
    else:
        _print_run(run)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Ingest sample messages into a desk, process them and show stats."""
    if args.count < 1:
        print("Error: --count must be at least 1")
        return 1
    if args.workers is not None and args.workers < 1:
        print("Error: --workers must be at least 1")
        return 1

    try:
        config = _with_seed(load_config(args.config), args.seed)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error: {e}")
        return 1
    configure_logging(config, args)

    desk = AutomationDesk.from_config(config)
    for counter in range(args.count):
        desk.ingest(generate_sample_message(counter))

    runs = desk.process_all(max_workers=args.workers)
    for run in reversed(runs):
        _print_run(run)

    stats = desk.stats()
    table = Table(title="Desk")
    table.add_column("Queued emails", justify="right")
    table.add_column("Automations completed", justify="right")
    table.add_column("WhatsApp updates", justify="right")
    table.add_column("Runs / minute (avg)", justify="right")
    table.add_row(
        str(stats.queue),
        str(stats.completed),
        str(stats.notifications),
        f"{stats.velocity:.1f}",
    )
    console.print(table)
    return 0 if stats.queue == 0 else 1
