"""Demonstration of the Inbox Autopilot engine.

This example demonstrates:
1. Loading workflows from a config file
2. Evaluating one message and reading the action log
3. Authoring a workflow from the shorthand form
4. Running a desk: queue, batch processing and stats

Run this example:
    python examples/automation_demo.py
"""

from pathlib import Path

from inbox_autopilot import AutomationDesk, AutomationEngine, AutopilotConfig, WorkflowRegistry
from inbox_autopilot.automation import (
    FixedRuntimeSource,
    generate_sample_message,
    workflow_from_shorthand,
)
from inbox_autopilot.core import Message

EXAMPLES_DIR = Path(__file__).parent


def demo_single_message(config: AutopilotConfig) -> None:
    """Evaluate one message against the configured workflows."""
    print("\n" + "=" * 70)
    print("Demo 1: Single message")
    print("=" * 70)

    engine = AutomationEngine.from_config(config, runtime_source=FixedRuntimeSource(1.5))
    registry = WorkflowRegistry.from_config(config)
    message = Message(
        id="email-demo",
        subject="Invoice 2291 overdue",
        sender="billing@vendor.io",
        body="Our invoice is now overdue; please confirm the payment date.",
        tags=["billing"],
    )

    run = engine.evaluate(message, registry)
    print(f"Summary:    {run.result.summary}")
    print(f"Confidence: {run.result.confidence:.2f}")
    for entry in run.logs:
        print(f"  - [{entry.workflow_id}] {entry.title}")


def demo_shorthand(config: AutopilotConfig) -> None:
    """Add a workflow authored in the compact form and evaluate again."""
    print("\n" + "=" * 70)
    print("Demo 2: Shorthand workflow")
    print("=" * 70)

    registry = WorkflowRegistry.from_config(config)
    registry.register(
        workflow_from_shorthand(
            "Interview scheduler",
            keywords="interview, schedule",
            actions="coordinate|Propose three slots\nnotify_whatsapp|Interview slots sent",
        ),
        prepend=True,
    )

    message = Message(
        id="email-interview",
        subject="Can we schedule an interview?",
        sender="talent@techhire.io",
        body="Share a few times that work next week.",
    )
    run = AutomationEngine.from_config(config).evaluate(message, registry)
    print(f"Matched: {', '.join(run.result.matched_workflow_ids)}")
    for notification in run.notifications:
        print(f"  WhatsApp -> {notification.to}: {notification.message}")


def demo_desk(config: AutopilotConfig) -> None:
    """Queue sample messages and drain them with a worker pool."""
    print("\n" + "=" * 70)
    print("Demo 3: Automation desk")
    print("=" * 70)

    desk = AutomationDesk.from_config(config)
    for counter in range(6):
        desk.ingest(generate_sample_message(counter))

    desk.process_all(max_workers=3)
    print(desk.stats().to_dict())


def main() -> None:
    config = AutopilotConfig.from_yaml(EXAMPLES_DIR / "config.yaml")
    demo_single_message(config)
    demo_shorthand(config)
    demo_desk(config)


if __name__ == "__main__":
    main()
