"""Builders for messages and workflows used across the test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from inbox_autopilot.core import Message, WorkflowDefinition

FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


class StepClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


def counting_ids(prefix: str = "id") -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def make_message(**overrides: Any) -> Message:
    data: dict[str, Any] = {
        "id": "email-1",
        "subject": "Scholarship follow-up",
        "sender": "awards@brightfuture.edu",
        "sender_name": "awards",
        "to": "you@example.com",
        "preview": "One more step",
        "body": "Please complete the finalist questionnaire.",
        "received_at": FIXED_NOW,
        "tags": ["scholarship"],
    }
    data.update(overrides)
    return Message.model_validate(data)


def make_workflow(
    workflow_id: str,
    keywords: list[str],
    actions: list[tuple[str, str]] | None = None,
    categories: list[str] | None = None,
    auto_detect: bool = True,
    **overrides: Any,
) -> WorkflowDefinition:
    """Build a workflow; ``actions`` is a list of ``(type, summary)`` pairs."""
    if actions is None:
        actions = [("analysis", "Analyze")]
    specs = [
        {"id": f"{workflow_id}-{i}", "type": t, "summary": s, "details": f"{s} details"}
        for i, (t, s) in enumerate(actions)
    ]
    data: dict[str, Any] = {
        "id": workflow_id,
        "name": workflow_id.replace("-", " ").title(),
        "trigger": {
            "keywords": keywords,
            "categories": categories or [],
            "auto_detect": auto_detect,
        },
        "actions": specs,
    }
    data.update(overrides)
    return WorkflowDefinition.model_validate(data)
