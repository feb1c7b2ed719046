"""Tests for built-in workflows and sample messages."""

from __future__ import annotations

from inbox_autopilot.automation import (
    AutomationEngine,
    FixedRuntimeSource,
    WorkflowRegistry,
    default_workflows,
    generate_sample_message,
)
from tests.factories import FIXED_NOW


class TestSamples:
    """Built-in samples wire up with the engine."""

    def test_default_workflows(self) -> None:
        workflows = default_workflows()
        assert [w.id for w in workflows] == [
            "scholarship-autopilot",
            "job-application-sprint",
            "client-support-concierge",
        ]
        assert workflows[2].autopilot is False

    def test_messages_cycle_templates(self) -> None:
        first = generate_sample_message(0, now=FIXED_NOW)
        fourth = generate_sample_message(3, now=FIXED_NOW)
        assert first.id == "email-generated-0"
        assert first.received_at == FIXED_NOW
        assert first.to == "you@example.com"
        assert first.tags == fourth.tags
        assert fourth.subject == "Scholarship follow-up #3"
        assert fourth.sender == "awards@brightfuture3.edu"

    def test_sample_messages_route_to_expected_workflows(self) -> None:
        engine = AutomationEngine(runtime_source=FixedRuntimeSource(1.0))
        registry = WorkflowRegistry(default_workflows())

        scholarship = engine.evaluate(generate_sample_message(0), registry)
        assert scholarship.result.matched_workflow_ids == (
            "scholarship-autopilot",
            "job-application-sprint",
        )
        assert [(m.score, m.max_score) for m in scholarship.matches] == [(5, 5), (1, 5)]
        assert scholarship.result.confidence == 1.0
        assert len(scholarship.result.actions) == 8
        assert len(scholarship.notifications) == 2

        job = engine.evaluate(generate_sample_message(1), registry)
        assert job.result.matched_workflow_ids == ("job-application-sprint",)
        assert len(job.notifications) == 1

        support = engine.evaluate(generate_sample_message(2), registry)
        assert support.result.matched_workflow_ids == ("client-support-concierge",)
        assert support.matches[0].score == 4
        assert support.notifications == ()
