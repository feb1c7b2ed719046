"""Shared fixtures for engine tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from inbox_autopilot.automation import AutomationEngine, FixedRuntimeSource, WorkflowRegistry
from inbox_autopilot.core import EngineConfig, Message, WorkflowDefinition
from tests.factories import StepClock, counting_ids, make_message, make_workflow


@pytest.fixture
def message_factory() -> Callable[..., Message]:
    return make_message


@pytest.fixture
def workflow_factory() -> Callable[..., WorkflowDefinition]:
    return make_workflow


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    return counting_ids()


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(operator_address="whatsapp:+15551234567")


@pytest.fixture
def engine(engine_config, clock, id_factory) -> AutomationEngine:
    """Engine with a fixed runtime, stepping clock and counting ids."""
    return AutomationEngine(
        engine_config,
        runtime_source=FixedRuntimeSource(2.0),
        clock=clock,
        id_factory=id_factory,
    )


@pytest.fixture
def scholarship_registry() -> WorkflowRegistry:
    return WorkflowRegistry(
        [
            make_workflow(
                "scholarship",
                ["scholarship"],
                actions=[("submit_application", "Submit finalist form")],
            ),
            make_workflow("invoices", ["invoice"], actions=[("update_tracker", "Log invoice")]),
        ]
    )
