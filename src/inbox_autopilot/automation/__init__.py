"""Automation engine for declarative inbox workflows.

This module provides:
- AutomationEngine / run_automation: process one message end to end
- TriggerMatcher: keyword and category scoring against workflow triggers
- ActionExecutor: simulated execution with an injected runtime source
- NotificationSynthesizer: operator confirmations for notify actions
- ResultAggregator and compute_velocity: result records and throughput
- WorkflowRegistry: ordered workflow store with snapshots
- AutomationDesk: caller-owned queue and history around the engine
"""

from .actions import (
    ActionExecutor,
    FixedRuntimeSource,
    RuntimeSource,
    SeededRuntimeSource,
)
from .desk import AutomationDesk, DeskStats
from .engine import AutomationEngine, run_automation
from .notifications import NotificationSynthesizer
from .registry import WorkflowRegistry, workflow_from_shorthand
from .results import ResultAggregator, build_summary, compute_confidence, compute_velocity
from .samples import default_workflows, generate_sample_message
from .triggers import TriggerMatcher

__all__ = [
    # Engine
    "AutomationEngine",
    "run_automation",
    # Stages
    "TriggerMatcher",
    "ActionExecutor",
    "RuntimeSource",
    "SeededRuntimeSource",
    "FixedRuntimeSource",
    "NotificationSynthesizer",
    "ResultAggregator",
    "build_summary",
    "compute_confidence",
    "compute_velocity",
    # Registry and desk
    "WorkflowRegistry",
    "workflow_from_shorthand",
    "AutomationDesk",
    "DeskStats",
    # Samples
    "default_workflows",
    "generate_sample_message",
]
