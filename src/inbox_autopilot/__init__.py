"""Inbox Autopilot.

Declarative inbox automation: match incoming email-like messages against
workflow triggers, simulate the matched workflows' actions, and report a
result record, an action log and operator notifications.

Example:
    ```python
    from inbox_autopilot import AutomationEngine, WorkflowRegistry, default_workflows
    from inbox_autopilot.automation import generate_sample_message

    registry = WorkflowRegistry(default_workflows())
    engine = AutomationEngine()
    run = engine.evaluate(generate_sample_message(0), registry)
    print(run.result.summary)
    ```
"""

from importlib.metadata import PackageNotFoundError, version

from .automation import (
    AutomationDesk,
    AutomationEngine,
    WorkflowRegistry,
    default_workflows,
    run_automation,
)
from .core import (
    AutopilotConfig,
    EngineConfig,
    Message,
    WorkflowDefinition,
    get_logger,
    setup_logging,
)

__all__ = [
    "__version__",
    "AutomationEngine",
    "AutomationDesk",
    "WorkflowRegistry",
    "run_automation",
    "default_workflows",
    "AutopilotConfig",
    "EngineConfig",
    "Message",
    "WorkflowDefinition",
    "get_logger",
    "setup_logging",
]

try:  # pragma: no cover - best-effort during development
    __version__ = version("inbox-autopilot")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
