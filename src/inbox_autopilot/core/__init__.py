"""Core modules for Inbox Autopilot.

This package contains:
- Configuration and workflow definition models
- Engine record types
- Exceptions
- Logging utilities
"""

from .config import (
    ActionSpec,
    AutopilotConfig,
    DeskConfig,
    EngineConfig,
    LoggingConfig,
    Trigger,
    WorkflowDefinition,
)
from .exceptions import (
    AutopilotError,
    ContractViolationError,
    ExecutionError,
    InvalidInputError,
    MessageNotFoundError,
    WorkflowNotFoundError,
)
from .logger import get_logger, log_exception, setup_logging
from .models import (
    ActionType,
    AutomationRun,
    ExecutedAction,
    LogEntry,
    MatchResult,
    Message,
    Notification,
    ProcessedResult,
)

__all__ = [
    # Configuration
    "AutopilotConfig",
    "EngineConfig",
    "DeskConfig",
    "LoggingConfig",
    "Trigger",
    "ActionSpec",
    "WorkflowDefinition",
    # Records
    "ActionType",
    "Message",
    "MatchResult",
    "ExecutedAction",
    "LogEntry",
    "Notification",
    "ProcessedResult",
    "AutomationRun",
    # Exceptions
    "AutopilotError",
    "InvalidInputError",
    "ContractViolationError",
    "ExecutionError",
    "WorkflowNotFoundError",
    "MessageNotFoundError",
    # Logging
    "get_logger",
    "setup_logging",
    "log_exception",
]
