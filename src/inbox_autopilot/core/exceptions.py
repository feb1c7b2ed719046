"""Custom exceptions for the automation engine."""

from __future__ import annotations


class AutopilotError(Exception):
    """Base exception for inbox autopilot errors."""

    pass


class InvalidInputError(AutopilotError):
    """Raised when a message or workflow definition is malformed.

    Detected before matching begins, so nothing is partially executed.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            field: Name of the offending field, if known
        """
        self.field = field
        super().__init__(message)


class ContractViolationError(InvalidInputError):
    """Raised when executed actions were not produced for the given message."""

    def __init__(self, message: str, action_id: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            action_id: Identifier of the foreign action
        """
        self.action_id = action_id
        super().__init__(message, field="actions")


class ExecutionError(AutopilotError):
    """Raised on an internal defect while realizing actions.

    The whole evaluation is aborted and no log entries are returned.
    """

    def __init__(self, message: str, workflow_id: str | None = None) -> None:
        self.workflow_id = workflow_id
        super().__init__(message)


class WorkflowNotFoundError(AutopilotError):
    """Raised when a workflow is not present in the registry."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        super().__init__(f"Workflow not found: {workflow_id}")


class MessageNotFoundError(AutopilotError):
    """Raised when a message is not in the pending queue."""

    def __init__(self, message_id: str) -> None:
        self.message_id = message_id
        super().__init__(f"Message not pending: {message_id}")
