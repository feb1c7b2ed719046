"""Records exchanged with the automation engine.

Inbound messages are validated pydantic models; everything the engine produces
is a frozen dataclass with a ``to_dict`` serializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .config import WorkflowDefinition


def utcnow() -> datetime:
    """Default clock: timezone-aware current time."""
    return datetime.now(timezone.utc)


class ActionType(str, Enum):
    """Supported workflow action types."""

    ANALYSIS = "analysis"
    DRAFT_REPLY = "draft_reply"
    SUBMIT_APPLICATION = "submit_application"
    NOTIFY_WHATSAPP = "notify_whatsapp"
    UPDATE_TRACKER = "update_tracker"
    COORDINATE = "coordinate"
    COLLECT_DOCUMENTS = "collect_documents"
    CUSTOM = "custom"

    @classmethod
    def resolve(cls, value: Any) -> ActionType:
        """Resolve an authored type tag, falling back to ``CUSTOM``.

        Tags match exactly, surrounding whitespace aside, so a differently
        cased tag is unknown. Unknown, blank or non-string values never raise.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        return cls.CUSTOM

    @property
    def is_notification(self) -> bool:
        """Whether executing this action sends a confirmation to the operator."""
        return self in NOTIFICATION_ACTION_TYPES


NOTIFICATION_ACTION_TYPES = frozenset({ActionType.NOTIFY_WHATSAPP})


class Message(BaseModel):
    """An inbound email-like unit of work. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message identifier")
    subject: str = Field(default="", description="Subject line")
    sender: str = Field(default="", description="Sender address")
    sender_name: str = Field(default="", description="Sender display name")
    to: str = Field(default="", description="Recipient address")
    preview: str = Field(default="", description="Short preview text")
    body: str = Field(default="", description="Full body text")
    received_at: datetime = Field(default_factory=utcnow, description="When it was received")
    tags: tuple[str, ...] = Field(default=(), description="Free-text tags")


@dataclass(frozen=True)
class MatchResult:
    """A workflow selected by the trigger matcher with its raw strength."""

    workflow: WorkflowDefinition
    score: int
    max_score: int

    @property
    def workflow_id(self) -> str:
        return self.workflow.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "workflow_id": self.workflow.id,
            "score": self.score,
            "max_score": self.max_score,
        }


@dataclass(frozen=True)
class ExecutedAction:
    """A realized instance of an action spec for one run.

    ``runtime_seconds`` is simulated and only feeds throughput metrics.
    """

    id: str
    type: ActionType
    summary: str
    details: str
    runtime_seconds: float
    workflow_id: str
    message_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type.value,
            "summary": self.summary,
            "details": self.details,
            "runtime_seconds": self.runtime_seconds,
            "workflow_id": self.workflow_id,
            "message_id": self.message_id,
        }


@dataclass(frozen=True)
class LogEntry:
    """Audit record for one executed action."""

    id: str
    workflow_id: str
    action_id: str
    timestamp: datetime
    title: str
    body: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "workflow_id": self.workflow_id,
            "action_id": self.action_id,
            "timestamp": self.timestamp.isoformat(),
            "title": self.title,
            "body": self.body,
        }


@dataclass(frozen=True)
class Notification:
    """Outbound confirmation addressed to the operator."""

    id: str
    to: str
    message: str
    timestamp: datetime
    workflow_id: str
    action_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "to": self.to,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "workflow_id": self.workflow_id,
            "action_id": self.action_id,
        }


@dataclass(frozen=True)
class ProcessedResult:
    """Terminal output of one evaluation."""

    message: Message
    confidence: float
    summary: str
    matched_workflow_ids: tuple[str, ...]
    actions: tuple[ExecutedAction, ...]
    processed_at: datetime

    @property
    def matched(self) -> bool:
        return bool(self.matched_workflow_ids)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "message": self.message.model_dump(mode="json"),
            "confidence": self.confidence,
            "summary": self.summary,
            "matched_workflow_ids": list(self.matched_workflow_ids),
            "actions": [action.to_dict() for action in self.actions],
            "processed_at": self.processed_at.isoformat(),
        }


@dataclass(frozen=True)
class AutomationRun:
    """Everything one evaluation returns to the caller."""

    result: ProcessedResult
    logs: tuple[LogEntry, ...] = ()
    notifications: tuple[Notification, ...] = ()
    matches: tuple[MatchResult, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "result": self.result.to_dict(),
            "logs": [entry.to_dict() for entry in self.logs],
            "notifications": [item.to_dict() for item in self.notifications],
            "matches": [match.to_dict() for match in self.matches],
        }
