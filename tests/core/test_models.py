"""Tests for engine record types."""

import pytest
from pydantic import ValidationError

from inbox_autopilot.core.models import (
    NOTIFICATION_ACTION_TYPES,
    ActionType,
    LogEntry,
    Message,
)
from tests.factories import FIXED_NOW


class TestActionType:
    """Tests for ActionType resolution."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("analysis", ActionType.ANALYSIS),
            (" notify_whatsapp ", ActionType.NOTIFY_WHATSAPP),
            ("NOTIFY_WHATSAPP", ActionType.CUSTOM),
            ("Analysis", ActionType.CUSTOM),
            (ActionType.COORDINATE, ActionType.COORDINATE),
            ("teleport", ActionType.CUSTOM),
            ("", ActionType.CUSTOM),
            (None, ActionType.CUSTOM),
            (42, ActionType.CUSTOM),
        ],
    )
    def test_resolve(self, raw, expected):
        assert ActionType.resolve(raw) is expected

    def test_only_whatsapp_notifies(self):
        assert NOTIFICATION_ACTION_TYPES == {ActionType.NOTIFY_WHATSAPP}
        assert [t for t in ActionType if t.is_notification] == [ActionType.NOTIFY_WHATSAPP]


class TestMessage:
    """Tests for the Message model."""

    def test_defaults(self):
        message = Message(id="m1")
        assert message.subject == ""
        assert message.tags == ()
        assert message.received_at.tzinfo is not None

    def test_id_required(self):
        with pytest.raises(ValidationError):
            Message(subject="No id")

    def test_frozen(self):
        message = Message(id="m1", tags=["a"])
        with pytest.raises(ValidationError):
            message.subject = "changed"
        assert message.tags == ("a",)


class TestSerialization:
    """Tests for to_dict helpers."""

    def test_log_entry_to_dict(self):
        entry = LogEntry(
            id="log-1",
            workflow_id="wf",
            action_id="a-1",
            timestamp=FIXED_NOW,
            title="Title",
            body="Body",
        )
        assert entry.to_dict() == {
            "id": "log-1",
            "workflow_id": "wf",
            "action_id": "a-1",
            "timestamp": "2026-10-19T09:30:00+00:00",
            "title": "Title",
            "body": "Body",
        }
