"""Tests for notification synthesis."""

from __future__ import annotations

import pytest

from inbox_autopilot.automation.notifications import NotificationSynthesizer
from inbox_autopilot.core import ActionType, ExecutedAction

from tests.factories import FIXED_NOW


def _action(
    action_type: ActionType, action_id: str = "a-1", workflow_id: str = "wf"
) -> ExecutedAction:
    return ExecutedAction(
        id=action_id,
        type=action_type,
        summary="Application submitted",
        details="Confirmation stored.",
        runtime_seconds=1.0,
        workflow_id=workflow_id,
        message_id="email-1",
    )


class TestNotificationSynthesizer:
    """Tests for NotificationSynthesizer."""

    @pytest.fixture
    def synthesizer(self, id_factory) -> NotificationSynthesizer:
        return NotificationSynthesizer("whatsapp:+15551234567", id_factory=id_factory)

    def test_only_notify_actions_produce_notifications(
        self, synthesizer, message_factory
    ) -> None:
        actions = [
            _action(ActionType.ANALYSIS, "a-1"),
            _action(ActionType.NOTIFY_WHATSAPP, "a-2", "scholarship"),
            _action(ActionType.UPDATE_TRACKER, "a-3"),
        ]
        notifications = synthesizer.synthesize(message_factory(), actions, FIXED_NOW)
        assert len(notifications) == 1
        (notification,) = notifications
        assert notification.action_id == "a-2"
        assert notification.workflow_id == "scholarship"
        assert notification.timestamp == FIXED_NOW
        assert notification.id == "id-1"

    def test_addressed_to_operator_not_sender(self, synthesizer, message_factory) -> None:
        message = message_factory(sender="awards@brightfuture.edu")
        (notification,) = synthesizer.synthesize(
            message, [_action(ActionType.NOTIFY_WHATSAPP)], FIXED_NOW
        )
        assert notification.to == "whatsapp:+15551234567"
        assert notification.to != message.sender

    def test_default_template(self, synthesizer, message_factory) -> None:
        (notification,) = synthesizer.synthesize(
            message_factory(subject="Finalist round"),
            [_action(ActionType.NOTIFY_WHATSAPP)],
            FIXED_NOW,
        )
        assert notification.message == (
            'Autopilot update for "Finalist round": Application submitted. Confirmation stored.'
        )

    def test_custom_template_keeps_unknown_placeholders(self, message_factory) -> None:
        synthesizer = NotificationSynthesizer("ops", template="$workflow_id from $sender $unknown")
        text = synthesizer.render(message_factory(), _action(ActionType.NOTIFY_WHATSAPP))
        assert text == "wf from awards@brightfuture.edu $unknown"

    def test_no_notify_actions(self, synthesizer, message_factory) -> None:
        assert synthesizer.synthesize(message_factory(), [], FIXED_NOW) == []

    def test_operator_address_required(self) -> None:
        with pytest.raises(ValueError):
            NotificationSynthesizer("  ")
