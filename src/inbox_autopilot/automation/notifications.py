"""Notification synthesis for executed actions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from string import Template

from ..core.logger import get_logger
from ..core.models import ExecutedAction, Message, Notification
from .actions import IdFactory, new_id

logger = get_logger("automation.notifications")

DEFAULT_TEMPLATE = 'Autopilot update for "$subject": $summary. $details'


class NotificationSynthesizer:
    """Turn notification-class actions into operator confirmations.

    Every ``notify_whatsapp`` action yields exactly one Notification addressed
    to the operator, never to the sender. Nothing is delivered here.
    """

    def __init__(
        self,
        operator_address: str,
        template: str = DEFAULT_TEMPLATE,
        id_factory: IdFactory | None = None,
    ) -> None:
        if not operator_address.strip():
            raise ValueError("operator_address is required")
        self.operator_address = operator_address
        self.template = Template(template)
        self.id_factory = id_factory or new_id

    def render(self, message: Message, action: ExecutedAction) -> str:
        """Render the body of one notification."""
        return self.template.safe_substitute(
            subject=message.subject,
            sender=message.sender,
            summary=action.summary,
            details=action.details,
            workflow_id=action.workflow_id,
        )

    def synthesize(
        self,
        message: Message,
        actions: Sequence[ExecutedAction],
        timestamp: datetime,
    ) -> list[Notification]:
        """Build notifications for the given actions.

        Args:
            message: Message being processed
            actions: Executed actions, in execution order
            timestamp: Evaluation time stamped on every notification

        Returns:
            One notification per notification-class action (possibly none)
        """
        notifications = [
            Notification(
                id=self.id_factory(),
                to=self.operator_address,
                message=self.render(message, action),
                timestamp=timestamp,
                workflow_id=action.workflow_id,
                action_id=action.id,
            )
            for action in actions
            if action.type.is_notification
        ]
        if notifications:
            logger.debug(
                "Prepared %d notification(s) for message '%s'",
                len(notifications),
                message.id,
            )
        return notifications
