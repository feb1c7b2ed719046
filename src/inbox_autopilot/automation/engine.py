"""Automation engine: the single entry point that processes one message.

One evaluation walks a message through Queued -> Matched -> Executed ->
Notified -> Aggregated, in that order, and returns an AutomationRun. The
engine holds configuration only; it keeps no per-message state, performs no
I/O, and is safe to share between threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ..core.config import AutopilotConfig, EngineConfig, WorkflowDefinition
from ..core.exceptions import InvalidInputError
from ..core.logger import get_logger
from ..core.models import AutomationRun, Message, utcnow
from .actions import ActionExecutor, Clock, IdFactory, RuntimeSource, SeededRuntimeSource
from .notifications import NotificationSynthesizer
from .registry import WorkflowRegistry
from .results import ResultAggregator
from .triggers import TriggerMatcher

logger = get_logger("automation")

WorkflowSource = WorkflowRegistry | Iterable[WorkflowDefinition | Mapping[str, Any]]


def _require_text(value: str, field: str, owner: str) -> None:
    if not value or not value.strip():
        raise InvalidInputError(f"{owner} is missing required field '{field}'", field=field)


class AutomationEngine:
    """Coordinates matching, execution, notification and aggregation."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        runtime_source: RuntimeSource | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.clock = clock or utcnow

        if runtime_source is None:
            runtime_source = SeededRuntimeSource(
                minimum=self.config.runtime_min_seconds,
                maximum=self.config.runtime_max_seconds,
                seed=self.config.seed,
            )

        self._matcher = TriggerMatcher(category_bonus=self.config.category_bonus)
        self._executor = ActionExecutor(
            runtime_source=runtime_source,
            clock=self.clock,
            id_factory=id_factory,
        )
        self._synthesizer = NotificationSynthesizer(
            operator_address=self.config.operator_address,
            template=self.config.notification_template,
            id_factory=id_factory,
        )
        self._aggregator = ResultAggregator()

    @classmethod
    def from_config(cls, config: AutopilotConfig, **kwargs: Any) -> AutomationEngine:
        """Create an engine from the ``engine`` section of a config."""
        return cls(config.engine, **kwargs)

    @property
    def matcher(self) -> TriggerMatcher:
        return self._matcher

    # ------------------------------------------------------------------
    # Input validation
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_message(message: Message | Mapping[str, Any]) -> Message:
        if isinstance(message, Message):
            candidate = message
        else:
            try:
                candidate = Message.model_validate(message)
            except ValidationError as exc:
                raise InvalidInputError(f"Malformed message: {exc}") from exc

        _require_text(candidate.id, "id", "Message")
        _require_text(candidate.subject, "subject", f"Message {candidate.id!r}")
        _require_text(candidate.sender, "sender", f"Message {candidate.id!r}")
        return candidate

    @staticmethod
    def _snapshot(workflows: WorkflowSource) -> tuple[WorkflowDefinition, ...]:
        if isinstance(workflows, WorkflowRegistry):
            snapshot = workflows.snapshot()
        else:
            items: list[WorkflowDefinition] = []
            for item in workflows:
                if isinstance(item, WorkflowDefinition):
                    items.append(item)
                    continue
                try:
                    items.append(WorkflowDefinition.model_validate(item))
                except ValidationError as exc:
                    raise InvalidInputError(f"Malformed workflow definition: {exc}") from exc
            snapshot = tuple(items)

        seen: set[str] = set()
        for workflow in snapshot:
            _require_text(workflow.id, "id", "Workflow")
            _require_text(workflow.name, "name", f"Workflow {workflow.id!r}")
            for index, spec in enumerate(workflow.actions):
                _require_text(spec.summary, "summary", f"Workflow {workflow.id!r} action {index}")
            if workflow.id in seen:
                raise InvalidInputError(f"Duplicate workflow id: {workflow.id}", field="id")
            seen.add(workflow.id)
        return snapshot

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def evaluate(
        self,
        message: Message | Mapping[str, Any],
        workflows: WorkflowSource,
    ) -> AutomationRun:
        """Process one message against a workflow snapshot.

        Args:
            message: Message, or a mapping validated into one
            workflows: Registry (snapshotted now) or a sequence of definitions

        Returns:
            AutomationRun with the result, action log and notifications

        Raises:
            InvalidInputError: Malformed message or workflow; nothing executed
            ExecutionError: Internal defect while realizing actions
        """
        candidate = self._coerce_message(message)
        snapshot = self._snapshot(workflows)
        evaluated_at = self.clock()
        logger.debug("Message '%s' queued against %d workflow(s)", candidate.id, len(snapshot))

        matches = self._matcher.match(candidate, snapshot)
        if not matches:
            logger.info("No automation applicable to message '%s'", candidate.id)

        actions, logs = self._executor.execute(candidate, matches)
        notifications = self._synthesizer.synthesize(candidate, actions, evaluated_at)
        result = self._aggregator.aggregate(candidate, matches, actions, evaluated_at)

        if matches:
            logger.info(
                "Automation finished for '%s': %s (confidence %.2f)",
                candidate.subject,
                result.summary,
                result.confidence,
            )

        return AutomationRun(
            result=result,
            logs=tuple(logs),
            notifications=tuple(notifications),
            matches=tuple(matches),
        )


def run_automation(
    message: Message | Mapping[str, Any],
    workflows: WorkflowSource,
    config: EngineConfig | None = None,
    **kwargs: Any,
) -> AutomationRun:
    """Evaluate one message with a throwaway engine.

    Keyword arguments are passed to :class:`AutomationEngine` (``runtime_source``,
    ``clock``, ``id_factory``).
    """
    return AutomationEngine(config, **kwargs).evaluate(message, workflows)
