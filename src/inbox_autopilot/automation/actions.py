"""Action execution for the automation engine.

Actions are simulated: each ActionSpec of a matched workflow is realized as an
ExecutedAction with a simulated runtime, and one LogEntry is written right
after it. Runtimes come from an injected source so tests can pin them.
"""

from __future__ import annotations

import random
import threading
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime

from ..core.config import ActionSpec
from ..core.exceptions import ExecutionError
from ..core.logger import get_logger
from ..core.models import ActionType, ExecutedAction, LogEntry, MatchResult, Message, utcnow

logger = get_logger("automation.actions")

RuntimeSource = Callable[[ActionType], float]
Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def new_id() -> str:
    """Default identifier factory."""
    return uuid.uuid4().hex


class SeededRuntimeSource:
    """Uniform simulated runtimes in ``[minimum, maximum]`` seconds.

    This is a simulation, not wall-clock truth. Values are rounded to a tenth
    of a second and never drop below 0.1.
    """

    def __init__(
        self,
        minimum: float = 0.8,
        maximum: float = 4.2,
        seed: int | None = None,
    ) -> None:
        if minimum <= 0:
            raise ValueError("minimum runtime must be positive")
        if maximum < minimum:
            raise ValueError("maximum runtime must be >= minimum")
        self.minimum = minimum
        self.maximum = maximum
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def __call__(self, action_type: ActionType) -> float:
        with self._lock:
            value = self._random.uniform(self.minimum, self.maximum)
        return max(round(value, 1), 0.1)


class FixedRuntimeSource:
    """Returns the same runtime for every action."""

    def __init__(self, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError("runtime must be positive")
        self.seconds = seconds

    def __call__(self, action_type: ActionType) -> float:
        return self.seconds


class ActionExecutor:
    """Realize the action sequences of matched workflows."""

    def __init__(
        self,
        runtime_source: RuntimeSource | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self.runtime_source = runtime_source or SeededRuntimeSource()
        self.clock = clock or utcnow
        self.id_factory = id_factory or new_id

    def execute(
        self,
        message: Message,
        matches: Sequence[MatchResult],
    ) -> tuple[list[ExecutedAction], list[LogEntry]]:
        """Execute every action of every matched workflow, in order.

        Args:
            message: Message being processed
            matches: Output of the trigger matcher

        Returns:
            Executed actions and their log entries (1:1, same order)

        Raises:
            ExecutionError: If the runtime source yields a non-positive value;
                nothing is returned in that case
        """
        actions: list[ExecutedAction] = []
        logs: list[LogEntry] = []

        for match in matches:
            workflow = match.workflow
            if not workflow.actions:
                logger.warning("Workflow '%s' matched but defines no actions", workflow.id)
            for spec in workflow.actions:
                action = self._realize(message, workflow.id, spec)
                actions.append(action)
                logs.append(self._log(action))

        logger.debug(
            "Executed %d action(s) for message '%s'",
            len(actions),
            message.id,
        )
        return actions, logs

    def _realize(self, message: Message, workflow_id: str, spec: ActionSpec) -> ExecutedAction:
        action_type = ActionType.resolve(spec.type)
        if action_type is ActionType.CUSTOM and spec.type.strip() != ActionType.CUSTOM.value:
            logger.debug(
                "Workflow '%s' action type %r is unknown; running it as custom",
                workflow_id,
                spec.type,
            )

        runtime = self.runtime_source(action_type)
        if not runtime > 0:
            raise ExecutionError(
                f"Runtime source returned {runtime!r} for {action_type.value}",
                workflow_id=workflow_id,
            )

        return ExecutedAction(
            id=self.id_factory(),
            type=action_type,
            summary=spec.summary,
            details=spec.details,
            runtime_seconds=float(runtime),
            workflow_id=workflow_id,
            message_id=message.id,
        )

    def _log(self, action: ExecutedAction) -> LogEntry:
        return LogEntry(
            id=self.id_factory(),
            workflow_id=action.workflow_id,
            action_id=action.id,
            timestamp=self.clock(),
            title=action.summary,
            body=action.details,
        )
