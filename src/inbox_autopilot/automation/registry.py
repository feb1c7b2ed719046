"""Workflow registry and shorthand authoring.

The registry keeps workflow definitions in definition order, which is the
tie-breaker the trigger matcher relies on. Evaluations never read the live
registry: they work on :meth:`WorkflowRegistry.snapshot`.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Iterator

from ..core.config import ActionSpec, AutopilotConfig, Trigger, WorkflowDefinition
from ..core.exceptions import InvalidInputError, WorkflowNotFoundError
from ..core.logger import get_logger
from ..core.models import ActionType

logger = get_logger("automation.registry")

DEFAULT_ACTION_DETAILS = "Automatically executed as part of the custom workflow."


class WorkflowRegistry:
    """Ordered, thread-safe collection of workflow definitions."""

    def __init__(self, workflows: Iterable[WorkflowDefinition] = ()) -> None:
        self._workflows: dict[str, WorkflowDefinition] = {}
        self._lock = threading.RLock()
        for workflow in workflows:
            self.register(workflow)

    @classmethod
    def from_config(cls, config: AutopilotConfig) -> WorkflowRegistry:
        """Build a registry from the ``workflows`` section of a config."""
        return cls(config.workflows)

    def register(
        self,
        workflow: WorkflowDefinition,
        replace: bool = False,
        prepend: bool = False,
    ) -> None:
        """Add a workflow.

        Args:
            workflow: Definition to add
            replace: Overwrite an existing workflow with the same id in place
            prepend: Put a new workflow first so it wins score ties

        Raises:
            InvalidInputError: If the id is blank or already registered
        """
        if not workflow.id.strip():
            raise InvalidInputError("Workflow id is required", field="id")

        with self._lock:
            if workflow.id in self._workflows:
                if not replace:
                    raise InvalidInputError(
                        f"Workflow already registered: {workflow.id}", field="id"
                    )
                self._workflows[workflow.id] = workflow
                logger.info("Replaced workflow '%s'", workflow.id)
                return

            if prepend:
                self._workflows = {workflow.id: workflow, **self._workflows}
            else:
                self._workflows[workflow.id] = workflow
            logger.info("Registered workflow '%s'", workflow.id)

    def remove(self, workflow_id: str) -> WorkflowDefinition:
        """Remove and return a workflow.

        Raises:
            WorkflowNotFoundError: If no workflow has this id
        """
        with self._lock:
            try:
                workflow = self._workflows.pop(workflow_id)
            except KeyError:
                raise WorkflowNotFoundError(workflow_id) from None
        logger.info("Removed workflow '%s'", workflow_id)
        return workflow

    def get(self, workflow_id: str) -> WorkflowDefinition | None:
        with self._lock:
            return self._workflows.get(workflow_id)

    def list_workflows(self) -> list[WorkflowDefinition]:
        """All workflows in definition order."""
        with self._lock:
            return list(self._workflows.values())

    def snapshot(self) -> tuple[WorkflowDefinition, ...]:
        """Immutable view of the registry at this instant.

        Definitions are frozen models, so a tuple taken under the lock is a
        complete copy-on-read snapshot.
        """
        with self._lock:
            return tuple(self._workflows.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._workflows)

    def __contains__(self, workflow_id: object) -> bool:
        with self._lock:
            return workflow_id in self._workflows

    def __iter__(self) -> Iterator[WorkflowDefinition]:
        return iter(self.snapshot())


def slugify(name: str) -> str:
    """Lower-case a name and collapse whitespace runs into dashes."""
    return re.sub(r"\s+", "-", name.strip().lower())


def _parse_action_lines(workflow_id: str, actions: str) -> list[ActionSpec]:
    specs: list[ActionSpec] = []
    lines = [line.strip() for line in actions.splitlines() if line.strip()]
    for index, line in enumerate(lines):
        parts = [part.strip() for part in line.split("|")]
        raw_type = parts[0] if parts else ""
        summary = parts[1] if len(parts) > 1 else ""
        details = parts[2] if len(parts) > 2 else ""
        specs.append(
            ActionSpec(
                id=f"custom-{workflow_id}-{index}",
                type=ActionType.resolve(raw_type).value,
                summary=summary or f"Custom action {index + 1}",
                details=details or DEFAULT_ACTION_DETAILS,
            )
        )
    return specs


def workflow_from_shorthand(
    name: str,
    keywords: str = "",
    actions: str = "",
    description: str = "",
    autopilot: bool = True,
    sla_minutes: int = 30,
) -> WorkflowDefinition:
    """Build a workflow from the compact authoring form.

    Args:
        name: Workflow name; the id is derived from it
        keywords: Comma separated trigger keywords (defaults to the name)
        actions: One ``type|summary|details`` action per line
        description: Optional description
        autopilot: Whether the workflow runs without confirmation
        sla_minutes: Service-level agreement in minutes

    Raises:
        InvalidInputError: If the name is blank
    """
    if not name.strip():
        raise InvalidInputError("Workflow name required", field="name")

    workflow_id = slugify(name)
    keyword_list = [item.strip().lower() for item in keywords.split(",") if item.strip()]
    specs = _parse_action_lines(workflow_id, actions)
    if not specs:
        specs.append(
            ActionSpec(
                id=f"custom-{workflow_id}-default",
                type=ActionType.ANALYSIS.value,
                summary="Analyze email context",
                details="Generate structured summary and recommended response.",
            )
        )

    return WorkflowDefinition(
        id=workflow_id,
        name=name.strip(),
        description=description or "Custom automation created from the dashboard.",
        trigger=Trigger(
            keywords=tuple(keyword_list or [name.strip()]),
            categories=("custom",),
            auto_detect=True,
        ),
        actions=tuple(specs),
        autopilot=autopilot,
        sla_minutes=sla_minutes,
        success_metric="Automation executed per custom configuration",
        playbook_highlights=("Custom workflow",),
    )
