"""Result aggregation and throughput metrics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ..core.exceptions import ContractViolationError
from ..core.logger import get_logger
from ..core.models import ExecutedAction, MatchResult, Message, ProcessedResult

logger = get_logger("automation.results")

DEFAULT_VELOCITY_WINDOW = 5


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def compute_confidence(matches: Sequence[MatchResult]) -> float:
    """Top match score normalized by its maximum, clamped to [0, 1]."""
    if not matches:
        return 0.0
    top = matches[0]
    if top.max_score <= 0:
        return 0.0
    return min(max(top.score / top.max_score, 0.0), 1.0)


def build_summary(workflow_count: int, action_count: int) -> str:
    """Deterministic one-line description of a run."""
    if workflow_count == 0:
        return "No workflow matched; no actions executed."
    return (
        f"Executed {_plural(action_count, 'action')} "
        f"across {_plural(workflow_count, 'workflow')}."
    )


class ResultAggregator:
    """Combine matches and executed actions into a ProcessedResult."""

    def aggregate(
        self,
        message: Message,
        matches: Sequence[MatchResult],
        actions: Sequence[ExecutedAction],
        processed_at: datetime,
    ) -> ProcessedResult:
        """Create the terminal record of one evaluation.

        Raises:
            ContractViolationError: If an action was not produced for this
                message and these matches
        """
        self._check_contract(message, matches, actions)

        workflow_ids = tuple(match.workflow_id for match in matches)
        result = ProcessedResult(
            message=message,
            confidence=compute_confidence(matches),
            summary=build_summary(len(workflow_ids), len(actions)),
            matched_workflow_ids=workflow_ids,
            actions=tuple(actions),
            processed_at=processed_at,
        )
        logger.debug(
            "Aggregated message '%s': confidence=%.2f, %s",
            message.id,
            result.confidence,
            result.summary,
        )
        return result

    @staticmethod
    def _check_contract(
        message: Message,
        matches: Sequence[MatchResult],
        actions: Sequence[ExecutedAction],
    ) -> None:
        matched = {match.workflow_id for match in matches}
        for action in actions:
            if action.message_id != message.id:
                raise ContractViolationError(
                    f"Action {action.id} was executed for message {action.message_id!r}, "
                    f"not {message.id!r}",
                    action_id=action.id,
                )
            if action.workflow_id not in matched:
                raise ContractViolationError(
                    f"Action {action.id} belongs to workflow {action.workflow_id!r}, "
                    "which did not match this message",
                    action_id=action.id,
                )


def compute_velocity(
    results: Iterable[ProcessedResult],
    window: int = DEFAULT_VELOCITY_WINDOW,
) -> float:
    """Runs per minute over the most recent results.

    Args:
        results: Processed results, newest first
        window: How many of the newest results to consider

    Returns:
        ``60 / average action runtime`` rounded to one decimal, or 0.0 when the
        window holds no actions
    """
    if window < 1:
        raise ValueError("window must be at least 1")

    recent = list(results)[:window]
    runtimes = [action.runtime_seconds for result in recent for action in result.actions]
    if not runtimes:
        return 0.0

    average = sum(runtimes) / len(runtimes)
    if average <= 0:
        return 0.0
    velocity = Decimal(str(60 / average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(velocity)
