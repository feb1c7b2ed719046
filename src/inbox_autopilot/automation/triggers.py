"""Trigger matching for the automation engine.

A workflow applies to a message when its declarative trigger scores above
zero. Scoring is deliberately literal: one point per trigger keyword found as
a case-insensitive substring of the subject, body or tags, plus a fixed bonus
when a trigger category equals a message tag.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..core.config import Trigger, WorkflowDefinition
from ..core.logger import get_logger
from ..core.models import MatchResult, Message

logger = get_logger("automation.triggers")

DEFAULT_CATEGORY_BONUS = 1


def normalize_terms(terms: Iterable[str]) -> tuple[str, ...]:
    """Strip, lower-case and de-duplicate terms, keeping first-seen order."""
    return tuple(dict.fromkeys(term.strip().lower() for term in terms if term and term.strip()))


def message_haystack(message: Message) -> str:
    """Lower-cased text searched for trigger keywords."""
    return "\n".join([message.subject, message.body, *message.tags]).lower()


class TriggerMatcher:
    """Select and rank the workflows that apply to a message."""

    def __init__(self, category_bonus: int = DEFAULT_CATEGORY_BONUS) -> None:
        if category_bonus < 0:
            raise ValueError("category_bonus must be non-negative")
        self.category_bonus = category_bonus

    def max_score(self, trigger: Trigger) -> int:
        """Highest score a trigger can reach."""
        keywords = normalize_terms(trigger.keywords)
        if not keywords:
            return 0
        bonus = self.category_bonus if normalize_terms(trigger.categories) else 0
        return len(keywords) + bonus

    def score(self, message: Message, trigger: Trigger) -> int:
        """Raw match score of one trigger against one message.

        A trigger without keywords always scores 0, whatever its categories.
        """
        keywords = normalize_terms(trigger.keywords)
        if not keywords:
            return 0

        haystack = message_haystack(message)
        hits = sum(1 for keyword in keywords if keyword in haystack)

        tags = set(normalize_terms(message.tags))
        if tags.intersection(normalize_terms(trigger.categories)):
            hits += self.category_bonus
        return hits

    def match(
        self,
        message: Message,
        workflows: Sequence[WorkflowDefinition],
    ) -> list[MatchResult]:
        """Return matching workflows, strongest first.

        Workflows without auto-detect are skipped; they are reserved for manual
        assignment. Ties keep registry definition order. An empty list means no
        automation is applicable, which is not an error.
        """
        candidates: list[MatchResult] = []
        for workflow in workflows:
            if not workflow.trigger.auto_detect:
                continue
            score = self.score(message, workflow.trigger)
            if score <= 0:
                continue
            candidates.append(
                MatchResult(
                    workflow=workflow,
                    score=score,
                    max_score=self.max_score(workflow.trigger),
                )
            )

        # sorted() is stable, so equal scores stay in definition order
        ranked = sorted(candidates, key=lambda item: item.score, reverse=True)
        logger.debug(
            "Message '%s' matched %d workflow(s): %s",
            message.id,
            len(ranked),
            ", ".join(f"{item.workflow_id}={item.score}" for item in ranked) or "-",
        )
        return ranked
