"""Tests for trigger matching.

Tests cover:
- Keyword scoring (case-insensitive, subject/body/tags)
- Category bonus
- auto_detect exclusion
- Ordering and tie-breaking by definition order
"""

from __future__ import annotations

import pytest

from inbox_autopilot.automation.triggers import TriggerMatcher, message_haystack, normalize_terms
from inbox_autopilot.core import Trigger


class TestNormalizeTerms:
    """Tests for normalize_terms helper."""

    def test_strips_lowercases_and_dedupes(self) -> None:
        assert normalize_terms([" Scholarship", "scholarship", "", "  ", "Finalist"]) == (
            "scholarship",
            "finalist",
        )

    def test_haystack_includes_subject_body_and_tags(self, message_factory) -> None:
        message = message_factory(subject="Hello", body="World", tags=["Urgent"])
        haystack = message_haystack(message)
        assert "hello" in haystack
        assert "world" in haystack
        assert "urgent" in haystack


class TestScore:
    """Tests for TriggerMatcher.score."""

    def test_counts_each_keyword_once(self, message_factory) -> None:
        matcher = TriggerMatcher(category_bonus=1)
        message = message_factory(subject="Scholarship", body="scholarship finalist", tags=[])
        trigger = Trigger(keywords=("scholarship", "finalist", "invoice"))
        assert matcher.score(message, trigger) == 2

    def test_case_insensitive(self, message_factory) -> None:
        matcher = TriggerMatcher()
        message = message_factory(subject="FINALIST Round", body="", tags=[])
        assert matcher.score(message, Trigger(keywords=("Finalist",))) == 1

    def test_matches_tags(self, message_factory) -> None:
        matcher = TriggerMatcher(category_bonus=0)
        message = message_factory(subject="Hi", body="Nothing here", tags=["backend"])
        assert matcher.score(message, Trigger(keywords=("backend",))) == 1

    def test_category_bonus(self, message_factory) -> None:
        matcher = TriggerMatcher(category_bonus=3)
        message = message_factory(subject="Hi", body="", tags=["Scholarship"])
        trigger = Trigger(keywords=("finalist",), categories=("scholarship",))
        assert matcher.score(message, trigger) == 3

    def test_empty_keywords_never_score(self, message_factory) -> None:
        matcher = TriggerMatcher(category_bonus=5)
        message = message_factory(tags=["scholarship"])
        trigger = Trigger(keywords=(), categories=("scholarship",))
        assert matcher.score(message, trigger) == 0
        assert matcher.max_score(trigger) == 0

    def test_max_score(self) -> None:
        matcher = TriggerMatcher(category_bonus=2)
        assert matcher.max_score(Trigger(keywords=("a", "b", "A"))) == 2
        assert matcher.max_score(Trigger(keywords=("a", "b"), categories=("x",))) == 4

    def test_negative_bonus_rejected(self) -> None:
        with pytest.raises(ValueError):
            TriggerMatcher(category_bonus=-1)


class TestMatch:
    """Tests for TriggerMatcher.match."""

    def test_excludes_zero_scores(self, message_factory, workflow_factory) -> None:
        matcher = TriggerMatcher()
        workflows = [
            workflow_factory("scholarship", ["scholarship"]),
            workflow_factory("invoices", ["invoice"]),
        ]
        matches = matcher.match(message_factory(), workflows)
        assert [m.workflow_id for m in matches] == ["scholarship"]

    def test_skips_manual_only_workflows(self, message_factory, workflow_factory) -> None:
        matcher = TriggerMatcher()
        workflows = [workflow_factory("manual", ["scholarship"], auto_detect=False)]
        assert matcher.match(message_factory(), workflows) == []

    def test_orders_by_descending_score(self, message_factory, workflow_factory) -> None:
        matcher = TriggerMatcher(category_bonus=0)
        workflows = [
            workflow_factory("weak", ["finalist"]),
            workflow_factory("strong", ["finalist", "questionnaire", "scholarship"]),
        ]
        matches = matcher.match(message_factory(), workflows)
        assert [m.workflow_id for m in matches] == ["strong", "weak"]
        assert [m.score for m in matches] == [3, 1]

    def test_ties_keep_definition_order(self, message_factory, workflow_factory) -> None:
        matcher = TriggerMatcher()
        workflows = [
            workflow_factory("b-second", ["finalist"]),
            workflow_factory("a-first", ["questionnaire"]),
            workflow_factory("c-third", ["scholarship"]),
        ]
        for _ in range(5):
            matches = matcher.match(message_factory(tags=[]), workflows)
            assert [m.workflow_id for m in matches] == ["b-second", "a-first", "c-third"]

    def test_no_match_returns_empty_list(self, message_factory, workflow_factory) -> None:
        matcher = TriggerMatcher()
        message = message_factory(subject="Lunch?", body="Tacos at noon", tags=["social"])
        assert matcher.match(message, [workflow_factory("invoices", ["invoice"])]) == []

    def test_match_result_carries_max_score(self, message_factory, workflow_factory) -> None:
        matcher = TriggerMatcher(category_bonus=1)
        workflows = [
            workflow_factory("scholarship", ["scholarship", "grant"], categories=["scholarship"])
        ]
        (match,) = matcher.match(message_factory(), workflows)
        assert match.score == 2
        assert match.max_score == 3
        assert match.to_dict() == {"workflow_id": "scholarship", "score": 2, "max_score": 3}
