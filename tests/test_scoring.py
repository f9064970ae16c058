"""Tests for the additive priority score and its labels."""

import pytest

from inbox_triage.engine.rules import ScoreWeights, TriageRules
from inbox_triage.engine.scoring import is_portal_sender, priority_label, score_breakdown, score_thread
from inbox_triage.engine.threads import build_threads
from inbox_triage.models import NO_SIGNALS, LeadSignals, TaskUrgency
from tests.helpers import make_message

NO_TASKS = TaskUrgency()


def _thread(**kwargs):
    return build_threads([make_message("m1", **kwargs)])[0]


def test_portal_unread_now_thread():
    thread = _thread(sender=("Buyer", "buyer@immotop.lu"), status="unread")
    parts = dict(score_breakdown(thread, "now", NO_SIGNALS, NO_TASKS))
    assert parts == {"now_queue": 6, "unread": 3, "portal": 3}
    assert score_thread(thread, "now", NO_SIGNALS, NO_TASKS) == 12


def test_empty_thread_scores_zero():
    assert score_thread(_thread(), "fyi", NO_SIGNALS, NO_TASKS) == 0


@pytest.mark.parametrize(
    "intent, expected",
    [("sell", 4), ("buy", 2), ("rent", 2), ("unknown", 0)],
)
def test_intent_points(intent, expected):
    signals = LeadSignals(intent=intent)
    assert score_thread(_thread(), "fyi", signals, NO_TASKS) == expected


def test_budget_threshold_is_inclusive():
    thread = _thread()
    assert score_thread(thread, "fyi", LeadSignals(budget_eur=700_000), NO_TASKS) == 2
    assert score_thread(thread, "fyi", LeadSignals(budget_eur=699_999), NO_TASKS) == 0


def test_overdue_is_not_also_counted_as_due_soon():
    thread = _thread()
    assert score_thread(thread, "fyi", NO_SIGNALS, TaskUrgency(overdue=True, due_soon=True)) == 4
    assert score_thread(thread, "fyi", NO_SIGNALS, TaskUrgency(due_soon=True)) == 2


def test_urgency_keywords():
    assert score_thread(_thread(body="C'est URGENT"), "fyi", NO_SIGNALS, NO_TASKS) == 3
    assert score_thread(_thread(subject="Réponse rapide svp"), "fyi", NO_SIGNALS, NO_TASKS) == 3
    assert score_thread(_thread(preview="asap please"), "fyi", NO_SIGNALS, NO_TASKS) == 3


def test_portal_detection():
    assert is_portal_sender("noreply@AtHome.lu")
    assert is_portal_sender("leads@mail.wortimmo.lu")
    assert not is_portal_sender("someone@gmail.com")
    assert not is_portal_sender("")


def test_custom_weights():
    rules = TriageRules(weights=ScoreWeights(unread=10))
    thread = _thread(status="unread")
    assert score_thread(thread, "fyi", NO_SIGNALS, NO_TASKS, rules) == 10


@pytest.mark.parametrize(
    "score, label",
    [(0, "low"), (5, "low"), (6, "medium"), (9, "medium"), (10, "high"), (30, "high")],
)
def test_priority_label(score, label):
    assert priority_label(score) == label


def test_score_is_deterministic():
    thread = _thread(sender=("Buyer", "buyer@immotop.lu"), status="unread", body="urgent")
    signals = LeadSignals(intent="sell", budget_eur=900_000)
    first = score_thread(thread, "now", signals, TaskUrgency(overdue=True))
    assert first == score_thread(thread, "now", signals, TaskUrgency(overdue=True))
    assert first == 6 + 3 + 3 + 4 + 4 + 2 + 3
