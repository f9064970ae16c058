"""Tests for queue classification rule order and task urgency."""

from datetime import timedelta

from inbox_triage.engine.classifier import assess_tasks, classify_queue, looks_actionable
from inbox_triage.engine.threads import build_threads
from inbox_triage.models import Task
from tests.helpers import NOW, make_contact, make_message, make_task

ANNA = ("Anna", "anna@example.com")


def _thread(messages, tasks=()):
    contacts = [make_contact("c1", ANNA[1])]
    threads = build_threads(messages, contacts, list(tasks))
    assert len(threads) == 1
    return threads[0]


def test_latest_sent_wins_over_unread():
    """Rule 1 short-circuits: our reply is the latest message, so we are waiting."""
    thread = _thread([
        make_message("in", sender=ANNA, subject="Visite ?", status="unread", minutes_ago=30),
        make_message("out", folder="sent", to=[ANNA], subject="Re: Visite ?", minutes_ago=5),
    ])
    assert thread.unread_count == 1
    assert classify_queue(thread, NOW) == "waiting"


def test_purely_outbound_thread_is_waiting():
    thread = _thread([make_message("out", folder="sent", to=[ANNA], subject="Offre")])
    assert classify_queue(thread, NOW) == "waiting"


def test_unread_inbound_is_now():
    thread = _thread([make_message("in", sender=ANNA, status="unread")])
    assert classify_queue(thread, NOW) == "now"


def test_overdue_task_is_now():
    thread = _thread([make_message("in", sender=ANNA)], [make_task("t1", "c1", due_in_hours=-2)])
    assert classify_queue(thread, NOW) == "now"


def test_due_soon_task_is_now():
    thread = _thread([make_message("in", sender=ANNA)], [make_task("t1", "c1", due_in_hours=23)])
    assert classify_queue(thread, NOW) == "now"


def test_distant_task_does_not_promote():
    thread = _thread([make_message("in", sender=ANNA)], [make_task("t1", "c1", due_in_hours=48)])
    assert classify_queue(thread, NOW) == "fyi"


def test_completed_overdue_task_is_ignored():
    thread = _thread([make_message("in", sender=ANNA)], [make_task("t1", "c1", due_in_hours=-2, status="completed")])
    assert classify_queue(thread, NOW) == "fyi"


def test_actionable_text_is_now():
    thread = _thread([make_message("in", sender=ANNA, subject="Documents", body="Avez-vous une place de PARKING")])
    assert classify_queue(thread, NOW) == "now"


def test_question_mark_in_preview_is_now():
    thread = _thread([make_message("in", sender=ANNA, preview="Disponible samedi ?")])
    assert classify_queue(thread, NOW) == "now"


def test_plain_read_inbound_is_fyi():
    thread = _thread([make_message("in", sender=ANNA, subject="Documents", body="Merci pour les documents.")])
    assert classify_queue(thread, NOW) == "fyi"


def test_actionable_keywords():
    assert looks_actionable("Demande de RDV")
    assert looks_actionable("Prix 500 000 €")
    assert looks_actionable("Je suis intéressé")
    assert looks_actionable("rendez-vous demain")
    assert not looks_actionable("Merci pour les documents.")


def test_assess_tasks_overdue_and_due_soon_are_exclusive():
    urgency = assess_tasks([make_task("t1", "c1", due_in_hours=-1)], NOW)
    assert urgency.overdue and not urgency.due_soon

    urgency = assess_tasks([make_task("t1", "c1", due_in_hours=1)], NOW)
    assert urgency.due_soon and not urgency.overdue

    urgency = assess_tasks([make_task("t1", "c1", due_in_hours=-1), make_task("t2", "c1", due_in_hours=1)], NOW)
    assert urgency.overdue and urgency.due_soon


def test_assess_tasks_window_boundaries():
    assert assess_tasks([make_task("t1", "c1", due_in_hours=0)], NOW).due_soon
    assert assess_tasks([make_task("t1", "c1", due_in_hours=24)], NOW).due_soon
    assert not assess_tasks([make_task("t1", "c1", due_in_hours=24.01)], NOW).any


def test_unparsable_due_date_is_ignored():
    """Malformed timestamps fail open: no boost, no exception."""
    task = Task.model_validate({"id": "t1", "status": "todo", "dueDate": "not-a-date"})
    assert task.due_date is None
    assert not assess_tasks([task, make_task("t2", "c1", due_in_hours=None)], NOW).any


def test_due_date_without_timezone_is_utc():
    task = Task.model_validate({"id": "t1", "dueDate": (NOW - timedelta(hours=1)).replace(tzinfo=None).isoformat()})
    assert assess_tasks([task], NOW).overdue


def test_naive_now_is_read_as_utc():
    naive = NOW.replace(tzinfo=None)
    thread = _thread([make_message("in", sender=ANNA)], [make_task("t1", "c1", due_in_hours=-1)])
    assert classify_queue(thread, naive) == "now"
    assert assess_tasks(thread.open_tasks, naive).overdue
