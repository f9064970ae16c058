"""Queue classifier: assign each thread to now / waiting / fyi."""

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Optional

from inbox_triage.engine.rules import DEFAULT_RULES, TriageRules
from inbox_triage.models.crm import Task
from inbox_triage.models.email import Message
from inbox_triage.models.triage import Queue, TaskUrgency, Thread
from inbox_triage.utils.timeparse import ensure_utc


def assess_tasks(tasks: Iterable[Task], now: datetime, rules: TriageRules = DEFAULT_RULES) -> TaskUrgency:
    """Overdue: due before ``now``. Due soon: due within the window and not overdue.

    Tasks without a usable due date are ignored.
    """
    now = ensure_utc(now)
    horizon = now + timedelta(hours=rules.due_soon_hours)
    overdue = due_soon = False
    for task in tasks:
        if task.due_date is None:
            continue
        if task.due_date < now:
            overdue = True
        elif task.due_date <= horizon:
            due_soon = True
    return TaskUrgency(overdue=overdue, due_soon=due_soon)


def actionable_text(message: Message) -> str:
    return f"{message.subject}\n{message.preview}\n{message.body}"


def looks_actionable(text: str, rules: TriageRules = DEFAULT_RULES) -> bool:
    return rules.actionable_pattern().search(text) is not None


def looks_urgent(text: str, rules: TriageRules = DEFAULT_RULES) -> bool:
    return rules.urgency_pattern().search(text) is not None


def classify_queue(
    thread: Thread,
    now: datetime,
    rules: TriageRules = DEFAULT_RULES,
    task_urgency: Optional[TaskUrgency] = None,
) -> Queue:
    """First matching rule wins.

    1. latest message is ours (sent)     -> waiting
    2. unread inbound messages           -> now
    3. linked task overdue or due soon   -> now
    4. inbound text looks actionable     -> now
    5. otherwise                         -> fyi
    """
    if thread.latest.folder == "sent":
        return "waiting"
    if thread.unread_count > 0:
        return "now"
    if task_urgency is None:
        task_urgency = assess_tasks(thread.open_tasks, now, rules)
    if task_urgency.any:
        return "now"
    if looks_actionable(actionable_text(thread.latest_inbound), rules):
        return "now"
    return "fyi"
