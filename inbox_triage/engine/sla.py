"""SLA calculator: response deadline for actionable threads, age for the rest."""

from datetime import datetime, timedelta
from typing import Optional

from inbox_triage.engine.rules import DEFAULT_RULES, TriageRules
from inbox_triage.models.triage import Queue, Thread
from inbox_triage.utils.timeparse import ensure_utc

MINUTE = timedelta(minutes=1)
OVERDUE_LABEL = "overdue"
UNKNOWN_LABEL = "-"


def whole_minutes(delta: timedelta) -> int:
    """Floor of ``delta`` in minutes (negative deltas round toward -inf)."""
    return delta // MINUTE


def response_deadline(received_at: datetime, portal: bool, rules: TriageRules = DEFAULT_RULES) -> datetime:
    minutes = rules.sla.portal if portal else rules.sla.standard
    return received_at + timedelta(minutes=minutes)


def deadline_label(remaining_minutes: int) -> str:
    if remaining_minutes <= 0:
        return OVERDUE_LABEL
    if remaining_minutes < 60:
        return f"in {remaining_minutes}m"
    return f"in {remaining_minutes // 60}h"


def age_label(timestamp: Optional[datetime], now: datetime) -> str:
    """Compact age: ``42m``, ``5h`` or ``3d``; future timestamps read as ``0m``."""
    if timestamp is None:
        return UNKNOWN_LABEL
    minutes = max(0, whole_minutes(ensure_utc(now) - ensure_utc(timestamp)))
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    return f"{hours // 24}d"


def sla_label(
    thread: Thread,
    queue: Queue,
    portal: bool,
    now: datetime,
    rules: TriageRules = DEFAULT_RULES,
) -> str:
    now = ensure_utc(now)
    inbound = thread.latest_inbound
    if queue == "now" and inbound.folder == "inbox":
        if inbound.received_at is None:
            return UNKNOWN_LABEL
        deadline = response_deadline(inbound.received_at, portal, rules)
        return deadline_label(whole_minutes(deadline - now))
    return age_label(inbound.received_at, now)
