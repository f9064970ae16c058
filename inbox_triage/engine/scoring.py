"""Priority scorer: additive points used to rank threads inside and across queues."""

from typing import Optional

from inbox_triage.engine.classifier import actionable_text, looks_urgent
from inbox_triage.engine.rules import DEFAULT_RULES, TriageRules
from inbox_triage.models.signals import LeadSignals
from inbox_triage.models.triage import PriorityLabel, Queue, TaskUrgency, Thread


def is_portal_sender(address: str, rules: TriageRules = DEFAULT_RULES) -> bool:
    """True when the address contains a listing-portal domain."""
    lowered = (address or "").lower()
    return any(domain.lower() in lowered for domain in rules.portal_domains)


def score_breakdown(
    thread: Thread,
    queue: Queue,
    signals: LeadSignals,
    task_urgency: TaskUrgency,
    rules: TriageRules = DEFAULT_RULES,
) -> list[tuple[str, int]]:
    """Return ``(condition, points)`` for every condition that holds."""
    w = rules.weights
    parts: list[tuple[str, int]] = []
    if queue == "now":
        parts.append(("now_queue", w.now_queue))
    if thread.unread_count > 0:
        parts.append(("unread", w.unread))
    if is_portal_sender(thread.latest_inbound.sender.email, rules):
        parts.append(("portal", w.portal))
    if task_urgency.overdue:
        parts.append(("overdue_task", w.overdue_task))
    elif task_urgency.due_soon:
        parts.append(("due_soon_task", w.due_soon_task))
    if signals.intent == "sell":
        parts.append(("intent_sell", w.intent_sell))
    elif signals.intent in ("buy", "rent"):
        parts.append(("intent_buy_or_rent", w.intent_buy_or_rent))
    if signals.budget_eur is not None and signals.budget_eur >= rules.high_budget_eur:
        parts.append(("high_budget", w.high_budget))
    if looks_urgent(actionable_text(thread.latest_inbound), rules):
        parts.append(("urgency", w.urgency))
    return parts


def score_thread(
    thread: Thread,
    queue: Queue,
    signals: LeadSignals,
    task_urgency: TaskUrgency,
    rules: TriageRules = DEFAULT_RULES,
) -> int:
    return sum(points for _, points in score_breakdown(thread, queue, signals, task_urgency, rules))


def priority_label(score: int, rules: Optional[TriageRules] = None) -> PriorityLabel:
    thresholds = (rules or DEFAULT_RULES).thresholds
    if score >= thresholds.high:
        return "high"
    if score >= thresholds.medium:
        return "medium"
    return "low"
