"""Worklist assembler: run one triage pass and expose the ordered, filterable view.

Every call rebuilds threads from the given snapshot; nothing is cached between
passes and ``now`` is always supplied by the caller.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Optional

from inbox_triage.engine.classifier import assess_tasks, classify_queue
from inbox_triage.engine.rules import DEFAULT_RULES, TriageRules
from inbox_triage.engine.scoring import is_portal_sender, priority_label, score_thread
from inbox_triage.engine.sla import sla_label
from inbox_triage.engine.threads import build_threads
from inbox_triage.extraction.lead_signals import extract_lead_signals
from inbox_triage.models.crm import Contact, Task
from inbox_triage.models.email import Message
from inbox_triage.models.signals import NO_SIGNALS, LeadSignals
from inbox_triage.models.triage import QUEUES, Queue, QueueCounts, Thread, TriagedThread, Worklist
from inbox_triage.utils.logger import get_logger
from inbox_triage.utils.timeparse import ensure_utc

logger = get_logger("inbox_triage.engine.worklist")

SignalExtractor = Callable[[Message], LeadSignals]


def format_budget(amount: int) -> str:
    return f"{amount:,}".replace(",", " ")


def summary_line(signals: LeadSignals) -> str:
    """``intent:buy • budget 750 000€ • LUX-2024-001 • Scheduling a visit``"""
    parts: list[str] = []
    if signals.intent != "unknown":
        parts.append(f"intent:{signals.intent}")
    if signals.budget_eur:
        parts.append(f"budget {format_budget(signals.budget_eur)}€")
    if signals.property_reference:
        parts.append(signals.property_reference)
    parts.append(signals.reason)
    return " • ".join(p for p in parts if p)


def _safe_extract(extractor: SignalExtractor, thread: Thread) -> LeadSignals:
    """One bad message must not abort the pass; fall back to no signals."""
    try:
        return extractor(thread.latest_inbound)
    except Exception:
        logger.warning(
            "triage.extractor_failed",
            thread_key=thread.key,
            message_id=thread.latest_inbound.id,
            exc_info=True,
        )
        return NO_SIGNALS


def triage_thread(
    thread: Thread,
    now: datetime,
    extractor: SignalExtractor = extract_lead_signals,
    rules: TriageRules = DEFAULT_RULES,
) -> TriagedThread:
    """Classify, score and label a single thread."""
    signals = _safe_extract(extractor, thread)
    task_urgency = assess_tasks(thread.open_tasks, now, rules)
    queue = classify_queue(thread, now, rules, task_urgency=task_urgency)
    portal = is_portal_sender(thread.latest_inbound.sender.email, rules)
    score = score_thread(thread, queue, signals, task_urgency, rules)
    return TriagedThread(
        thread=thread,
        signals=signals,
        queue=queue,
        priority_score=score,
        priority=priority_label(score, rules),
        sla_label=sla_label(thread, queue, portal, now, rules),
        summary=summary_line(signals),
        is_portal=portal,
        task_urgency=task_urgency,
    )


def _rank_key(item: TriagedThread):
    received = item.thread.latest_inbound.received_at
    recency = -received.timestamp() if received is not None else float("inf")
    return (item.queue != "now", -item.priority_score, recency)


def sort_threads(items: Sequence[TriagedThread]) -> list[TriagedThread]:
    """``now`` first, then score desc, then latest inbound desc; stable otherwise."""
    return sorted(items, key=_rank_key)


def count_by_queue(items: Sequence[TriagedThread]) -> QueueCounts:
    tallies = {queue: 0 for queue in QUEUES}
    for item in items:
        tallies[item.queue] += 1
    return QueueCounts(**tallies)


def matches_query(item: TriagedThread, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    t = item.thread
    return (
        q in t.subject.lower()
        or q in t.counterpart_name.lower()
        or q in t.counterpart_email.lower()
        or q in item.summary.lower()
    )


def filter_threads(
    items: Sequence[TriagedThread],
    queue: Queue,
    query: Optional[str] = None,
) -> list[TriagedThread]:
    """Threads of one queue, optionally narrowed by a case-insensitive search. Order is kept."""
    selected = [item for item in items if item.queue == queue]
    if not query or not query.strip():
        return selected
    return [item for item in selected if matches_query(item, query)]


def build_worklist(
    messages: Sequence[Message],
    now: datetime,
    *,
    contacts: Sequence[Contact] = (),
    tasks: Sequence[Task] = (),
    extractor: Optional[SignalExtractor] = None,
    rules: Optional[TriageRules] = None,
) -> Worklist:
    """Full triage pass over a snapshot: build, classify, score, label, sort, count."""
    now = ensure_utc(now)
    rules = rules or DEFAULT_RULES
    extractor = extractor or extract_lead_signals
    threads = build_threads(messages, contacts, tasks, rules)
    triaged = sort_threads([triage_thread(t, now, extractor, rules) for t in threads])
    counts = count_by_queue(triaged)
    logger.debug(
        "triage.worklist_built",
        messages=len(messages),
        threads=len(triaged),
        now_count=counts.now,
        waiting_count=counts.waiting,
        fyi_count=counts.fyi,
    )
    return Worklist(threads=triaged, counts=counts, generated_at=now)


def view(worklist: Worklist, queue: Queue, query: Optional[str] = None) -> list[TriagedThread]:
    return filter_threads(worklist.threads, queue, query)
