"""Triage engine: pure functions over an in-memory mailbox snapshot."""

from inbox_triage.engine.classifier import assess_tasks, classify_queue, looks_actionable, looks_urgent
from inbox_triage.engine.rules import (
    DEFAULT_RULES,
    TriageRules,
    get_rules,
    load_rules,
    reload_rules,
)
from inbox_triage.engine.scoring import is_portal_sender, priority_label, score_breakdown, score_thread
from inbox_triage.engine.sla import age_label, sla_label
from inbox_triage.engine.threads import build_threads, normalize_subject, resolve_counterpart
from inbox_triage.engine.worklist import (
    SignalExtractor,
    build_worklist,
    count_by_queue,
    filter_threads,
    sort_threads,
    summary_line,
    triage_thread,
    view,
)

__all__ = [
    "TriageRules",
    "DEFAULT_RULES",
    "get_rules",
    "load_rules",
    "reload_rules",
    "normalize_subject",
    "resolve_counterpart",
    "build_threads",
    "assess_tasks",
    "classify_queue",
    "looks_actionable",
    "looks_urgent",
    "is_portal_sender",
    "score_breakdown",
    "score_thread",
    "priority_label",
    "age_label",
    "sla_label",
    "SignalExtractor",
    "summary_line",
    "triage_thread",
    "sort_threads",
    "count_by_queue",
    "filter_threads",
    "build_worklist",
    "view",
]
