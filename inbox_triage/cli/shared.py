"""Shared CLI helpers: console, logger, store access, `--now` parsing, table rendering."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from inbox_triage.config import MAILBOX_PATH
from inbox_triage.mailbox import JsonMailboxStore
from inbox_triage.models.triage import QueueCounts, TriagedThread
from inbox_triage.utils.logger import get_logger
from inbox_triage.utils.timeparse import parse_timestamp, utc_now

console = Console()
logger = get_logger("inbox_triage.cli")

PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def get_store(path: Optional[Path] = None) -> JsonMailboxStore:
    """Return the JSON mailbox store (default: MAILBOX_PATH)."""
    return JsonMailboxStore(path or MAILBOX_PATH)


def resolve_now(value: Optional[str]) -> datetime:
    """Parse a `--now` option; exit with an error on bad input."""
    if not value:
        return utc_now()
    parsed = parse_timestamp(value)
    if parsed is None:
        console.print(f"[red]Invalid --now timestamp: {value!r} (expected ISO 8601)[/red]")
        raise typer.Exit(1)
    return parsed


def print_counts(counts: QueueCounts, active: str) -> None:
    parts = []
    for queue in ("now", "waiting", "fyi"):
        label = f"{queue} ({counts.get(queue)})"
        parts.append(f"[bold reverse] {label} [/bold reverse]" if queue == active else f" {label} ")
    console.print("  ".join(parts))


def worklist_table(threads: list[TriagedThread], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Priority")
    table.add_column("Score", justify="right")
    table.add_column("SLA")
    table.add_column("Counterpart", style="cyan")
    table.add_column("Subject")
    table.add_column("Unread", justify="right")
    table.add_column("Signals", style="green")
    for i, item in enumerate(threads, 1):
        t = item.thread
        style = PRIORITY_STYLES[item.priority]
        sla_style = "red" if item.sla_label == "overdue" else ""
        table.add_row(
            str(i),
            f"[{style}]{item.priority}[/{style}]",
            str(item.priority_score),
            f"[{sla_style}]{item.sla_label}[/{sla_style}]" if sla_style else item.sla_label,
            f"{t.counterpart_name} <{t.counterpart_email}>",
            t.subject,
            str(t.unread_count) if t.unread_count else "",
            item.summary,
        )
    return table
