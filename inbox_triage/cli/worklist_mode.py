"""Worklist mode: run one triage pass over the mailbox and print a queue."""

import json
from pathlib import Path
from typing import Optional

import typer

from inbox_triage.config import MAILBOX_PATH
from inbox_triage.engine import build_worklist, filter_threads, get_rules
from inbox_triage.models.triage import QUEUES
from inbox_triage.utils.logger import log_context

from .shared import console, get_store, logger, print_counts, resolve_now, worklist_table


def worklist(
    queue: str = typer.Option("now", "--queue", "-q", help="Queue to show: now, waiting or fyi"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Case-insensitive search"),
    now: Optional[str] = typer.Option(None, "--now", help="Evaluate at this ISO datetime instead of the clock"),
    mailbox: Path = typer.Option(MAILBOX_PATH, "--mailbox", "-m", help="Path to mailbox.json"),
    as_json: bool = typer.Option(False, "--json", help="Print rows as JSON instead of a table"),
) -> None:
    """Show the prioritized worklist for one queue."""
    if queue not in QUEUES:
        console.print(f"[red]Unknown queue {queue!r}; expected one of {', '.join(QUEUES)}[/red]")
        raise typer.Exit(1)
    at = resolve_now(now)
    with log_context(command="worklist", queue=queue):
        log = logger.bind(mailbox=str(mailbox))
        log.info("worklist.start")
        snapshot = get_store(mailbox).snapshot()
        result = build_worklist(
            snapshot.messages,
            at,
            contacts=snapshot.contacts,
            tasks=snapshot.tasks,
            rules=get_rules(),
        )
        threads = filter_threads(result.threads, queue, search)
        log.info("worklist.complete", threads=len(result.threads), shown=len(threads))
        if as_json:
            payload = {
                "queue": queue,
                "counts": result.counts.model_dump(),
                "threads": [t.as_row() for t in threads],
            }
            console.print_json(json.dumps(payload, ensure_ascii=False))
            return
        print_counts(result.counts, queue)
        if not threads:
            console.print("[dim]Nothing here.[/dim]")
            return
        console.print(worklist_table(threads, title=f"{queue} queue at {at.isoformat()}"))
