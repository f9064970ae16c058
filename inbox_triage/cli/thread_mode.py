"""Thread actions: open (mark read), archive, star."""

from pathlib import Path

import typer

from inbox_triage.config import MAILBOX_PATH
from inbox_triage.engine import build_threads, get_rules

from .shared import console, get_store, logger


def open_thread(
    key: str = typer.Argument(..., help="Thread key as printed by `worklist --json`"),
    mailbox: Path = typer.Option(MAILBOX_PATH, "--mailbox", "-m", help="Path to mailbox.json"),
) -> None:
    """Open a thread: mark its unread inbound messages read."""
    store = get_store(mailbox)
    snapshot = store.snapshot()
    threads = build_threads(snapshot.messages, snapshot.contacts, snapshot.tasks, get_rules())
    thread = next((t for t in threads if t.key == key.strip().lower()), None)
    if thread is None:
        console.print(f"[red]Unknown thread: {key!r}[/red]")
        logger.warning("open_thread.unknown_key", key=key)
        raise typer.Exit(1)
    marked = store.open_thread(thread)
    console.print(f"[green]Opened {thread.subject!r}: {marked} message(s) marked read.[/green]")


def archive(
    message_ids: list[str] = typer.Argument(..., help="Message ids to archive"),
    mailbox: Path = typer.Option(MAILBOX_PATH, "--mailbox", "-m", help="Path to mailbox.json"),
) -> None:
    """Move messages to the archive (they leave triage)."""
    changed = get_store(mailbox).archive(message_ids)
    console.print(f"[green]Archived {changed} message(s).[/green]")


def star(
    message_id: str = typer.Argument(..., help="Message id"),
    off: bool = typer.Option(False, "--off", help="Remove the star instead"),
    mailbox: Path = typer.Option(MAILBOX_PATH, "--mailbox", "-m", help="Path to mailbox.json"),
) -> None:
    """Star or unstar a message."""
    if not get_store(mailbox).set_starred(message_id, not off):
        console.print(f"[red]Unknown message: {message_id!r}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{'Unstarred' if off else 'Starred'} {message_id}.[/green]")
