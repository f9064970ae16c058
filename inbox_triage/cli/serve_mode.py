"""Serve mode: run the FastAPI triage API."""

import sys
from pathlib import Path

import typer
import uvicorn

from inbox_triage.api import create_app
from inbox_triage.config import API_HOST, API_PORT, MAILBOX_PATH

from .shared import console, get_store, logger


def serve(
    port: int = typer.Option(API_PORT, "--port", "-p", help="Port for the API server"),
    host: str = typer.Option(API_HOST, "--host", "-h", help="Bind host"),
    mailbox: Path = typer.Option(MAILBOX_PATH, "--mailbox", "-m", help="Path to mailbox.json"),
) -> None:
    """Start the triage API."""
    log = logger.bind(command="serve", port=port, mailbox=str(mailbox))
    log.info("serve.start")
    app = create_app(store=get_store(mailbox))

    console.print(f"[green]Starting triage API on http://{host}:{port}[/green]")
    console.print("[dim]Endpoints: GET /triage/worklist, GET /triage/counts, POST /triage/threads/open, GET /health[/dim]")
    try:
        uvicorn.run(app, host=host, port=port, log_level="info")
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)
