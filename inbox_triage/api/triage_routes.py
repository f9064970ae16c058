"""Triage API: worklist view, queue counts, open a thread."""

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from inbox_triage.engine import build_threads, build_worklist, filter_threads, get_rules
from inbox_triage.mailbox import MailboxStore
from inbox_triage.models.triage import Queue, Worklist
from inbox_triage.utils.logger import get_logger, log_context
from inbox_triage.utils.timeparse import parse_timestamp, utc_now

logger = get_logger("inbox_triage.api.triage")

router = APIRouter(prefix="/triage", tags=["triage"])


class OpenThreadBody(BaseModel):
    key: str


def _store(request: Request) -> MailboxStore:
    return request.app.state.store


def _resolve_now(value: Optional[str]) -> datetime:
    """Explicit ``now`` from the query string (ISO 8601), else the wall clock."""
    if value is None or not value.strip():
        return utc_now()
    parsed = parse_timestamp(value)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Invalid 'now' timestamp: {value!r}")
    return parsed


def _run_pass(request: Request, now: datetime) -> Worklist:
    snapshot = _store(request).snapshot()
    return build_worklist(
        snapshot.messages,
        now,
        contacts=snapshot.contacts,
        tasks=snapshot.tasks,
        rules=get_rules(),
    )


@router.get("/worklist")
async def get_worklist(
    request: Request,
    queue: Queue = Query("now", description="now | waiting | fyi"),
    q: Optional[str] = Query(None, description="Case-insensitive search"),
    now: Optional[str] = Query(None, description="ISO datetime to evaluate at (default: current time)"),
) -> dict[str, Any]:
    """Ordered threads of one queue, with counts over all queues."""
    worklist = _run_pass(request, _resolve_now(now))
    threads = filter_threads(worklist.threads, queue, q)
    logger.debug("api.worklist", queue=queue, query=q, returned=len(threads))
    return {
        "queue": queue,
        "query": q,
        "generated_at": worklist.generated_at.isoformat(),
        "counts": worklist.counts.model_dump(),
        "threads": [t.as_row() for t in threads],
    }


@router.get("/counts")
async def get_counts(
    request: Request,
    now: Optional[str] = Query(None, description="ISO datetime to evaluate at (default: current time)"),
) -> dict[str, int]:
    """Badge counters per queue."""
    return _run_pass(request, _resolve_now(now)).counts.model_dump()


@router.post("/threads/open")
async def open_thread(request: Request, body: OpenThreadBody) -> dict[str, Any]:
    """Mark a thread's unread inbound messages read (the next pass reclassifies it)."""
    # Keys are built from lowercased address and subject
    key = body.key.strip().lower()
    store = _store(request)
    with log_context(route="open_thread", key=key):
        snapshot = store.snapshot()
        threads = build_threads(snapshot.messages, snapshot.contacts, snapshot.tasks, get_rules())
        thread = next((t for t in threads if t.key == key), None)
        if thread is None:
            logger.warning("api.unknown_thread")
            raise HTTPException(status_code=404, detail=f"Unknown thread: {body.key!r}")
        marked = store.open_thread(thread)
        logger.info("api.thread_opened", marked_read=marked)
    return {"key": key, "marked_read": marked}
