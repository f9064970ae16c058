"""FastAPI app exposing the triage worklist to the presentation layer."""

from typing import Optional

from fastapi import FastAPI

from inbox_triage import __version__
from inbox_triage.api.rules_routes import router as rules_router
from inbox_triage.api.triage_routes import router as triage_router
from inbox_triage.config import MAILBOX_PATH
from inbox_triage.mailbox import JsonMailboxStore, MailboxStore
from inbox_triage.utils.logger import get_logger

logger = get_logger("inbox_triage.api.server")


def create_app(store: Optional[MailboxStore] = None) -> FastAPI:
    """Create the app. Without a store, the JSON mailbox at MAILBOX_PATH is used."""
    app = FastAPI(title="Inbox Triage", version=__version__)
    app.state.store = store if store is not None else JsonMailboxStore(MAILBOX_PATH)
    app.include_router(rules_router)
    app.include_router(triage_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("api.app_created", store=type(app.state.store).__name__)
    return app
