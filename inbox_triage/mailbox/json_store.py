"""JSON-file mailbox store: messages, contacts and tasks in one document.

Reads ``{"messages": [...], "contacts": [...], "tasks": [...]}`` and writes
every mutation back to disk so the next triage pass sees it.
"""

import json
import threading
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from inbox_triage.engine.threads import find_contact, open_tasks_for_contact
from inbox_triage.models.crm import Contact, Task
from inbox_triage.models.email import ContactLink, Message
from inbox_triage.models.triage import MailboxSnapshot, Thread
from inbox_triage.utils.logger import get_logger
from inbox_triage.utils.timeparse import utc_now

logger = get_logger("inbox_triage.mailbox")


def _validate_items(model: type[BaseModel], items: Any, kind: str) -> list:
    if not isinstance(items, list):
        return []
    valid = []
    for item in items:
        try:
            valid.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning("mailbox.invalid_item_skipped", kind=kind, error=str(e))
    return valid


class JsonMailboxStore:
    """Mailbox backed by a single JSON file."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.Lock()
        self._messages: list[Message] = []
        self._contacts: list[Contact] = []
        self._tasks: list[Task] = []
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            logger.warning("mailbox.file_missing", path=str(self._path))
            return
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, list):
            data = {"messages": data}
        self._messages = _validate_items(Message, data.get("messages", []), "message")
        self._contacts = _validate_items(Contact, data.get("contacts", []), "contact")
        self._tasks = _validate_items(Task, data.get("tasks", []), "task")
        logger.info(
            "mailbox.loaded",
            path=str(self._path),
            messages=len(self._messages),
            contacts=len(self._contacts),
            tasks=len(self._tasks),
        )

    def _save(self) -> None:
        """Write state to disk. Caller should hold _lock."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "messages": [m.model_dump(mode="json", by_alias=True) for m in self._messages],
            "contacts": [c.model_dump(mode="json", by_alias=True) for c in self._contacts],
            "tasks": [t.model_dump(mode="json", by_alias=True) for t in self._tasks],
        }
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.debug("mailbox.saved", path=str(self._path), messages=len(self._messages))

    def _update_messages(self, message_ids: Iterable[str], **changes: Any) -> int:
        """Apply field changes to matching messages; return how many actually changed."""
        wanted = set(message_ids)
        changed = 0
        with self._lock:
            for i, message in enumerate(self._messages):
                if message.id not in wanted:
                    continue
                updated = message.model_copy(update=changes)
                if updated != message:
                    self._messages[i] = updated
                    changed += 1
            if changed:
                self._save()
        return changed

    # --- reads ---

    def snapshot(self) -> MailboxSnapshot:
        with self._lock:
            return MailboxSnapshot(
                messages=[m.model_copy(deep=True) for m in self._messages],
                contacts=[c.model_copy(deep=True) for c in self._contacts],
                tasks=[t.model_copy(deep=True) for t in self._tasks],
            )

    def get_message(self, message_id: str) -> Optional[Message]:
        for m in self._messages:
            if m.id == message_id:
                return m
        return None

    def find_contact_by_email(self, address: str) -> Optional[Contact]:
        return find_contact(self._contacts, address)

    def open_tasks_for_contact(self, contact_id: str) -> list[Task]:
        return open_tasks_for_contact(self._tasks, contact_id)

    # --- writes ---

    def mark_read(self, message_ids: Iterable[str], now: Optional[datetime] = None) -> int:
        ids = list(message_ids)
        unread = {m.id for m in self._messages if m.id in ids and m.status == "unread"}
        count = self._update_messages(unread, status="read", read_at=now or utc_now())
        logger.info("mailbox.mark_read", requested=len(ids), changed=count)
        return count

    def mark_unread(self, message_ids: Iterable[str]) -> int:
        ids = list(message_ids)
        read = {m.id for m in self._messages if m.id in ids and m.status == "read"}
        count = self._update_messages(read, status="unread", read_at=None)
        logger.info("mailbox.mark_unread", requested=len(ids), changed=count)
        return count

    def set_starred(self, message_id: str, starred: bool) -> bool:
        if self.get_message(message_id) is None:
            return False
        self._update_messages([message_id], starred=starred)
        logger.info("mailbox.set_starred", message_id=message_id, starred=starred)
        return True

    def archive(self, message_ids: Iterable[str]) -> int:
        ids = list(message_ids)
        count = self._update_messages(ids, folder="archived")
        logger.info("mailbox.archive", requested=len(ids), changed=count)
        return count

    def open_thread(self, thread: Thread, now: Optional[datetime] = None) -> int:
        """Mark the thread's unread inbound mail read and link it to the thread's contact.

        Returns the number of messages marked read.
        """
        unread_ids = [m.id for m in thread.messages if m.is_unread_inbound]
        count = self.mark_read(unread_ids, now=now) if unread_ids else 0
        inbound = self.get_message(thread.latest_inbound.id)
        if thread.contact is not None and inbound is not None and inbound.related_to is None:
            self._update_messages([inbound.id], related_to=ContactLink(id=thread.contact.id))
            logger.info("mailbox.linked_contact", message_id=inbound.id, contact_id=thread.contact.id)
        return count
