"""Store protocols the triage surfaces depend on."""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional, Protocol

from inbox_triage.models.crm import Contact, Task
from inbox_triage.models.triage import MailboxSnapshot, Thread


class ContactStore(Protocol):
    def find_contact_by_email(self, address: str) -> Optional[Contact]:
        """Contact whose email equals address, case-insensitive."""
        ...


class TaskStore(Protocol):
    def open_tasks_for_contact(self, contact_id: str) -> list[Task]:
        """Tasks in todo / in_progress linked to the contact."""
        ...


class MailboxStore(ContactStore, TaskStore, Protocol):
    """Messages plus the CRUD the inbox UI performs between triage passes."""

    def snapshot(self) -> MailboxSnapshot:
        """Consistent copy of messages, contacts and tasks for one pass."""
        ...

    def mark_read(self, message_ids: Iterable[str], now: Optional[datetime] = None) -> int:
        ...

    def mark_unread(self, message_ids: Iterable[str]) -> int:
        ...

    def set_starred(self, message_id: str, starred: bool) -> bool:
        ...

    def archive(self, message_ids: Iterable[str]) -> int:
        ...

    def open_thread(self, thread: Thread, now: Optional[datetime] = None) -> int:
        ...
