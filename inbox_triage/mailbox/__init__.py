"""Mailbox store: protocols and the JSON-file implementation."""

from inbox_triage.mailbox.json_store import JsonMailboxStore
from inbox_triage.mailbox.protocol import ContactStore, MailboxStore, TaskStore

__all__ = [
    "ContactStore",
    "TaskStore",
    "MailboxStore",
    "JsonMailboxStore",
]
