"""Factories for messages, contacts and tasks at a fixed evaluation time."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from inbox_triage.models import Contact, Mailbox, Message, Task, TaskLink

NOW = datetime(2026, 10, 16, 9, 0, tzinfo=timezone.utc)
AGENCY = Mailbox(name="Agence", email="contact@agence.lu")


def ago(minutes: float) -> datetime:
    return NOW - timedelta(minutes=minutes)


def make_message(
    message_id: str,
    *,
    folder: str = "inbox",
    sender: tuple[str, str] = ("Jean Dupont", "jean.dupont@example.com"),
    to: Optional[list[tuple[str, str]]] = None,
    subject: str = "Documents",
    body: str = "",
    preview: str = "",
    status: str = "read",
    minutes_ago: Optional[float] = 10,
) -> Message:
    """Inbound by default; for ``folder="sent"`` the sender becomes the agency."""
    if folder == "sent":
        from_box = AGENCY
        recipients = [Mailbox(name=n, email=e) for n, e in (to if to is not None else [sender])]
    else:
        from_box = Mailbox(name=sender[0], email=sender[1])
        recipients = [Mailbox(name=n, email=e) for n, e in to] if to is not None else [AGENCY]
    return Message(
        id=message_id,
        folder=folder,
        sender=from_box,
        recipients=recipients,
        subject=subject,
        body=body,
        preview=preview,
        status=status,
        received_at=ago(minutes_ago) if minutes_ago is not None else None,
    )


def make_contact(contact_id: str, email: Optional[str], first_name: str = "Jean", last_name: str = "Dupont") -> Contact:
    return Contact(id=contact_id, first_name=first_name, last_name=last_name, email=email)


def make_task(
    task_id: str,
    contact_id: Optional[str],
    *,
    due_in_hours: Optional[float] = 48,
    status: str = "todo",
) -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        status=status,
        due_date=NOW + timedelta(hours=due_in_hours) if due_in_hours is not None else None,
        related_to=TaskLink(type="contact", id=contact_id) if contact_id else None,
    )
