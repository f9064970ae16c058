"""Triage models: threads, their classification, and the assembled worklist."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from inbox_triage.models.crm import Contact, Task
from inbox_triage.models.email import Message
from inbox_triage.models.signals import LeadSignals

Queue = Literal["now", "waiting", "fyi"]
QUEUES: tuple[str, ...] = ("now", "waiting", "fyi")
PriorityLabel = Literal["high", "medium", "low"]


class MailboxSnapshot(BaseModel):
    """Consistent in-memory copy of the store for one triage pass."""

    messages: list[Message] = []
    contacts: list[Contact] = []
    tasks: list[Task] = []


class Thread(BaseModel):
    """Conversation rebuilt from messages sharing counterpart + normalized subject.

    Messages are ordered newest first.
    """

    key: str
    subject: str
    normalized_subject: str
    counterpart_name: str
    counterpart_email: str
    messages: list[Message]
    latest: Message
    latest_inbound: Message
    unread_count: int = 0
    contact: Optional[Contact] = None
    open_tasks: list[Task] = []

    @property
    def open_tasks_count(self) -> int:
        return len(self.open_tasks)


class TaskUrgency(BaseModel):
    """Due-date state of a thread's open tasks at a given instant."""

    overdue: bool = False
    due_soon: bool = False

    @property
    def any(self) -> bool:
        return self.overdue or self.due_soon


class TriagedThread(BaseModel):
    """Thread plus everything one triage pass computed for it."""

    thread: Thread
    signals: LeadSignals
    queue: Queue
    priority_score: int = Field(ge=0)
    priority: PriorityLabel
    sla_label: str
    summary: str
    is_portal: bool = False
    task_urgency: TaskUrgency = TaskUrgency()

    @property
    def key(self) -> str:
        return self.thread.key

    def as_row(self) -> dict[str, Any]:
        """Flat, JSON-serializable view for the CLI and HTTP layers."""
        t = self.thread
        return {
            "key": t.key,
            "subject": t.subject,
            "counterpart_name": t.counterpart_name,
            "counterpart_email": t.counterpart_email,
            "queue": self.queue,
            "priority": self.priority,
            "priority_score": self.priority_score,
            "sla": self.sla_label,
            "summary": self.summary,
            "unread_count": t.unread_count,
            "message_count": len(t.messages),
            "is_portal": self.is_portal,
            "latest_inbound_id": t.latest_inbound.id,
            "received_at": t.latest_inbound.received_at.isoformat() if t.latest_inbound.received_at else None,
            "contact_id": t.contact.id if t.contact else None,
            "open_tasks_count": t.open_tasks_count,
        }


class QueueCounts(BaseModel):
    """Badge counters; tallied over the full classified set."""

    now: int = 0
    waiting: int = 0
    fyi: int = 0

    def get(self, queue: str) -> int:
        return getattr(self, queue)

    @property
    def total(self) -> int:
        return self.now + self.waiting + self.fyi


class Worklist(BaseModel):
    """Ordered triage result for one pass."""

    threads: list[TriagedThread] = []
    counts: QueueCounts = QueueCounts()
    generated_at: datetime
