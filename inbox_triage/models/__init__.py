"""Pydantic models for inbox triage."""

from inbox_triage.models.crm import OPEN_TASK_STATUSES, Contact, Task, TaskLink
from inbox_triage.models.email import (
    ContactLink,
    DealLink,
    Mailbox,
    Message,
    MessageLink,
    PropertyLink,
)
from inbox_triage.models.signals import NO_SIGNALS, LeadInsights, LeadSignals
from inbox_triage.models.triage import (
    QUEUES,
    MailboxSnapshot,
    PriorityLabel,
    Queue,
    QueueCounts,
    TaskUrgency,
    Thread,
    TriagedThread,
    Worklist,
)

__all__ = [
    "Mailbox",
    "Message",
    "MessageLink",
    "ContactLink",
    "PropertyLink",
    "DealLink",
    "Contact",
    "Task",
    "TaskLink",
    "OPEN_TASK_STATUSES",
    "LeadSignals",
    "LeadInsights",
    "NO_SIGNALS",
    "Queue",
    "QUEUES",
    "PriorityLabel",
    "MailboxSnapshot",
    "Thread",
    "TaskUrgency",
    "TriagedThread",
    "QueueCounts",
    "Worklist",
]
