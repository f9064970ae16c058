"""CRM records the triage engine reads: contacts and their tasks."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from inbox_triage.utils.timeparse import parse_timestamp

TaskStatus = Literal["todo", "in_progress", "completed", "cancelled"]
OPEN_TASK_STATUSES: frozenset[str] = frozenset({"todo", "in_progress"})


class Contact(BaseModel):
    """Agency contact (lead, buyer, seller, investor)."""

    id: str
    type: Literal["lead", "buyer", "seller", "investor"] = "lead"
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    status: str = "new"
    tags: list[str] = []

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or (self.email or self.id)


class TaskLink(BaseModel):
    """Entity a task is attached to."""

    type: Literal["contact", "property", "deal", "visit", "contract"]
    id: str


class Task(BaseModel):
    """Agent task; only open tasks linked to a contact influence triage."""

    id: str
    title: str = ""
    status: TaskStatus = "todo"
    priority: Literal["low", "medium", "high", "urgent"] = "medium"
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    related_to: Optional[TaskLink] = Field(None, alias="relatedTo")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("due_date", mode="before")
    @classmethod
    def _lenient_due_date(cls, value):
        # Unparsable due dates become None so they never count as overdue
        return parse_timestamp(value)

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_TASK_STATUSES

    def is_linked_to_contact(self, contact_id: str) -> bool:
        return (
            self.related_to is not None
            and self.related_to.type == "contact"
            and self.related_to.id == contact_id
        )
