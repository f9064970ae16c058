"""Mailbox message models."""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from inbox_triage.utils.timeparse import parse_timestamp

Folder = Literal["inbox", "sent", "drafts", "archived"]
MessageStatus = Literal["unread", "read", "archived", "sent", "draft"]


class Mailbox(BaseModel):
    """Display name + address (sender or one recipient)."""

    name: str = ""
    email: str = ""


class ContactLink(BaseModel):
    type: Literal["contact"] = "contact"
    id: str


class PropertyLink(BaseModel):
    type: Literal["property"] = "property"
    id: str


class DealLink(BaseModel):
    type: Literal["deal"] = "deal"
    id: str


MessageLink = Annotated[Union[ContactLink, PropertyLink, DealLink], Field(discriminator="type")]


class Message(BaseModel):
    """Single email as stored in the mailbox (camelCase keys on disk)."""

    id: str
    folder: Folder
    sender: Mailbox = Field(default_factory=Mailbox, alias="from")
    recipients: list[Mailbox] = Field(default_factory=list, alias="to")
    subject: str = ""
    body: str = ""
    preview: str = ""
    status: MessageStatus = "unread"
    starred: bool = False
    received_at: Optional[datetime] = Field(None, alias="receivedAt")
    read_at: Optional[datetime] = Field(None, alias="readAt")
    related_to: Optional[MessageLink] = Field(None, alias="relatedTo")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("received_at", "read_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value):
        return parse_timestamp(value)

    @property
    def is_inbound(self) -> bool:
        return self.folder == "inbox"

    @property
    def is_unread_inbound(self) -> bool:
        return self.folder == "inbox" and self.status == "unread"
