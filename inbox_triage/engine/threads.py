"""Thread builder: group messages into conversations by counterpart + normalized subject."""

from collections.abc import Iterable, Sequence
from typing import Optional

from inbox_triage.engine.rules import DEFAULT_RULES, TriageRules
from inbox_triage.models.crm import Contact, Task
from inbox_triage.models.email import Mailbox, Message
from inbox_triage.models.triage import Thread
from inbox_triage.utils.timeparse import EPOCH_MIN

EXCLUDED_FOLDERS = frozenset({"drafts", "archived"})
PLACEHOLDER_COUNTERPART = Mailbox(name="Client", email="unknown@email")


def normalize_subject(subject: str, rules: TriageRules = DEFAULT_RULES) -> str:
    """Strip reply/forward prefixes (``Re:``, ``Fwd:``, ``AW:``...) repeatedly.

    Falls back to the trimmed original when nothing is left, so
    ``normalize_subject("Re:")`` stays ``"Re:"``.
    """
    pattern = rules.prefix_pattern()
    s = subject.strip()
    while True:
        stripped = pattern.sub("", s, count=1)
        if stripped == s:
            break
        s = stripped
    s = s.strip()
    return s or subject.strip()


def resolve_counterpart(message: Message) -> Mailbox:
    """The non-agency party: first recipient on sent mail, sender otherwise."""
    if message.folder != "sent":
        return message.sender
    if not message.recipients:
        return PLACEHOLDER_COUNTERPART
    first = message.recipients[0]
    return Mailbox(
        name=first.name or first.email or PLACEHOLDER_COUNTERPART.name,
        email=first.email or PLACEHOLDER_COUNTERPART.email,
    )


def thread_key(counterpart_email: str, normalized_subject: str) -> str:
    return f"{counterpart_email.lower()}|{normalized_subject.lower()}"


def received_sort_key(message: Message):
    return message.received_at or EPOCH_MIN


def find_contact(contacts: Iterable[Contact], address: str) -> Optional[Contact]:
    """Contact whose email equals ``address`` (case-insensitive)."""
    wanted = (address or "").strip().lower()
    if not wanted:
        return None
    for contact in contacts:
        if (contact.email or "").strip().lower() == wanted:
            return contact
    return None


def open_tasks_for_contact(tasks: Iterable[Task], contact_id: str) -> list[Task]:
    """Open (todo / in_progress) tasks attached to a contact."""
    return [t for t in tasks if t.is_open and t.is_linked_to_contact(contact_id)]


def build_threads(
    messages: Sequence[Message],
    contacts: Sequence[Contact] = (),
    tasks: Sequence[Task] = (),
    rules: TriageRules = DEFAULT_RULES,
) -> list[Thread]:
    """Group eligible messages into threads, in order of first appearance.

    Drafts and archived mail never join a thread.
    """
    groups: dict[str, dict] = {}
    for message in messages:
        if message.folder in EXCLUDED_FOLDERS:
            continue
        counterpart = resolve_counterpart(message)
        normalized = normalize_subject(message.subject, rules)
        key = thread_key(counterpart.email, normalized)
        group = groups.get(key)
        if group is None:
            groups[key] = {
                "subject": normalized,
                "counterpart": counterpart,
                "messages": [message],
            }
        else:
            group["messages"].append(message)

    threads = []
    for key, group in groups.items():
        # sorted() is stable, so equal timestamps keep collection order
        ordered = sorted(group["messages"], key=received_sort_key, reverse=True)
        latest = ordered[0]
        latest_inbound = next((m for m in ordered if m.is_inbound), latest)
        counterpart = group["counterpart"]
        contact = find_contact(contacts, counterpart.email)
        threads.append(
            Thread(
                key=key,
                subject=group["subject"],
                normalized_subject=group["subject"],
                counterpart_name=counterpart.name,
                counterpart_email=counterpart.email,
                messages=ordered,
                latest=latest,
                latest_inbound=latest_inbound,
                unread_count=sum(1 for m in ordered if m.is_unread_inbound),
                contact=contact,
                open_tasks=open_tasks_for_contact(tasks, contact.id) if contact else [],
            )
        )
    return threads
