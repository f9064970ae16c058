"""Tests for the thread builder: subject normalization, counterparts, grouping."""

import unittest

from inbox_triage.engine.threads import (
    PLACEHOLDER_COUNTERPART,
    build_threads,
    find_contact,
    normalize_subject,
    resolve_counterpart,
)
from inbox_triage.models import Mailbox, Message
from tests.helpers import make_contact, make_message, make_task


class TestNormalizeSubject(unittest.TestCase):
    """Reply/forward prefix stripping."""

    def test_repeated_prefixes(self):
        self.assertEqual(normalize_subject("Re: Re: Visite"), "Visite")
        self.assertEqual(normalize_subject("Visite"), "Visite")

    def test_mixed_prefixes_case_insensitive(self):
        self.assertEqual(normalize_subject("FWD: re: AW: Tr: Devis"), "Devis")
        self.assertEqual(normalize_subject("fw:Devis"), "Devis")

    def test_whitespace_around_colon(self):
        self.assertEqual(normalize_subject("  Re : Visite  "), "Visite")

    def test_words_starting_like_prefixes_are_kept(self):
        self.assertEqual(normalize_subject("Reply needed"), "Reply needed")
        self.assertEqual(normalize_subject("Travaux: devis"), "Travaux: devis")

    def test_empty_result_falls_back_to_original(self):
        self.assertEqual(normalize_subject("Re:"), "Re:")
        self.assertEqual(normalize_subject("Re: "), "Re:")
        self.assertEqual(normalize_subject(""), "")

    def test_idempotent(self):
        for subject in ["Re: Re: Visite", "Re:", "  Fwd: Offre  ", "Offre"]:
            once = normalize_subject(subject)
            self.assertEqual(normalize_subject(once), once)


class TestCounterpart(unittest.TestCase):
    """Counterpart resolution per folder."""

    def test_inbound_uses_sender(self):
        msg = make_message("m1", sender=("Anna", "anna@example.com"))
        self.assertEqual(resolve_counterpart(msg).email, "anna@example.com")

    def test_sent_uses_first_recipient(self):
        msg = make_message("m1", folder="sent", to=[("Anna", "anna@example.com"), ("Bob", "bob@example.com")])
        self.assertEqual(resolve_counterpart(msg), Mailbox(name="Anna", email="anna@example.com"))

    def test_sent_recipient_without_name_uses_address(self):
        msg = make_message("m1", folder="sent", to=[("", "anna@example.com")])
        self.assertEqual(resolve_counterpart(msg).name, "anna@example.com")

    def test_sent_without_recipients_uses_placeholder(self):
        msg = make_message("m1", folder="sent", to=[])
        self.assertEqual(resolve_counterpart(msg), PLACEHOLDER_COUNTERPART)
        threads = build_threads([msg])
        self.assertEqual(threads[0].counterpart_email, "unknown@email")
        self.assertEqual(threads[0].counterpart_name, "Client")


class TestBuildThreads(unittest.TestCase):
    """Grouping, ordering and aggregates."""

    def test_reply_collapses_into_one_thread(self):
        messages = [
            make_message("m1", subject="Re: Devis", minutes_ago=5),
            make_message("m2", subject="Devis", minutes_ago=60),
        ]
        threads = build_threads(messages)
        self.assertEqual(len(threads), 1)
        self.assertEqual([m.id for m in threads[0].messages], ["m1", "m2"])
        self.assertEqual(threads[0].subject, "Devis")

    def test_counterpart_address_is_case_insensitive(self):
        messages = [
            make_message("m1", sender=("Anna", "Anna@Example.com"), subject="Offre"),
            make_message("m2", sender=("Anna", "anna@example.com"), subject="offre"),
        ]
        self.assertEqual(len(build_threads(messages)), 1)

    def test_different_counterparts_split(self):
        messages = [
            make_message("m1", sender=("Anna", "anna@example.com"), subject="Offre"),
            make_message("m2", sender=("Bob", "bob@example.com"), subject="Offre"),
        ]
        self.assertEqual(len(build_threads(messages)), 2)

    def test_sent_reply_joins_inbound_thread(self):
        messages = [
            make_message("in", sender=("Anna", "anna@example.com"), subject="Visite", minutes_ago=30),
            make_message("out", folder="sent", to=[("Anna", "anna@example.com")], subject="RE: Visite", minutes_ago=10),
        ]
        threads = build_threads(messages)
        self.assertEqual(len(threads), 1)
        self.assertEqual(threads[0].latest.id, "out")
        self.assertEqual(threads[0].latest_inbound.id, "in")

    def test_drafts_and_archived_are_excluded(self):
        messages = [
            make_message("d", folder="drafts", subject="Offre"),
            make_message("a", folder="archived", subject="Offre"),
            make_message("i", subject="Offre"),
        ]
        threads = build_threads(messages)
        self.assertEqual(len(threads), 1)
        self.assertEqual([m.id for m in threads[0].messages], ["i"])

    def test_latest_inbound_falls_back_to_latest(self):
        messages = [make_message("out", folder="sent", subject="Offre")]
        thread = build_threads(messages)[0]
        self.assertEqual(thread.latest_inbound.id, "out")

    def test_equal_timestamps_keep_collection_order(self):
        messages = [
            make_message("first", subject="Offre", minutes_ago=10),
            make_message("second", subject="Offre", minutes_ago=10),
        ]
        thread = build_threads(messages)[0]
        self.assertEqual(thread.latest.id, "first")
        self.assertEqual([m.id for m in thread.messages], ["first", "second"])

    def test_missing_timestamp_sorts_oldest(self):
        messages = [
            make_message("undated", subject="Offre", minutes_ago=None),
            make_message("dated", subject="Offre", minutes_ago=600),
        ]
        thread = build_threads(messages)[0]
        self.assertEqual(thread.latest.id, "dated")

    def test_unread_count_only_counts_inbound_unread(self):
        messages = [
            make_message("u1", subject="Offre", status="unread"),
            make_message("u2", subject="Re: Offre", status="unread"),
            make_message("r", subject="Offre", status="read"),
            make_message("s", folder="sent", subject="Re: Offre", status="unread"),
        ]
        self.assertEqual(build_threads(messages)[0].unread_count, 2)

    def test_threads_keep_first_appearance_order(self):
        messages = [
            make_message("b", sender=("B", "b@example.com"), minutes_ago=100),
            make_message("a", sender=("A", "a@example.com"), minutes_ago=1),
        ]
        self.assertEqual([t.counterpart_email for t in build_threads(messages)], ["b@example.com", "a@example.com"])

    def test_contact_and_open_tasks_are_linked(self):
        messages = [make_message("m1", sender=("Anna", "anna@example.com"))]
        contacts = [make_contact("c1", "ANNA@example.com"), make_contact("c2", "other@example.com")]
        tasks = [
            make_task("t1", "c1"),
            make_task("t2", "c1", status="in_progress"),
            make_task("t3", "c1", status="completed"),
            make_task("t4", "c2"),
            make_task("t5", None),
        ]
        thread = build_threads(messages, contacts, tasks)[0]
        self.assertEqual(thread.contact.id, "c1")
        self.assertEqual(sorted(t.id for t in thread.open_tasks), ["t1", "t2"])
        self.assertEqual(thread.open_tasks_count, 2)

    def test_no_contact_means_no_tasks(self):
        thread = build_threads([make_message("m1")], [], [make_task("t1", "c1")])[0]
        self.assertIsNone(thread.contact)
        self.assertEqual(thread.open_tasks, [])

    def test_empty_input(self):
        self.assertEqual(build_threads([]), [])

    def test_find_contact_ignores_blank_address(self):
        self.assertIsNone(find_contact([make_contact("c1", None)], ""))

    def test_message_accepts_store_aliases(self):
        msg = Message.model_validate(
            {
                "id": "x",
                "folder": "inbox",
                "from": {"name": "Anna", "email": "anna@example.com"},
                "to": [],
                "subject": "Re: Offre",
                "receivedAt": "2026-10-16T08:00:00Z",
                "relatedTo": {"type": "deal", "id": "d1"},
            }
        )
        self.assertEqual(msg.related_to.type, "deal")
        self.assertEqual(build_threads([msg])[0].key, "anna@example.com|offre")


if __name__ == "__main__":
    unittest.main()
