"""Tests for acceptance notifications."""

from __future__ import annotations

from conftest import female_fields, male_fields
from offerboard.models import Notification
from offerboard.services.notification_service import notifications_key


def _setup(marketplace):
    marketplace.accounts.create(female_fields("alice", password="pw1"))
    marketplace.accounts.create(male_fields("bob", password="pw2"))
    marketplace.accounts.create(male_fields("carl", password="pw3"))
    alice = marketplace.sessions.login("alice", "pw1")
    return marketplace.jobs.create(
        alice, title="T", description="D", job_type="x", estimated_value=10, recipients=["bob", "carl"],
    )


def test_accepting_notifies_creator_once(marketplace):
    job = _setup(marketplace)

    marketplace.jobs.set_status(job.id, "bob", "accepted")

    events = marketplace.notifications.list("alice")
    assert len(events) == 1
    assert events[0].type == "job_accepted"
    assert events[0].job_title == "T"
    assert events[0].recipient == "bob"
    assert events[0].time
    assert marketplace.notifications.list("bob") == []


def test_rejecting_notifies_nobody(marketplace):
    job = _setup(marketplace)

    marketplace.jobs.set_status(job.id, "bob", "rejected")

    assert marketplace.notifications.list("alice") == []


def test_notifications_keep_insertion_order(marketplace):
    job = _setup(marketplace)

    marketplace.jobs.set_status(job.id, "carl", "accepted")
    marketplace.jobs.set_status(job.id, "bob", "accepted")

    assert [e.recipient for e in marketplace.notifications.list("alice")] == ["carl", "bob"]


def test_clear_only_touches_owner(marketplace, kv):
    marketplace.notifications.append("alice", Notification(job_title="A", recipient="bob", time="t1"))
    marketplace.notifications.append("carl", Notification(job_title="B", recipient="bob", time="t2"))

    marketplace.notifications.clear("alice")

    assert marketplace.notifications.list("alice") == []
    assert len(marketplace.notifications.list("carl")) == 1
    assert kv.get(notifications_key("alice")) == "[]"


def test_list_for_unknown_owner_is_empty(marketplace):
    assert marketplace.notifications.list("ghost") == []
