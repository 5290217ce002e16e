"""Tests for storing notifications and the recipient inbox operations."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from taskboard.application.use_cases.notifications import (
    count_unseen,
    create_notification,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_all_seen,
    set_read,
)
from taskboard.domain.entities import Notification, Task
from taskboard.domain.errors import NotFoundError, TransactionError, ValidationError
from taskboard.infrastructure.repositories import NotificationRepository, TaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import PageRequest, now_in_app_timezone


def _store(session, *, originator_id, recipient_id, task_id=1, subtask_id=None, message="hi"):
    with UnitOfWork(session) as uow:
        saved = create_notification(
            uow,
            originator_id=originator_id,
            recipient_id=recipient_id,
            message=message,
            task_id=task_id,
            subtask_id=subtask_id,
        )
        uow.commit()
    return saved


@pytest.fixture()
def alice(make_user):
    return make_user("alice")


@pytest.fixture()
def bob(make_user):
    return make_user("bob")


def test_unlinked_notification_is_rejected(session, alice, bob):
    with pytest.raises(ValidationError):
        _store(session, originator_id=alice.id, recipient_id=bob.id, task_id=None)

    page = list_notifications(session, recipient_id=bob.id, page=PageRequest())
    assert page.total_count == 0


def test_notification_linked_to_subtask_only_is_stored(session, alice, bob):
    saved = _store(session, originator_id=alice.id, recipient_id=bob.id, task_id=None, subtask_id=7)

    assert saved.id is not None
    assert saved.task_id is None
    assert saved.subtask_id == 7


def test_listing_returns_all_notifications_newest_first(session, alice, bob):
    created = [
        _store(session, originator_id=alice.id, recipient_id=bob.id, message=f"n{i}")
        for i in range(5)
    ]

    page = list_notifications(session, recipient_id=bob.id, page=PageRequest(page=1, limit=5))

    assert [n.id for n in page.items] == [n.id for n in reversed(created)]
    assert page.total_count == 5
    assert page.total_pages == 1


def test_listing_paginates_and_filters_by_read_state(session, alice, bob):
    first = _store(session, originator_id=alice.id, recipient_id=bob.id)
    for _ in range(2):
        _store(session, originator_id=alice.id, recipient_id=bob.id)
    set_read(session, notification_id=first.id, recipient_id=bob.id, value=True)

    unread = list_notifications(
        session, recipient_id=bob.id, page=PageRequest(page=1, limit=1), is_read=False
    )
    read = list_notifications(session, recipient_id=bob.id, page=PageRequest(), is_read=True)

    assert unread.total_count == 2
    assert unread.total_pages == 2
    assert len(unread.items) == 1
    assert [n.id for n in read.items] == [first.id]


def test_mark_all_read_is_idempotent(session, alice, bob):
    for _ in range(3):
        _store(session, originator_id=alice.id, recipient_id=bob.id)

    first = mark_all_read(session, recipient_id=bob.id, page=PageRequest())
    second = mark_all_read(session, recipient_id=bob.id, page=PageRequest())

    assert all(n.is_read and n.is_seen for n in first.items)
    assert [(n.id, n.is_read) for n in first.items] == [(n.id, n.is_read) for n in second.items]


def test_mark_all_read_leaves_other_recipients_untouched(session, alice, bob):
    _store(session, originator_id=bob.id, recipient_id=alice.id)
    _store(session, originator_id=alice.id, recipient_id=bob.id)

    mark_all_read(session, recipient_id=bob.id, page=PageRequest())

    others = list_notifications(session, recipient_id=alice.id, page=PageRequest())
    assert [n.is_read for n in others.items] == [False]


def test_count_unseen_and_mark_all_seen(session, alice, bob):
    for _ in range(2):
        _store(session, originator_id=alice.id, recipient_id=bob.id)

    now = now_in_app_timezone()
    assert count_unseen(session, recipient_id=bob.id) == 2
    assert count_unseen(session, recipient_id=bob.id, since=now - timedelta(hours=1)) == 2
    assert count_unseen(session, recipient_id=bob.id, since=now + timedelta(hours=1)) == 0

    page = mark_all_seen(session, recipient_id=bob.id, page=PageRequest())

    assert count_unseen(session, recipient_id=bob.id) == 0
    assert all(n.is_seen and not n.is_read for n in page.items)


def test_set_read_marks_seen_and_unread_keeps_it(session, alice, bob):
    saved = _store(session, originator_id=alice.id, recipient_id=bob.id)

    read = set_read(session, notification_id=saved.id, recipient_id=bob.id, value=True)
    unread = set_read(session, notification_id=saved.id, recipient_id=bob.id, value=False)

    assert read.is_read and read.is_seen
    assert not unread.is_read and unread.is_seen


def test_notifications_of_other_users_are_not_found(session, alice, bob):
    saved = _store(session, originator_id=alice.id, recipient_id=bob.id)

    with pytest.raises(NotFoundError):
        set_read(session, notification_id=saved.id, recipient_id=alice.id, value=True)
    with pytest.raises(NotFoundError):
        delete_notification(session, notification_id=saved.id, recipient_id=alice.id)


def test_delete_returns_id_and_then_reports_not_found(session, alice, bob):
    saved = _store(session, originator_id=alice.id, recipient_id=bob.id)

    assert delete_notification(session, notification_id=saved.id, recipient_id=bob.id) == saved.id
    with pytest.raises(NotFoundError):
        delete_notification(session, notification_id=saved.id, recipient_id=bob.id)


def test_expand_resolves_originator_and_task(session, alice, bob):
    task = TaskRepository(session).create(
        Task(id=None, title="Launch", description="Ship it", creator_id=alice.id)
    )
    session.commit()
    saved = _store(session, originator_id=alice.id, recipient_id=bob.id, task_id=task.id)

    detail = NotificationRepository(session).expand(saved)

    assert detail.originator.username == "alice"
    assert detail.task.title == "Launch"
    assert detail.subtask is None
    assert detail.recipient_id == bob.id


def test_expand_of_deleted_task_is_none(session, alice, bob):
    saved = _store(session, originator_id=alice.id, recipient_id=bob.id, task_id=404)

    detail = NotificationRepository(session).expand(saved)

    assert detail.task is None


def test_expand_requires_an_existing_originator(session, bob):
    orphan = Notification(id=1, originator_id=999, recipient_id=bob.id, message="x", task_id=1)

    with pytest.raises(NotFoundError):
        NotificationRepository(session).expand(orphan)


def test_expand_failure_is_reported_as_transaction_error(session, alice, bob, monkeypatch):
    class Publisher:
        def __init__(self):
            self.delivered = []

        def deliver(self, detail):
            self.delivered.append(detail)

    def broken_expand(self, notification):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(NotificationRepository, "expand", broken_expand)
    publisher = Publisher()

    with pytest.raises(TransactionError):
        with UnitOfWork(session) as uow:
            create_notification(
                uow,
                originator_id=alice.id,
                recipient_id=bob.id,
                message="hi",
                task_id=1,
                publisher=publisher,
            )
            uow.commit()

    assert publisher.delivered == []
    assert list_notifications(session, recipient_id=bob.id, page=PageRequest()).total_count == 0
