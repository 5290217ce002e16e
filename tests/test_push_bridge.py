"""Tests for the session registry and the realtime notification publisher."""

import asyncio
import logging
from datetime import datetime, timezone

from taskboard.application.use_cases.notifications import create_notification, list_notifications
from taskboard.domain.entities import (
    Notification,
    NotificationDetail,
    SubtaskSummary,
    TaskSummary,
    UserSummary,
)
from taskboard.infrastructure.notifications import (
    NEW_NOTIFICATION_EVENT,
    NotificationPublisher,
    SessionRegistry,
    serialize_notification,
)
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import PageRequest


class FakeConnection:
    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_json(self, message):
        if self.fail:
            raise ConnectionResetError("socket closed")
        self.sent.append(message)


def _detail(recipient_id: int = 2) -> NotificationDetail:
    return NotificationDetail(
        notification=Notification(
            id=10,
            originator_id=1,
            recipient_id=recipient_id,
            message="alice assigned you to the subtask 'Draft'.",
            task_id=3,
            subtask_id=4,
            created_at=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
        ),
        originator=UserSummary(id=1, username="alice", email="alice@example.com"),
        task=TaskSummary(id=3, title="Launch", status="to do", priority="low"),
        subtask=SubtaskSummary(id=4, task_id=3, title="Draft", status="pending", priority="high"),
    )


def test_registry_last_bind_wins_and_stale_unbind_is_ignored():
    registry = SessionRegistry()
    old, new = FakeConnection(), FakeConnection()

    registry.bind(1, old)
    registry.bind(1, new)
    registry.unbind(1, old)

    assert registry.lookup(1) is new
    registry.unbind(1, new)
    assert 1 not in registry
    assert len(registry) == 0


def test_registry_unbind_without_connection_and_unknown_user():
    registry = SessionRegistry()
    registry.bind(1, FakeConnection())

    registry.unbind(2)
    registry.unbind(1)

    assert registry.lookup(1) is None


def test_serialize_notification_expands_links():
    payload = serialize_notification(_detail())

    assert payload["created_at"] == "2024-05-01T12:30:00+00:00"
    assert payload["originator"] == {"id": 1, "username": "alice", "email": "alice@example.com"}
    assert payload["task"] == {"id": 3, "title": "Launch", "status": "to do", "priority": "low"}
    assert payload["subtask"]["task_id"] == 3
    assert payload["is_read"] is False


def test_deliver_pushes_to_bound_connection():
    registry = SessionRegistry()
    connection = FakeConnection()
    registry.bind(2, connection)
    publisher = NotificationPublisher(registry)

    async def scenario():
        publisher.deliver(_detail(recipient_id=2))
        await publisher.drain()

    asyncio.run(scenario())

    (message,) = connection.sent
    assert message["type"] == NEW_NOTIFICATION_EVENT
    assert message["data"]["id"] == 10


def test_deliver_without_session_is_silent():
    registry = SessionRegistry()
    bystander = FakeConnection()
    registry.bind(5, bystander)
    publisher = NotificationPublisher(registry)

    async def scenario():
        publisher.deliver(_detail(recipient_id=2))
        await publisher.drain()

    asyncio.run(scenario())

    assert bystander.sent == []
    assert publisher._pending == set()


def test_offline_recipient_still_finds_the_stored_notification(session, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    publisher = NotificationPublisher(SessionRegistry())

    async def scenario():
        with UnitOfWork(session) as uow:
            create_notification(
                uow,
                originator_id=alice.id,
                recipient_id=bob.id,
                message="alice assigned you to the task 'Launch'.",
                task_id=1,
                publisher=publisher,
            )
            uow.commit()
        await publisher.drain()

    asyncio.run(scenario())

    page = list_notifications(session, recipient_id=bob.id, page=PageRequest())
    assert [n.message for n in page.items] == ["alice assigned you to the task 'Launch'."]


def test_deliver_outside_event_loop_does_not_raise(caplog):
    registry = SessionRegistry()
    registry.bind(2, FakeConnection())
    publisher = NotificationPublisher(registry)

    with caplog.at_level(logging.WARNING):
        publisher.deliver(_detail(recipient_id=2))

    assert "No event loop available" in caplog.text


def test_failed_send_is_logged_and_unbinds(caplog):
    registry = SessionRegistry()
    broken = FakeConnection(fail=True)
    registry.bind(2, broken)
    publisher = NotificationPublisher(registry)

    with caplog.at_level(logging.WARNING, logger="taskboard.infrastructure.notifications.publisher"):
        delivered = asyncio.run(publisher.push(2, {"type": NEW_NOTIFICATION_EVENT}))

    assert delivered is False
    assert registry.lookup(2) is None
    assert "socket closed" in caplog.text