"""Notifications produced by task and subtask mutations."""

import pytest
from sqlalchemy.exc import OperationalError

from taskboard.application.use_cases.notifications import FanoutEngine, list_notifications
from taskboard.application.use_cases.subtasks import (
    add_subtask_comment,
    create_subtask,
    delete_subtask,
    get_subtask,
    update_subtask,
    update_subtask_status,
)
from taskboard.application.use_cases.tasks import (
    add_task_comment,
    create_task,
    delete_task,
    get_task,
    update_task,
    update_task_status,
)
from taskboard.domain.errors import NotFoundError, TransactionError, ValidationError
from taskboard.infrastructure.repositories import NotificationRepository
from taskboard.utils import PageRequest


class RecordingPublisher:
    def __init__(self):
        self.delivered = []

    def deliver(self, detail):
        self.delivered.append(detail)


@pytest.fixture()
def engine():
    return FanoutEngine()


@pytest.fixture()
def users(make_user):
    return {name: make_user(name) for name in ("alice", "bob", "carol", "dave", "erin")}


def _inbox(session, user, *, subtask_id=None):
    page = list_notifications(session, recipient_id=user.id, page=PageRequest(limit=100))
    if subtask_id is None:
        return list(page.items)
    return [n for n in page.items if n.subtask_id == subtask_id]


def _task(session, engine, owner, assignees, title="Launch"):
    return create_task(
        session,
        engine,
        actor=owner,
        title=title,
        description="Ship the release",
        assigned_to=[user.id for user in assignees],
    )


def test_task_creation_notifies_assignees_only(session, engine, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]

    task = _task(session, engine, alice, [alice, bob, carol])

    assert _inbox(session, alice) == []
    for user in (bob, carol):
        (notification,) = _inbox(session, user)
        assert notification.message == "alice assigned you to the task 'Launch'."
        assert notification.task_id == task.id
        assert notification.originator_id == alice.id


def test_subtask_creation_scenario(session, engine, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    task = _task(session, engine, bob, [alice, carol])

    subtask = create_subtask(
        session,
        engine,
        actor=alice,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
        assigned_to=[carol.id],
    )

    assert _inbox(session, alice, subtask_id=subtask.id) == []
    (to_bob,) = _inbox(session, bob, subtask_id=subtask.id)
    (to_carol,) = _inbox(session, carol, subtask_id=subtask.id)
    assert to_bob.message == "alice created the subtask 'Draft notes' in your task 'Launch'."
    assert to_carol.message == "alice assigned you to the subtask 'Draft notes'."
    assert to_bob.task_id == task.id


def test_status_change_by_double_creator_notifies_each_assignee_once(session, engine, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    task = _task(session, engine, alice, [alice, bob, carol])
    subtask = create_subtask(
        session,
        engine,
        actor=alice,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
        assigned_to=[alice.id, bob.id, carol.id],
    )

    update_subtask_status(
        session, engine, actor=alice, task_id=task.id, subtask_id=subtask.id, status="pending"
    )

    def status_messages(user):
        return [
            n for n in _inbox(session, user, subtask_id=subtask.id)
            if "changed the status" in n.message
        ]

    assert status_messages(alice) == []
    assert len(status_messages(bob)) == 1
    assert len(status_messages(carol)) == 1


def test_subtask_edit_removes_and_adds_assignees(session, engine, users):
    alice, dave, erin = users["alice"], users["dave"], users["erin"]
    task = _task(session, engine, alice, [dave, erin])
    subtask = create_subtask(
        session,
        engine,
        actor=alice,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
        assigned_to=[dave.id],
    )

    updated = update_subtask(
        session, engine, actor=alice, task_id=task.id, subtask_id=subtask.id,
        assigned_to=[erin.id],
    )

    assert updated.assigned_to == [erin.id]
    dave_messages = [n.message for n in _inbox(session, dave, subtask_id=subtask.id)]
    erin_messages = [n.message for n in _inbox(session, erin, subtask_id=subtask.id)]
    assert dave_messages == [
        "alice removed you from the subtask 'Draft notes'.",
        "alice assigned you to the subtask 'Draft notes'.",
    ]
    assert erin_messages == ["alice assigned you to the subtask 'Draft notes'."]


def test_creator_assignee_gets_one_notification_per_comment(session, engine, users):
    alice, bob = users["alice"], users["bob"]
    task = _task(session, engine, alice, [bob])
    subtask = create_subtask(
        session,
        engine,
        actor=alice,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
        assigned_to=[alice.id, bob.id],
    )

    add_subtask_comment(
        session, engine, actor=bob, task_id=task.id, subtask_id=subtask.id, text="Done soon"
    )

    comments = [
        n.message for n in _inbox(session, alice, subtask_id=subtask.id) if "commented" in n.message
    ]
    assert comments == [
        "bob commented on the subtask 'Draft notes' in your task 'Launch': \"Done soon\""
    ]


def test_reassigning_the_same_members_is_not_a_change(session, engine, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    task = _task(session, engine, alice, [bob, carol])
    before = len(_inbox(session, bob))

    unchanged = update_task(
        session, engine, actor=alice, task_id=task.id, assigned_to=[carol.id, bob.id]
    )

    assert unchanged.assigned_to == task.assigned_to
    assert len(_inbox(session, bob)) == before


def test_content_update_notifies_assignees(session, engine, users):
    alice, bob = users["alice"], users["bob"]
    task = _task(session, engine, alice, [bob])

    update_task(session, engine, actor=alice, task_id=task.id, priority="high")

    assert _inbox(session, bob)[0].message == "alice updated the task 'Launch' assigned to you."


def test_same_status_is_a_no_op(session, engine, users):
    alice, bob = users["alice"], users["bob"]
    task = _task(session, engine, alice, [bob])
    before = len(_inbox(session, alice))

    update_task_status(session, engine, actor=bob, task_id=task.id, status="to do")

    assert len(_inbox(session, alice)) == before


def test_task_comment_reaches_admin(session, engine, users):
    alice, bob = users["alice"], users["bob"]
    task = _task(session, engine, alice, [bob])

    add_task_comment(session, engine, actor=bob, task_id=task.id, text="On it")

    (notification,) = _inbox(session, alice)
    assert notification.message == "bob commented on the task 'Launch' you created: \"On it\""


def test_fanout_failure_rolls_back_the_mutation(session, engine, users, monkeypatch):
    alice, bob, carol, dave, erin = (users[name] for name in ("alice", "bob", "carol", "dave", "erin"))
    task = _task(session, engine, alice, [bob, carol, dave, erin])
    subtask = create_subtask(
        session,
        engine,
        actor=alice,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
        assigned_to=[bob.id, carol.id],
    )
    stored_before = sum(len(_inbox(session, user)) for user in users.values())

    original_create = NotificationRepository.create
    calls = {"count": 0}

    def flaky_create(self, notification):
        calls["count"] += 1
        if calls["count"] == 2:
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        return original_create(self, notification)

    monkeypatch.setattr(NotificationRepository, "create", flaky_create)

    with pytest.raises(TransactionError):
        update_subtask(
            session, engine, actor=alice, task_id=task.id, subtask_id=subtask.id,
            assigned_to=[dave.id, erin.id],
        )

    monkeypatch.undo()
    reloaded = get_subtask(session, task_id=task.id, subtask_id=subtask.id, user_id=alice.id)
    assert reloaded.assigned_to == sorted([bob.id, carol.id])
    assert sum(len(_inbox(session, user)) for user in users.values()) == stored_before


def test_notifications_are_delivered_after_commit_only(session, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    publisher = RecordingPublisher()
    engine = FanoutEngine(publisher)

    task = _task(session, engine, alice, [bob, carol])

    assert sorted(detail.recipient_id for detail in publisher.delivered) == [bob.id, carol.id]
    assert all(detail.task.id == task.id for detail in publisher.delivered)
    assert all(detail.originator.username == "alice" for detail in publisher.delivered)

    with pytest.raises(ValidationError):
        create_subtask(
            session,
            engine,
            actor=alice,
            task_id=task.id,
            title="Outsider",
            description="Assigned to someone off the task",
            assigned_to=[users["dave"].id],
        )
    assert len(publisher.delivered) == 2


def test_subtask_permissions(session, engine, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    task = _task(session, engine, alice, [bob])
    subtask = create_subtask(
        session,
        engine,
        actor=bob,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
    )

    with pytest.raises(PermissionError):
        update_subtask_status(
            session, engine, actor=carol, task_id=task.id, subtask_id=subtask.id, status="completed"
        )
    with pytest.raises(PermissionError):
        get_task(session, task_id=task.id, user_id=carol.id)
    with pytest.raises(NotFoundError):
        get_subtask(session, task_id=task.id + 1, subtask_id=subtask.id, user_id=alice.id)

    # Subtask admin may delete; the task admin hears about it.
    delete_subtask(session, engine, actor=bob, task_id=task.id, subtask_id=subtask.id)
    assert _inbox(session, alice, subtask_id=subtask.id)[0].message == (
        "bob deleted the subtask 'Draft notes' in your task 'Launch'."
    )


def test_deleting_a_task_keeps_its_notifications(session, engine, users):
    alice, bob = users["alice"], users["bob"]
    task = _task(session, engine, alice, [bob])

    delete_task(session, engine, actor=alice, task_id=task.id)

    latest = _inbox(session, bob)[0]
    assert latest.message == "alice deleted the task 'Launch' assigned to you."
    assert NotificationRepository(session).expand(latest).task is None
    with pytest.raises(NotFoundError):
        get_task(session, task_id=task.id, user_id=alice.id)


def test_removing_a_task_assignee_unassigns_them_from_its_subtasks(session, engine, users):
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    task = _task(session, engine, alice, [bob, carol])
    subtask = create_subtask(
        session,
        engine,
        actor=alice,
        task_id=task.id,
        title="Draft notes",
        description="Write the release notes",
        assigned_to=[alice.id, bob.id, carol.id],
    )

    update_task(session, engine, actor=alice, task_id=task.id, assigned_to=[carol.id])

    refreshed = get_subtask(session, task_id=task.id, subtask_id=subtask.id, user_id=alice.id)
    assert refreshed.assigned_to == [alice.id, carol.id]

    before = len(_inbox(session, bob))
    update_subtask_status(
        session, engine, actor=alice, task_id=task.id, subtask_id=subtask.id, status="pending"
    )
    assert len(_inbox(session, bob)) == before
    with pytest.raises(PermissionError):
        update_subtask_status(
            session, engine, actor=bob, task_id=task.id, subtask_id=subtask.id, status="completed"
        )
