"""Use case for creating subtasks."""

from typing import Iterable

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.application.use_cases.tasks.permissions import (
    ensure_task_admin_or_assignee,
    get_task_or_404,
)
from taskboard.application.use_cases.tasks.validators import (
    ensure_subtask_assignees_allowed,
    require_text,
    validate_priority,
)
from taskboard.domain.entities import TASK_PRIORITY_LOW, Subtask, User
from taskboard.infrastructure.repositories import SubtaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import now_in_app_timezone


def create_subtask(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    title: str,
    description: str,
    priority: str = TASK_PRIORITY_LOW,
    assigned_to: Iterable[int] = (),
) -> Subtask:
    """Create a subtask under ``task_id``.

    The task admin hears that a subtask was created in their task and each
    subtask assignee hears that they were assigned.
    """

    title = require_text(title, "title")
    description = require_text(description, "description")
    validate_priority(priority)

    with UnitOfWork(session) as uow:
        task = get_task_or_404(uow.session, task_id)
        ensure_task_admin_or_assignee(task, actor.id)

        subtask = SubtaskRepository(uow.session).create(
            Subtask(
                id=None,
                task_id=task.id,
                title=title,
                description=description,
                creator_id=actor.id,
                priority=priority,
                assigned_to=ensure_subtask_assignees_allowed(task, assigned_to),
                created_at=now_in_app_timezone(),
            )
        )
        engine.notify(
            uow,
            MutationKind.CREATED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=subtask.title,
                task_id=task.id,
                subtask_id=subtask.id,
                task_title=task.title,
                participants=Participants(
                    task_creator=task.creator_id,
                    subtask_creator=subtask.creator_id,
                    assignees=frozenset(subtask.assigned_to),
                ),
            ),
        )
        uow.commit()
    return subtask
