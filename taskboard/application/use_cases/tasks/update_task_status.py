"""Use case for moving a task through its statuses."""

from dataclasses import replace

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.domain.entities import Task, User
from taskboard.infrastructure.repositories import TaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork

from .permissions import ensure_task_admin_or_assignee, get_task_or_404
from .validators import validate_status


def update_task_status(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    status: str,
) -> Task:
    """Set the status of a task; setting the current status is a no-op."""

    validate_status(status)
    with UnitOfWork(session) as uow:
        current = get_task_or_404(uow.session, task_id)
        ensure_task_admin_or_assignee(current, actor.id)
        if current.status == status:
            return current

        task = TaskRepository(uow.session).update(replace(current, status=status))
        engine.notify(
            uow,
            MutationKind.STATUS_CHANGED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=task.title,
                task_id=task.id,
                status=task.status,
                participants=Participants(
                    task_creator=task.creator_id,
                    assignees=frozenset(task.assigned_to),
                ),
            ),
        )
        uow.commit()
    return task
