"""Use case for deleting a task together with its subtasks."""

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.domain.entities import User
from taskboard.infrastructure.repositories import TaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork

from .permissions import ensure_task_admin, get_task_or_404


def delete_task(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
) -> None:
    """Delete the task; its notifications are kept and keep pointing at it."""

    with UnitOfWork(session) as uow:
        task = get_task_or_404(uow.session, task_id)
        ensure_task_admin(task, actor.id)

        # Notify first: the push payload embeds the task while it still exists.
        engine.notify(
            uow,
            MutationKind.DELETED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=task.title,
                task_id=task.id,
                participants=Participants(
                    task_creator=task.creator_id,
                    assignees=frozenset(task.assigned_to),
                ),
            ),
        )
        TaskRepository(uow.session).delete(task_id)
        uow.commit()
