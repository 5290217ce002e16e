"""Use case for deleting subtasks."""

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.application.use_cases.tasks.permissions import (
    ensure_task_or_subtask_admin,
    get_subtask_or_404,
)
from taskboard.domain.entities import User
from taskboard.infrastructure.repositories import SubtaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork


def delete_subtask(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    subtask_id: int,
) -> None:
    with UnitOfWork(session) as uow:
        task, subtask = get_subtask_or_404(uow.session, task_id, subtask_id)
        ensure_task_or_subtask_admin(task, subtask, actor.id)

        engine.notify(
            uow,
            MutationKind.DELETED,
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
        SubtaskRepository(uow.session).delete(subtask.id)
        uow.commit()
