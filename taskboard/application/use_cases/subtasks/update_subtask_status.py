"""Use case for moving a subtask through its statuses."""

from dataclasses import replace

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.application.use_cases.tasks.permissions import (
    ensure_subtask_participant,
    get_subtask_or_404,
)
from taskboard.application.use_cases.tasks.validators import validate_status
from taskboard.domain.entities import Subtask, User
from taskboard.infrastructure.repositories import SubtaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork


def update_subtask_status(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    subtask_id: int,
    status: str,
) -> Subtask:
    validate_status(status)
    with UnitOfWork(session) as uow:
        task, current = get_subtask_or_404(uow.session, task_id, subtask_id)
        ensure_subtask_participant(task, current, actor.id)
        if current.status == status:
            return current

        subtask = SubtaskRepository(uow.session).update(replace(current, status=status))
        engine.notify(
            uow,
            MutationKind.STATUS_CHANGED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=subtask.title,
                task_id=task.id,
                subtask_id=subtask.id,
                task_title=task.title,
                status=subtask.status,
                participants=Participants(
                    task_creator=task.creator_id,
                    subtask_creator=subtask.creator_id,
                    assignees=frozenset(subtask.assigned_to),
                ),
            ),
        )
        uow.commit()
    return subtask
