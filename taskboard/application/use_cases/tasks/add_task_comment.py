"""Use case for commenting on a task."""

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
from .validators import require_text


def add_task_comment(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    text: str,
) -> Task:
    """Append a comment by ``actor`` and echo it to the other participants."""

    text = require_text(text, "comment text")
    with UnitOfWork(session) as uow:
        current = get_task_or_404(uow.session, task_id)
        ensure_task_admin_or_assignee(current, actor.id)

        task = TaskRepository(uow.session).add_comment(
            task_id, user_id=actor.id, text=text
        )
        engine.notify(
            uow,
            MutationKind.COMMENTED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=task.title,
                task_id=task.id,
                comment=text,
                participants=Participants(
                    task_creator=task.creator_id,
                    assignees=frozenset(task.assigned_to),
                ),
            ),
        )
        uow.commit()
    return task
