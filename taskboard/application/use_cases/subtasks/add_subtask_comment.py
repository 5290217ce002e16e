"""Use case for commenting on a subtask."""

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
from taskboard.application.use_cases.tasks.validators import require_text
from taskboard.domain.entities import Subtask, User
from taskboard.infrastructure.repositories import SubtaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork


def add_subtask_comment(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    subtask_id: int,
    text: str,
) -> Subtask:
    text = require_text(text, "comment text")
    with UnitOfWork(session) as uow:
        task, current = get_subtask_or_404(uow.session, task_id, subtask_id)
        ensure_subtask_participant(task, current, actor.id)

        subtask = SubtaskRepository(uow.session).add_comment(
            current.id, user_id=actor.id, text=text
        )
        engine.notify(
            uow,
            MutationKind.COMMENTED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=subtask.title,
                task_id=task.id,
                subtask_id=subtask.id,
                task_title=task.title,
                comment=text,
                participants=Participants(
                    task_creator=task.creator_id,
                    subtask_creator=subtask.creator_id,
                    assignees=frozenset(subtask.assigned_to),
                ),
            ),
        )
        uow.commit()
    return subtask
