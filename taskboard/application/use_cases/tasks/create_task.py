"""Use case for creating tasks."""

from typing import Iterable

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.domain.entities import TASK_PRIORITY_LOW, Task, User
from taskboard.infrastructure.repositories import TaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import now_in_app_timezone

from .validators import ensure_users_exist, require_text, validate_priority


def create_task(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    title: str,
    description: str,
    priority: str = TASK_PRIORITY_LOW,
    assigned_to: Iterable[int] = (),
) -> Task:
    """Create a task owned by ``actor`` and notify its assignees."""

    entity = Task(
        id=None,
        title=require_text(title, "title"),
        description=require_text(description, "description"),
        creator_id=actor.id,
        priority=validate_priority(priority),
        created_at=now_in_app_timezone(),
    )

    with UnitOfWork(session) as uow:
        entity.assigned_to = ensure_users_exist(uow.session, assigned_to)
        task = TaskRepository(uow.session).create(entity)
        engine.notify(
            uow,
            MutationKind.CREATED,
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
        uow.commit()
    return task
