"""Use case for editing task details and assignees."""

from dataclasses import replace
from typing import Iterable

from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    FanoutEngine,
    MutationContext,
    MutationKind,
    Participants,
)
from taskboard.domain.entities import Task, User
from taskboard.infrastructure.repositories import SubtaskRepository, TaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import same_members

from .permissions import ensure_task_admin, get_task_or_404
from .validators import ensure_users_exist, require_text, validate_priority


def update_task(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    title: str | None = None,
    description: str | None = None,
    priority: str | None = None,
    assigned_to: Iterable[int] | None = None,
) -> Task:
    """Apply the provided changes; ``None`` leaves a field untouched.

    Added and removed assignees are told about their assignment change; the
    other participants hear about content changes only.
    """

    with UnitOfWork(session) as uow:
        current = get_task_or_404(uow.session, task_id)
        ensure_task_admin(current, actor.id)

        updated = replace(
            current,
            title=require_text(title, "title") if title is not None else current.title,
            description=(
                require_text(description, "description")
                if description is not None
                else current.description
            ),
            priority=validate_priority(priority) if priority is not None else current.priority,
        )
        content_changed = (updated.title, updated.description, updated.priority) != (
            current.title,
            current.description,
            current.priority,
        )

        assigned_before = None
        if assigned_to is not None:
            new_assignees = ensure_users_exist(uow.session, assigned_to)
            if not same_members(new_assignees, current.assigned_to):
                assigned_before = frozenset(current.assigned_to)
                updated.assigned_to = new_assignees

        if not content_changed and assigned_before is None:
            return current

        task = TaskRepository(uow.session).update(updated)
        if assigned_before is not None:
            # Subtask assignees must stay within the task assignees and its creator.
            SubtaskRepository(uow.session).remove_assignees(
                task.id, set(assigned_before) - set(task.assigned_to) - {task.creator_id}
            )
        engine.notify(
            uow,
            MutationKind.UPDATED,
            MutationContext(
                actor_id=actor.id,
                actor_name=actor.username,
                title=task.title,
                task_id=task.id,
                participants=Participants(
                    task_creator=task.creator_id,
                    assignees=frozenset(task.assigned_to),
                    assigned_before=assigned_before,
                    content_changed=content_changed,
                ),
            ),
        )
        uow.commit()
    return task
