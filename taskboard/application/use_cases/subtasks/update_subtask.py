"""Use case for editing subtask details and assignees."""

from dataclasses import replace
from typing import Iterable

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
from taskboard.application.use_cases.tasks.validators import (
    ensure_subtask_assignees_allowed,
    require_text,
    validate_priority,
)
from taskboard.domain.entities import Subtask, User
from taskboard.infrastructure.repositories import SubtaskRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import same_members


def update_subtask(
    session: Session,
    engine: FanoutEngine,
    *,
    actor: User,
    task_id: int,
    subtask_id: int,
    title: str | None = None,
    description: str | None = None,
    priority: str | None = None,
    assigned_to: Iterable[int] | None = None,
) -> Subtask:
    """Apply the provided changes; ``None`` leaves a field untouched."""

    with UnitOfWork(session) as uow:
        task, current = get_subtask_or_404(uow.session, task_id, subtask_id)
        ensure_task_or_subtask_admin(task, current, actor.id)

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
            new_assignees = ensure_subtask_assignees_allowed(task, assigned_to)
            if not same_members(new_assignees, current.assigned_to):
                assigned_before = frozenset(current.assigned_to)
                updated.assigned_to = new_assignees

        if not content_changed and assigned_before is None:
            return current

        subtask = SubtaskRepository(uow.session).update(updated)
        engine.notify(
            uow,
            MutationKind.UPDATED,
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
                    assigned_before=assigned_before,
                    content_changed=content_changed,
                ),
            ),
        )
        uow.commit()
    return subtask
