"""Read-only subtask use cases."""

from sqlalchemy.orm import Session

from taskboard.application.use_cases.tasks.permissions import (
    ensure_subtask_participant,
    ensure_task_admin_or_assignee,
    get_subtask_or_404,
    get_task_or_404,
)
from taskboard.application.use_cases.tasks.validators import (
    validate_priority,
    validate_status,
)
from taskboard.domain.entities import Subtask
from taskboard.domain.errors import ValidationError
from taskboard.infrastructure.repositories import SubtaskRepository
from taskboard.utils import Page, PageRequest


def get_subtask(
    session: Session, *, task_id: int, subtask_id: int, user_id: int
) -> Subtask:
    task, subtask = get_subtask_or_404(session, task_id, subtask_id)
    ensure_subtask_participant(task, subtask, user_id)
    return subtask


def list_subtasks(
    session: Session,
    *,
    task_id: int,
    user_id: int,
    page: PageRequest,
    scope: str = "all",
    status: str | None = None,
    priority: str | None = None,
) -> Page[Subtask]:
    """List the subtasks of a task.

    ``scope`` is ``"all"``, ``"mine"`` (created by ``user_id``) or
    ``"assigned"`` (assigned to ``user_id``).
    """

    task = get_task_or_404(session, task_id)
    ensure_task_admin_or_assignee(task, user_id)
    if status is not None:
        validate_status(status)
    if priority is not None:
        validate_priority(priority)

    filters: dict[str, int] = {}
    if scope == "mine":
        filters["creator_id"] = user_id
    elif scope == "assigned":
        filters["assignee_id"] = user_id
    elif scope != "all":
        raise ValidationError(f"Unknown subtask scope: {scope}")

    return SubtaskRepository(session).list_for_task(
        task.id, page=page, status=status, priority=priority, **filters
    )
