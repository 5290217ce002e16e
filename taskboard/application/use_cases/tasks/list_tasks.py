"""Use cases for listing tasks visible to a user."""

from sqlalchemy.orm import Session

from taskboard.domain.entities import Task
from taskboard.domain.errors import ValidationError
from taskboard.infrastructure.repositories import TaskRepository
from taskboard.utils import Page, PageRequest

from .validators import validate_priority, validate_status


def list_tasks(
    session: Session,
    *,
    user_id: int,
    page: PageRequest,
    scope: str = "all",
    status: str | None = None,
    priority: str | None = None,
) -> Page[Task]:
    """List tasks for ``user_id``.

    ``scope`` is ``"all"`` (created by or assigned to the user), ``"mine"``
    (created by the user) or ``"assigned"`` (assigned to the user).
    """

    if status is not None:
        validate_status(status)
    if priority is not None:
        validate_priority(priority)

    filters: dict[str, int] = {}
    if scope == "all":
        filters["involving"] = user_id
    elif scope == "mine":
        filters["creator_id"] = user_id
    elif scope == "assigned":
        filters["assignee_id"] = user_id
    else:
        raise ValidationError(f"Unknown task scope: {scope}")

    return TaskRepository(session).list(
        page=page, status=status, priority=priority, **filters
    )
