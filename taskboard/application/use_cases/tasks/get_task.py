"""Use case for retrieving a single task."""

from sqlalchemy.orm import Session

from taskboard.domain.entities import Task

from .permissions import ensure_task_admin_or_assignee, get_task_or_404


def get_task(session: Session, *, task_id: int, user_id: int) -> Task:
    """Return the task if ``user_id`` is its admin or one of its assignees."""

    task = get_task_or_404(session, task_id)
    ensure_task_admin_or_assignee(task, user_id)
    return task
