"""Lookups with role checks for task admins, subtask admins and assignees."""

from __future__ import annotations

from sqlalchemy.orm import Session

from taskboard.domain.entities import Subtask, Task
from taskboard.domain.errors import NotFoundError
from taskboard.infrastructure.repositories import SubtaskRepository, TaskRepository


def get_task_or_404(session: Session, task_id: int) -> Task:
    task = TaskRepository(session).get(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def get_subtask_or_404(session: Session, task_id: int, subtask_id: int) -> tuple[Task, Subtask]:
    """Return the task and its subtask; a subtask of another task is not found."""

    task = get_task_or_404(session, task_id)
    subtask = SubtaskRepository(session).get(subtask_id)
    if subtask is None or subtask.task_id != task.id:
        raise NotFoundError("Subtask not found")
    return task, subtask


def ensure_task_admin(task: Task, user_id: int) -> None:
    if not task.is_admin(user_id):
        raise PermissionError("Access denied: not the task admin")


def ensure_task_admin_or_assignee(task: Task, user_id: int) -> None:
    if not (task.is_admin(user_id) or task.is_assignee(user_id)):
        raise PermissionError("Access denied: not the task admin or an assignee")


def ensure_task_or_subtask_admin(task: Task, subtask: Subtask, user_id: int) -> None:
    if not (task.is_admin(user_id) or subtask.is_admin(user_id)):
        raise PermissionError("Access denied: not an admin")


def ensure_subtask_participant(task: Task, subtask: Subtask, user_id: int) -> None:
    if not (
        task.is_admin(user_id)
        or subtask.is_admin(user_id)
        or subtask.is_assignee(user_id)
    ):
        raise PermissionError("Access denied: not an admin or assignee")


__all__ = [
    "ensure_subtask_participant",
    "ensure_task_admin",
    "ensure_task_admin_or_assignee",
    "ensure_task_or_subtask_admin",
    "get_subtask_or_404",
    "get_task_or_404",
]
