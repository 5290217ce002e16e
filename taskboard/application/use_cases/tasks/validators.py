"""Validation helpers shared by task and subtask use cases."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from taskboard.domain.entities import TASK_PRIORITIES, TASK_STATUSES, Task
from taskboard.domain.errors import ValidationError
from taskboard.infrastructure.repositories import UserRepository
from taskboard.utils import unique_ids


def require_text(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"The {field} is required.")
    return cleaned


def validate_status(status: str) -> str:
    if status not in TASK_STATUSES:
        allowed = ", ".join(TASK_STATUSES)
        raise ValidationError(f"Invalid status '{status}'. Allowed values: {allowed}.")
    return status


def validate_priority(priority: str) -> str:
    if priority not in TASK_PRIORITIES:
        allowed = ", ".join(TASK_PRIORITIES)
        raise ValidationError(
            f"Invalid priority '{priority}'. Allowed values: {allowed}."
        )
    return priority


def ensure_users_exist(session: Session, user_ids: Iterable[int]) -> list[int]:
    """Return ``user_ids`` deduplicated, failing if any of them is unknown."""

    ids = unique_ids(user_ids)
    missing = set(ids) - UserRepository(session).existing_ids(ids)
    if missing:
        listed = ", ".join(str(user_id) for user_id in sorted(missing))
        raise ValidationError(f"Unknown users: {listed}.")
    return ids


def ensure_subtask_assignees_allowed(task: Task, user_ids: Iterable[int]) -> list[int]:
    """Subtask assignees must already be on the parent task (or be its creator)."""

    ids = unique_ids(user_ids)
    allowed = set(task.assigned_to) | {task.creator_id}
    outsiders = [user_id for user_id in ids if user_id not in allowed]
    if outsiders:
        listed = ", ".join(str(user_id) for user_id in sorted(outsiders))
        raise ValidationError(
            f"Users {listed} are not assigned to the task '{task.title}'."
        )
    return ids


__all__ = [
    "ensure_subtask_assignees_allowed",
    "ensure_users_exist",
    "require_text",
    "validate_priority",
    "validate_status",
]
