"""Domain entities for tasks, subtasks and their comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

TASK_STATUS_TO_DO: Final[str] = "to do"
TASK_STATUS_PENDING: Final[str] = "pending"
TASK_STATUS_COMPLETED: Final[str] = "completed"
TASK_STATUSES: Final[tuple[str, ...]] = (
    TASK_STATUS_TO_DO,
    TASK_STATUS_PENDING,
    TASK_STATUS_COMPLETED,
)

TASK_PRIORITY_LOW: Final[str] = "low"
TASK_PRIORITY_MEDIUM: Final[str] = "medium"
TASK_PRIORITY_HIGH: Final[str] = "high"
TASK_PRIORITIES: Final[tuple[str, ...]] = (
    TASK_PRIORITY_LOW,
    TASK_PRIORITY_MEDIUM,
    TASK_PRIORITY_HIGH,
)


@dataclass
class Comment:
    """Message left by a participant on a task or subtask."""

    id: int | None
    user_id: int
    text: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Task:
    """Unit of work owned by its creator (the task admin)."""

    id: int | None
    title: str
    description: str
    creator_id: int
    status: str = TASK_STATUS_TO_DO
    priority: str = TASK_PRIORITY_LOW
    assigned_to: list[int] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_admin(self, user_id: int) -> bool:
        return self.creator_id == user_id

    def is_assignee(self, user_id: int) -> bool:
        return user_id in self.assigned_to


@dataclass
class Subtask:
    """Piece of a :class:`Task` with its own creator and assignees."""

    id: int | None
    task_id: int
    title: str
    description: str
    creator_id: int
    status: str = TASK_STATUS_TO_DO
    priority: str = TASK_PRIORITY_LOW
    assigned_to: list[int] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_admin(self, user_id: int) -> bool:
        return self.creator_id == user_id

    def is_assignee(self, user_id: int) -> bool:
        return user_id in self.assigned_to


@dataclass(frozen=True)
class TaskSummary:
    """Lightweight view of a task embedded in notification payloads."""

    id: int
    title: str
    status: str
    priority: str


@dataclass(frozen=True)
class SubtaskSummary:
    """Lightweight view of a subtask embedded in notification payloads."""

    id: int
    task_id: int
    title: str
    status: str
    priority: str
