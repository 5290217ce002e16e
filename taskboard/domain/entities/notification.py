"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .task import SubtaskSummary, TaskSummary
from .user import UserSummary


@dataclass
class Notification:
    """Message delivered to ``recipient_id`` about an action by ``originator_id``.

    ``task_id`` and ``subtask_id`` are plain references; use
    ``NotificationRepository.expand`` to obtain the linked records.
    """

    id: int | None
    originator_id: int
    recipient_id: int
    message: str
    task_id: int | None = None
    subtask_id: int | None = None
    is_read: bool = False
    is_seen: bool = False
    created_at: datetime | None = None

    def is_linked(self) -> bool:
        """Return ``True`` when the notification points at a task or subtask."""

        return self.task_id is not None or self.subtask_id is not None


@dataclass(frozen=True)
class NotificationDetail:
    """A notification with its originator and linked entities expanded."""

    notification: Notification
    originator: UserSummary
    task: TaskSummary | None = None
    subtask: SubtaskSummary | None = None

    @property
    def recipient_id(self) -> int:
        return self.notification.recipient_id


__all__ = ["Notification", "NotificationDetail"]
