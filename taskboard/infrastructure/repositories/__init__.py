"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .subtask_repository import SubtaskRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "SubtaskRepository",
    "TaskRepository",
    "UserRepository",
]
