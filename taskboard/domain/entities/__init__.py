"""Domain entities exposed by the application."""

from .notification import Notification, NotificationDetail
from .task import (
    TASK_PRIORITIES,
    TASK_PRIORITY_HIGH,
    TASK_PRIORITY_LOW,
    TASK_PRIORITY_MEDIUM,
    TASK_STATUS_COMPLETED,
    TASK_STATUS_PENDING,
    TASK_STATUS_TO_DO,
    TASK_STATUSES,
    Comment,
    Subtask,
    SubtaskSummary,
    Task,
    TaskSummary,
)
from .user import User, UserSummary

__all__ = [
    "Comment",
    "Notification",
    "NotificationDetail",
    "Subtask",
    "SubtaskSummary",
    "Task",
    "TaskSummary",
    "TASK_PRIORITIES",
    "TASK_PRIORITY_HIGH",
    "TASK_PRIORITY_LOW",
    "TASK_PRIORITY_MEDIUM",
    "TASK_STATUSES",
    "TASK_STATUS_COMPLETED",
    "TASK_STATUS_PENDING",
    "TASK_STATUS_TO_DO",
    "User",
    "UserSummary",
]
