"""ORM models used by the application infrastructure."""

from .comment import CommentModel
from .notification import NotificationModel
from .subtask import SubtaskModel, subtask_assignee_table
from .task import TaskModel, task_assignee_table
from .user import UserModel

__all__ = [
    "CommentModel",
    "NotificationModel",
    "SubtaskModel",
    "subtask_assignee_table",
    "TaskModel",
    "task_assignee_table",
    "UserModel",
]
