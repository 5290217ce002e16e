"""Use cases for managing tasks."""

from .add_task_comment import add_task_comment
from .create_task import create_task
from .delete_task import delete_task
from .get_task import get_task
from .list_tasks import list_tasks
from .update_task import update_task
from .update_task_status import update_task_status

__all__ = [
    "add_task_comment",
    "create_task",
    "delete_task",
    "get_task",
    "list_tasks",
    "update_task",
    "update_task_status",
]
