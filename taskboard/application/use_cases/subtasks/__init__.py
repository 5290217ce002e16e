"""Use cases for managing subtasks."""

from .add_subtask_comment import add_subtask_comment
from .create_subtask import create_subtask
from .delete_subtask import delete_subtask
from .queries import get_subtask, list_subtasks
from .update_subtask import update_subtask
from .update_subtask_status import update_subtask_status

__all__ = [
    "add_subtask_comment",
    "create_subtask",
    "delete_subtask",
    "get_subtask",
    "list_subtasks",
    "update_subtask",
    "update_subtask_status",
]
