from .auth import Token, UserRead, UserRegister
from .notification import (
    NotificationDeletedRead,
    NotificationDetailRead,
    NotificationMarkReadRequest,
    NotificationRead,
    OriginatorRead,
    SubtaskSummaryRead,
    TaskSummaryRead,
    UnseenCountRead,
)
from .pagination import PaginatedResponse
from .task import (
    CommentCreate,
    CommentRead,
    StatusUpdate,
    SubtaskCreate,
    SubtaskRead,
    SubtaskUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)

__all__ = [
    "CommentCreate",
    "CommentRead",
    "NotificationDeletedRead",
    "NotificationDetailRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "OriginatorRead",
    "PaginatedResponse",
    "StatusUpdate",
    "SubtaskCreate",
    "SubtaskRead",
    "SubtaskSummaryRead",
    "SubtaskUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskSummaryRead",
    "TaskUpdate",
    "Token",
    "UnseenCountRead",
    "UserRead",
    "UserRegister",
]
