"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OriginatorRead(BaseModel):
    id: int
    username: str
    email: str


class TaskSummaryRead(BaseModel):
    id: int
    title: str
    status: str
    priority: str


class SubtaskSummaryRead(TaskSummaryRead):
    task_id: int


class NotificationRead(BaseModel):
    """Stored notification as returned by the inbox endpoints."""

    id: int
    originator_id: int
    recipient_id: int
    message: str
    task_id: int | None = None
    subtask_id: int | None = None
    is_read: bool
    is_seen: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationDetailRead(NotificationRead):
    """Notification with its originator and linked entities expanded."""

    originator: OriginatorRead
    task: TaskSummaryRead | None = None
    subtask: SubtaskSummaryRead | None = None


class NotificationMarkReadRequest(BaseModel):
    """Payload used to acknowledge a batch of notifications."""

    ids: list[int] = Field(..., min_length=1)


class UnseenCountRead(BaseModel):
    count: int


class NotificationDeletedRead(BaseModel):
    id: int


__all__ = [
    "NotificationDeletedRead",
    "NotificationDetailRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "OriginatorRead",
    "SubtaskSummaryRead",
    "TaskSummaryRead",
    "UnseenCountRead",
]
