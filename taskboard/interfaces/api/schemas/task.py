"""Task, subtask and comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1)


class CommentRead(BaseModel):
    id: int
    user_id: int
    text: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class StatusUpdate(BaseModel):
    status: str


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    priority: str = "low"
    assigned_to: list[int] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    priority: str | None = None
    assigned_to: list[int] | None = None

    model_config = ConfigDict(extra="forbid")


class TaskRead(BaseModel):
    id: int
    title: str
    description: str
    creator_id: int
    status: str
    priority: str
    assigned_to: list[int]
    comments: list[CommentRead] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SubtaskCreate(TaskCreate):
    pass


class SubtaskUpdate(TaskUpdate):
    pass


class SubtaskRead(TaskRead):
    task_id: int


__all__ = [
    "CommentCreate",
    "CommentRead",
    "StatusUpdate",
    "SubtaskCreate",
    "SubtaskRead",
    "SubtaskUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
