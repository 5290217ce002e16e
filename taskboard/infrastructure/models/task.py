"""SQLAlchemy models for tasks and their assignees."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from taskboard.infrastructure.database import Base
from taskboard.utils import now_in_app_naive_datetime

task_assignee_table = Table(
    "task_assignee",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
)


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="to do")
    priority = Column(String(20), nullable=False, default="low")
    creator_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    assignees = relationship("UserModel", secondary=task_assignee_table, lazy="selectin")
    comments = relationship(
        "CommentModel",
        primaryjoin="TaskModel.id == CommentModel.task_id",
        order_by="CommentModel.created_at, CommentModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    subtasks = relationship(
        "SubtaskModel",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=False,
    )


__all__ = ["TaskModel", "task_assignee_table"]
