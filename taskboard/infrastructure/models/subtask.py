"""SQLAlchemy models for subtasks and their assignees."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from taskboard.infrastructure.database import Base
from taskboard.utils import now_in_app_naive_datetime

subtask_assignee_table = Table(
    "subtask_assignee",
    Base.metadata,
    Column(
        "subtask_id", Integer, ForeignKey("subtask.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
)


class SubtaskModel(Base):
    """Database representation of a subtask."""

    __tablename__ = "subtask"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(
        Integer, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="to do")
    priority = Column(String(20), nullable=False, default="low")
    creator_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    task = relationship("TaskModel", back_populates="subtasks")
    assignees = relationship(
        "UserModel", secondary=subtask_assignee_table, lazy="selectin"
    )
    comments = relationship(
        "CommentModel",
        primaryjoin="SubtaskModel.id == CommentModel.subtask_id",
        order_by="CommentModel.created_at, CommentModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


__all__ = ["SubtaskModel", "subtask_assignee_table"]
