"""SQLAlchemy model for task and subtask comments."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Text

from taskboard.infrastructure.database import Base
from taskboard.utils import now_in_app_naive_datetime


class CommentModel(Base):
    """A comment attached to exactly one task or subtask."""

    __tablename__ = "comment"
    __table_args__ = (
        CheckConstraint(
            "(task_id IS NULL) <> (subtask_id IS NULL)",
            name="ck_comment_single_parent",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("task.id", ondelete="CASCADE"), nullable=True, index=True)
    subtask_id = Column(
        Integer, ForeignKey("subtask.id", ondelete="CASCADE"), nullable=True, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["CommentModel"]
