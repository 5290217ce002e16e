"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
)
from sqlalchemy.sql import expression

from taskboard.infrastructure.database import Base
from taskboard.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications.

    ``task_id`` and ``subtask_id`` carry no foreign key so that deleting a task
    leaves the notifications that mention it in place.
    """

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint(
            "task_id IS NOT NULL OR subtask_id IS NOT NULL",
            name="ck_notification_linked",
        ),
        Index("ix_notification_recipient_read", "recipient_id", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    originator_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    task_id = Column(Integer, nullable=True, index=True)
    subtask_id = Column(Integer, nullable=True, index=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_seen = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
