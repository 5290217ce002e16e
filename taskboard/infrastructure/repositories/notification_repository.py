"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from taskboard.domain.entities import Notification, NotificationDetail
from taskboard.domain.errors import NotFoundError, ValidationError
from taskboard.infrastructure.models import NotificationModel
from taskboard.utils import (
    Page,
    PageRequest,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .subtask_repository import SubtaskRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository


class NotificationRepository:
    """Provide storage and state transitions for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        page: PageRequest,
        is_read: bool | None = None,
    ) -> Page[Notification]:
        query = self._recipient_query(recipient_id)
        if is_read is not None:
            query = query.filter(NotificationModel.is_read.is_(is_read))

        total = query.count()
        models = (
            query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset(page.offset)
            .limit(page.limit)
            .all()
        )
        return Page(
            items=[self._to_entity(model) for model in models],
            total_count=total,
            page=page.page,
            limit=page.limit,
        )

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self._recipient_query(user_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unseen(self, recipient_id: int, *, since: datetime | None = None) -> int:
        query = self.session.query(func.count(NotificationModel.id)).filter(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_seen.is_(False),
        )
        if since is not None:
            query = query.filter(
                NotificationModel.created_at >= ensure_app_naive_datetime(since)
            )
        return int(query.scalar() or 0)

    def create(self, notification: Notification) -> Notification:
        if not notification.is_linked():
            raise ValidationError(
                "A notification must be linked to either a task or a subtask."
            )
        model = NotificationModel(
            originator_id=notification.originator_id,
            recipient_id=notification.recipient_id,
            message=notification.message,
            task_id=notification.task_id,
            subtask_id=notification.subtask_id,
            is_read=notification.is_read,
            is_seen=notification.is_seen,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def set_read(
        self, notification_id: int, value: bool, *, recipient_id: int
    ) -> Notification:
        model = self._require_owned_model(notification_id, recipient_id)
        model.is_read = value
        if value:
            model.is_seen = True
        self.session.flush()
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self._recipient_query(user_id)
            .filter(NotificationModel.id.in_(ids))
            .update(
                {NotificationModel.is_read: True, NotificationModel.is_seen: True},
                synchronize_session="fetch",
            )
        )
        self.session.flush()
        return updated

    def mark_all_read(self, recipient_id: int) -> int:
        updated = (
            self._recipient_query(recipient_id)
            .filter(NotificationModel.is_read.is_(False))
            .update(
                {NotificationModel.is_read: True, NotificationModel.is_seen: True},
                synchronize_session="fetch",
            )
        )
        self.session.flush()
        return updated

    def mark_all_seen(self, recipient_id: int) -> int:
        updated = (
            self._recipient_query(recipient_id)
            .filter(NotificationModel.is_seen.is_(False))
            .update({NotificationModel.is_seen: True}, synchronize_session="fetch")
        )
        self.session.flush()
        return updated

    def delete(self, notification_id: int, *, recipient_id: int) -> int:
        model = self._require_owned_model(notification_id, recipient_id)
        self.session.delete(model)
        self.session.flush()
        return notification_id

    def expand(self, notification: Notification) -> NotificationDetail:
        """Join ``notification`` with its originator and linked task/subtask.

        Raises :class:`NotFoundError` when the originator cannot be resolved. A
        linked task or subtask that has since been deleted expands to ``None``.
        """

        originator = UserRepository(self.session).get_summary(notification.originator_id)
        if originator is None:
            raise NotFoundError(f"User with id {notification.originator_id} not found")

        task = (
            TaskRepository(self.session).get_summary(notification.task_id)
            if notification.task_id is not None
            else None
        )
        subtask = (
            SubtaskRepository(self.session).get_summary(notification.subtask_id)
            if notification.subtask_id is not None
            else None
        )
        return NotificationDetail(
            notification=notification,
            originator=originator,
            task=task,
            subtask=subtask,
        )

    def _recipient_query(self, recipient_id: int) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id
        )

    def _require_owned_model(
        self, notification_id: int, recipient_id: int
    ) -> NotificationModel:
        model = self.session.get(NotificationModel, notification_id)
        if model is None or model.recipient_id != recipient_id:
            raise NotFoundError(f"Notification with id {notification_id} not found")
        return model

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            originator_id=model.originator_id,
            recipient_id=model.recipient_id,
            message=model.message,
            task_id=model.task_id,
            subtask_id=model.subtask_id,
            is_read=bool(model.is_read),
            is_seen=bool(model.is_seen),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
