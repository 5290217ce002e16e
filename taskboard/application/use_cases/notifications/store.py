"""Persist a single notification inside the caller's unit of work."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from taskboard.domain.entities import Notification
from taskboard.domain.errors import TransactionError
from taskboard.infrastructure.notifications import NotificationPublisher
from taskboard.infrastructure.repositories import NotificationRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import now_in_app_timezone


def create_notification(
    uow: UnitOfWork,
    *,
    originator_id: int,
    recipient_id: int,
    message: str,
    task_id: int | None = None,
    subtask_id: int | None = None,
    publisher: NotificationPublisher | None = None,
) -> Notification:
    """Store a notification and push it once ``uow`` commits.

    Raises :class:`~taskboard.domain.errors.ValidationError` when neither
    ``task_id`` nor ``subtask_id`` is given and
    :class:`~taskboard.domain.errors.TransactionError` when the write fails.
    Nothing is pushed if the unit of work rolls back.
    """

    notification = Notification(
        id=None,
        originator_id=originator_id,
        recipient_id=recipient_id,
        message=message,
        task_id=task_id,
        subtask_id=subtask_id,
        created_at=now_in_app_timezone(),
    )
    repository = NotificationRepository(uow.session)
    try:
        saved = repository.create(notification)
        detail = repository.expand(saved) if publisher is not None else None
    except SQLAlchemyError as exc:
        raise TransactionError("Could not store the notification") from exc
    if detail is not None:
        uow.on_commit(publisher.deliver, detail)
    return saved


__all__ = ["create_notification"]
