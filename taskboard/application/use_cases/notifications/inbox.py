"""Recipient-facing reads and state transitions on stored notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sqlalchemy.orm import Session

from taskboard.domain.entities import Notification, NotificationDetail
from taskboard.infrastructure.repositories import NotificationRepository
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import Page, PageRequest


def list_notifications(
    session: Session,
    *,
    recipient_id: int,
    page: PageRequest,
    is_read: bool | None = None,
) -> Page[Notification]:
    """Return ``recipient_id``'s notifications, newest first."""

    return NotificationRepository(session).list_for_recipient(
        recipient_id, page=page, is_read=is_read
    )


def list_notification_details(
    session: Session,
    *,
    recipient_id: int,
    page: PageRequest,
    is_read: bool | None = None,
) -> Page[NotificationDetail]:
    """Same as :func:`list_notifications` with originator and links expanded."""

    repository = NotificationRepository(session)
    result = repository.list_for_recipient(recipient_id, page=page, is_read=is_read)
    return Page(
        items=[repository.expand(notification) for notification in result.items],
        total_count=result.total_count,
        page=result.page,
        limit=result.limit,
    )


def count_unseen(
    session: Session, *, recipient_id: int, since: datetime | None = None
) -> int:
    return NotificationRepository(session).count_unseen(recipient_id, since=since)


def set_read(
    session: Session, *, notification_id: int, recipient_id: int, value: bool
) -> Notification:
    """Mark one notification as read (``value=True``) or unread."""

    with UnitOfWork(session) as uow:
        updated = NotificationRepository(uow.session).set_read(
            notification_id, value, recipient_id=recipient_id
        )
        uow.commit()
    return updated


def mark_all_read(
    session: Session, *, recipient_id: int, page: PageRequest
) -> Page[Notification]:
    """Mark every notification of ``recipient_id`` as read; return the first page."""

    with UnitOfWork(session) as uow:
        NotificationRepository(uow.session).mark_all_read(recipient_id)
        uow.commit()
    return list_notifications(session, recipient_id=recipient_id, page=page)


def mark_all_seen(
    session: Session, *, recipient_id: int, page: PageRequest
) -> Page[Notification]:
    """Mark every notification of ``recipient_id`` as seen; return the first page."""

    with UnitOfWork(session) as uow:
        NotificationRepository(uow.session).mark_all_seen(recipient_id)
        uow.commit()
    return list_notifications(session, recipient_id=recipient_id, page=page)


def acknowledge(
    session: Session, *, notification_ids: Iterable[int], recipient_id: int
) -> int:
    """Mark the given notifications as read, ignoring ids owned by others."""

    with UnitOfWork(session) as uow:
        updated = NotificationRepository(uow.session).mark_as_read(
            notification_ids, user_id=recipient_id
        )
        uow.commit()
    return updated


def delete_notification(
    session: Session, *, notification_id: int, recipient_id: int
) -> int:
    """Delete one of ``recipient_id``'s notifications and return its id."""

    with UnitOfWork(session) as uow:
        deleted = NotificationRepository(uow.session).delete(
            notification_id, recipient_id=recipient_id
        )
        uow.commit()
    return deleted


__all__ = [
    "acknowledge",
    "count_unseen",
    "delete_notification",
    "list_notification_details",
    "list_notifications",
    "mark_all_read",
    "mark_all_seen",
    "set_read",
]
