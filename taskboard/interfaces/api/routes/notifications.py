"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import (
    acknowledge,
    count_unseen,
    delete_notification,
    list_notification_details,
    mark_all_read,
    mark_all_seen,
    set_read,
)
from taskboard.config import get_settings
from taskboard.domain.entities import Notification, NotificationDetail, User
from taskboard.infrastructure.database import SessionLocal, get_db
from taskboard.infrastructure.notifications import SessionRegistry, serialize_notification
from taskboard.infrastructure.repositories import NotificationRepository, UserRepository
from taskboard.infrastructure.security import user_id_from_token
from taskboard.interfaces.api.dependencies import get_current_user, get_session_registry
from taskboard.interfaces.api.routes_helpers import translate_domain_errors
from taskboard.interfaces.api.schemas import (
    NotificationDeletedRead,
    NotificationDetailRead,
    NotificationRead,
    PaginatedResponse,
    UnseenCountRead,
)
from taskboard.utils import PageRequest

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

# Close code for a rejected handshake (policy violation).
WS_POLICY_VIOLATION = 1008


def _page(page: int, limit: int | None) -> PageRequest:
    return PageRequest(page=page, limit=limit or get_settings().notifications_page_size)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _detail_to_schema(detail: NotificationDetail) -> NotificationDetailRead:
    return NotificationDetailRead.model_validate(serialize_notification(detail))


@router.get("/", response_model=PaginatedResponse[NotificationDetailRead])
def list_notifications_endpoint(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    is_read: bool | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaginatedResponse[NotificationDetailRead]:
    """Return the authenticated user's notifications, newest first."""

    with translate_domain_errors():
        result = list_notification_details(
            db, recipient_id=current_user.id, page=_page(page, limit), is_read=is_read
        )
    return PaginatedResponse[NotificationDetailRead].from_page(result, _detail_to_schema)


@router.get("/unseen", response_model=UnseenCountRead)
def count_unseen_endpoint(
    since: datetime | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnseenCountRead:
    count = count_unseen(db, recipient_id=current_user.id, since=since)
    return UnseenCountRead(count=count)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read_endpoint(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    with translate_domain_errors():
        notification = set_read(
            db, notification_id=notification_id, recipient_id=current_user.id, value=True
        )
    return _notification_to_schema(notification)


@router.patch("/{notification_id}/unread", response_model=NotificationRead)
def mark_unread_endpoint(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    with translate_domain_errors():
        notification = set_read(
            db, notification_id=notification_id, recipient_id=current_user.id, value=False
        )
    return _notification_to_schema(notification)


@router.put("/mark-all-read", response_model=PaginatedResponse[NotificationRead])
def mark_all_read_endpoint(
    limit: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaginatedResponse[NotificationRead]:
    """Mark every notification as read and return the first page."""

    with translate_domain_errors():
        result = mark_all_read(db, recipient_id=current_user.id, page=_page(1, limit))
    return PaginatedResponse[NotificationRead].from_page(result, _notification_to_schema)


@router.put("/mark-all-seen", response_model=PaginatedResponse[NotificationRead])
def mark_all_seen_endpoint(
    limit: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaginatedResponse[NotificationRead]:
    with translate_domain_errors():
        result = mark_all_seen(db, recipient_id=current_user.id, page=_page(1, limit))
    return PaginatedResponse[NotificationRead].from_page(result, _notification_to_schema)


@router.delete("/{notification_id}", response_model=NotificationDeletedRead)
def delete_notification_endpoint(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationDeletedRead:
    with translate_domain_errors():
        deleted_id = delete_notification(
            db, notification_id=notification_id, recipient_id=current_user.id
        )
    return NotificationDeletedRead(id=deleted_id)


def _authenticate_websocket(token: str | None) -> tuple[User, list[NotificationDetail]] | None:
    """Return the token's user and their unread notifications, or ``None``."""

    if not token:
        return None
    try:
        user_id = user_id_from_token(token)
    except ValueError:
        return None

    session = SessionLocal()
    try:
        user = UserRepository(session).get(user_id)
        if user is None:
            return None
        repository = NotificationRepository(session)
        pending = [
            repository.expand(notification)
            for notification in repository.list_unread_for_user(user.id)
        ]
    finally:
        session.close()
    return user, pending


def _acknowledge(user_id: int, ids: list[int]) -> None:
    session = SessionLocal()
    try:
        acknowledge(session, notification_ids=ids, recipient_id=user_id)
    finally:
        session.close()


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    registry: SessionRegistry = Depends(get_session_registry),
) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    authenticated = _authenticate_websocket(websocket.query_params.get("token"))
    if authenticated is None:
        await websocket.close(code=WS_POLICY_VIOLATION)
        return
    user, pending_notifications = authenticated
    await websocket.accept()
    registry.bind(user.id, websocket)
    logger.info("User %s connected to the notifications channel", user.id)
    try:
        await websocket.send_json(
            {
                "type": "init",
                "data": [serialize_notification(detail) for detail in pending_notifications],
            }
        )
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, [int(i) for i in ids if isinstance(i, int)])
                continue
    except WebSocketDisconnect:
        logger.info("User %s disconnected from the notifications channel", user.id)
    finally:
        registry.unbind(user.id, websocket)
