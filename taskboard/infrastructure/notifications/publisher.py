"""Push committed notifications to the recipient's live websocket."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from taskboard.domain.entities import NotificationDetail, SubtaskSummary, TaskSummary
from taskboard.domain.errors import DeliveryError
from taskboard.utils import isoformat_or_none

from .registry import SessionRegistry

logger = logging.getLogger(__name__)

NEW_NOTIFICATION_EVENT = "newNotification"


class NotificationPublisher:
    """Serialize notifications and schedule their delivery.

    Delivery is best effort and at most once: a recipient without a bound
    connection is skipped, and a failed send is logged and never raised.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task] = set()

    def deliver(self, detail: NotificationDetail) -> None:
        """Schedule ``detail`` to be pushed to its recipient."""

        message = {"type": NEW_NOTIFICATION_EVENT, "data": serialize_notification(detail)}
        recipient_id = detail.recipient_id
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, recipient_id, message)
            except RuntimeError:
                logger.warning(
                    "No event loop available to push notification %s to user %s",
                    detail.notification.id,
                    recipient_id,
                )
        else:
            self._spawn(recipient_id, message)

    async def push(self, recipient_id: int, message: dict[str, Any]) -> bool:
        """Send ``message`` to ``recipient_id`` now; return whether it was sent."""

        connection = self._registry.lookup(recipient_id)
        if connection is None:
            return False
        try:
            await _send(recipient_id, connection, message)
        except DeliveryError as exc:
            logger.warning("%s", exc)
            self._registry.unbind(recipient_id, connection)
            return False
        return True

    async def drain(self) -> None:
        """Wait for every scheduled push to finish."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _spawn(self, recipient_id: int, message: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(self.push(recipient_id, message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


async def _send(recipient_id: int, connection: Any, message: dict[str, Any]) -> None:
    try:
        await connection.send_json(message)
    except Exception as exc:
        raise DeliveryError(recipient_id, str(exc) or type(exc).__name__) from exc


def serialize_notification(detail: NotificationDetail) -> dict[str, Any]:
    """Return the websocket payload representation for ``detail``."""

    notification = detail.notification
    return {
        "id": notification.id,
        "originator_id": notification.originator_id,
        "recipient_id": notification.recipient_id,
        "message": notification.message,
        "task_id": notification.task_id,
        "subtask_id": notification.subtask_id,
        "is_read": notification.is_read,
        "is_seen": notification.is_seen,
        "created_at": isoformat_or_none(notification.created_at),
        "originator": {
            "id": detail.originator.id,
            "username": detail.originator.username,
            "email": detail.originator.email,
        },
        "task": _serialize_task(detail.task),
        "subtask": _serialize_subtask(detail.subtask),
    }


def _serialize_task(task: TaskSummary | None) -> dict[str, Any] | None:
    if task is None:
        return None
    return {
        "id": task.id,
        "title": task.title,
        "status": task.status,
        "priority": task.priority,
    }


def _serialize_subtask(subtask: SubtaskSummary | None) -> dict[str, Any] | None:
    if subtask is None:
        return None
    return {
        "id": subtask.id,
        "task_id": subtask.task_id,
        "title": subtask.title,
        "status": subtask.status,
        "priority": subtask.priority,
    }


__all__ = [
    "NEW_NOTIFICATION_EVENT",
    "NotificationPublisher",
    "serialize_notification",
]
