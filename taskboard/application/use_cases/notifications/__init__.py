"""Notification fan-out engine and recipient inbox operations."""

from .fanout import FanoutEngine, MutationContext
from .inbox import (
    acknowledge,
    count_unseen,
    delete_notification,
    list_notification_details,
    list_notifications,
    mark_all_read,
    mark_all_seen,
    set_read,
)
from .messages import MessageContext, render_message
from .participants import MutationKind, Participants, Role, resolve_recipients
from .store import create_notification

__all__ = [
    "FanoutEngine",
    "MessageContext",
    "MutationContext",
    "MutationKind",
    "Participants",
    "Role",
    "acknowledge",
    "count_unseen",
    "create_notification",
    "delete_notification",
    "list_notification_details",
    "list_notifications",
    "mark_all_read",
    "mark_all_seen",
    "render_message",
    "resolve_recipients",
    "set_read",
]
