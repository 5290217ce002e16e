"""Realtime notification helpers for the infrastructure layer."""

from .publisher import (
    NEW_NOTIFICATION_EVENT,
    NotificationPublisher,
    serialize_notification,
)
from .registry import SessionRegistry

__all__ = [
    "NEW_NOTIFICATION_EVENT",
    "NotificationPublisher",
    "SessionRegistry",
    "serialize_notification",
]
