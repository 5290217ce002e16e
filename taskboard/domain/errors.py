"""Error taxonomy shared by the use cases and the API layer."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a payload breaks a domain rule (e.g. an unlinked notification)."""


class NotFoundError(LookupError):
    """Raised when a referenced notification, task, subtask or user does not exist."""


class ConflictError(ValueError):
    """Raised when a unique value (email, username) is already taken."""


class TransactionError(RuntimeError):
    """Raised when the atomic commit of a unit of work fails."""


class DeliveryError(RuntimeError):
    """Raised when a realtime push cannot reach the recipient's connection."""

    def __init__(self, recipient_id: int, reason: str) -> None:
        super().__init__(f"Could not push notification to user {recipient_id}: {reason}")
        self.recipient_id = recipient_id
        self.reason = reason


__all__ = ["ConflictError", "DeliveryError", "NotFoundError", "TransactionError", "ValidationError"]
