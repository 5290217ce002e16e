"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    username: str
    email: str
    password: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserSummary:
    """Public subset of :class:`User` embedded in other payloads."""

    id: int
    username: str
    email: str
