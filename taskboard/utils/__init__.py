"""Utility helpers for reusable functionality."""

from .collections import same_members, unique_ids
from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    isoformat_or_none,
    now_in_app_naive_datetime,
    now_in_app_timezone,
)
from .pagination import Page, PageRequest

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "isoformat_or_none",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "Page",
    "PageRequest",
    "same_members",
    "unique_ids",
]
