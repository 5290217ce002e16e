"""Page/limit helpers shared by the listing endpoints."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """One-based page number and page size requested by a client."""

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be greater than or equal to 1")
        if self.limit < 1:
            raise ValueError("limit must be greater than or equal to 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """A slice of results together with the information to fetch the rest."""

    items: Sequence[T] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit) if self.limit else 0


__all__ = ["Page", "PageRequest"]
