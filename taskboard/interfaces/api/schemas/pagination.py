"""Envelope shared by every paginated listing."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from taskboard.utils import Page

ItemT = TypeVar("ItemT")


class PaginatedResponse(BaseModel, Generic[ItemT]):
    """``{items, totalCount, page, totalPages}``."""

    items: list[ItemT]
    total_count: int = Field(..., alias="totalCount")
    page: int
    total_pages: int = Field(..., alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_page(cls, page: Page[Any], convert: Callable[[Any], ItemT]) -> "PaginatedResponse[ItemT]":
        return cls(
            items=[convert(item) for item in page.items],
            total_count=page.total_count,
            page=page.page,
            total_pages=page.total_pages,
        )


__all__ = ["PaginatedResponse"]
