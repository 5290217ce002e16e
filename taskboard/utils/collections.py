"""Small helpers to compare and normalize identifier collections."""

from __future__ import annotations

from typing import Iterable


def same_members(first: Iterable[int], second: Iterable[int]) -> bool:
    """Return ``True`` when both collections hold the same ids, ignoring order."""

    return sorted(first) == sorted(second)


def unique_ids(values: Iterable[int | None]) -> list[int]:
    """Return the truthy ids in ``values`` without duplicates, preserving order."""

    unique: list[int] = []
    seen: set[int] = set()
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


__all__ = ["same_members", "unique_ids"]
