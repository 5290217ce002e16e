"""Decide who must hear about a task or subtask mutation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable


class MutationKind(str, Enum):
    """Kinds of domain mutation that fan out notifications."""

    CREATED = "created"
    UPDATED = "updated"
    STATUS_CHANGED = "status_changed"
    COMMENTED = "commented"
    DELETED = "deleted"


class Role(IntEnum):
    """Why a user receives a notification; higher values win ties."""

    ASSIGNEE = 1
    REMOVED_ASSIGNEE = 2
    ADDED_ASSIGNEE = 3
    SUBTASK_CREATOR = 4
    TASK_CREATOR = 5


@dataclass(frozen=True)
class Participants:
    """Role-tagged users involved in one mutation.

    ``assignees`` is the assignee set after the mutation. For updates,
    ``assigned_before`` holds the set prior to it (``None`` when the assignees
    were not touched) and ``content_changed`` tells whether title, description
    or priority changed.
    """

    task_creator: int | None = None
    subtask_creator: int | None = None
    assignees: frozenset[int] = frozenset()
    assigned_before: frozenset[int] | None = None
    content_changed: bool = False

    @property
    def added(self) -> frozenset[int]:
        if self.assigned_before is None:
            return frozenset()
        return self.assignees - self.assigned_before

    @property
    def removed(self) -> frozenset[int]:
        if self.assigned_before is None:
            return frozenset()
        return self.assigned_before - self.assignees


def resolve_recipients(
    kind: MutationKind,
    participants: Participants,
    *,
    actor_id: int,
    notify_self_removal: bool = False,
) -> dict[int, Role]:
    """Return each recipient of ``kind`` mapped to the role they are notified for.

    Every user appears at most once, with their highest-priority role. The
    actor is dropped from the candidates, except for a self-removal when
    ``notify_self_removal`` is enabled.
    """

    chosen: dict[int, Role] = {}
    for user_id, role in _candidates(kind, participants):
        if user_id == actor_id and not (
            notify_self_removal and role is Role.REMOVED_ASSIGNEE
        ):
            continue
        current = chosen.get(user_id)
        if current is None or role > current:
            chosen[user_id] = role

    ordered = sorted(chosen.items(), key=lambda item: (-item[1], item[0]))
    return dict(ordered)


def _candidates(
    kind: MutationKind, participants: Participants
) -> Iterable[tuple[int, Role]]:
    if kind is MutationKind.UPDATED:
        if participants.content_changed:
            yield from _everyone(participants)
        for user_id in participants.added:
            yield user_id, Role.ADDED_ASSIGNEE
        for user_id in participants.removed:
            yield user_id, Role.REMOVED_ASSIGNEE
        return

    if kind is MutationKind.CREATED:
        yield from _creators(participants)
        for user_id in participants.assignees:
            yield user_id, Role.ADDED_ASSIGNEE
        return

    yield from _everyone(participants)


def _creators(participants: Participants) -> Iterable[tuple[int, Role]]:
    if participants.task_creator:
        yield participants.task_creator, Role.TASK_CREATOR
    if participants.subtask_creator:
        yield participants.subtask_creator, Role.SUBTASK_CREATOR


def _everyone(participants: Participants) -> Iterable[tuple[int, Role]]:
    yield from _creators(participants)
    for user_id in participants.assignees:
        yield user_id, Role.ASSIGNEE


__all__ = ["MutationKind", "Participants", "Role", "resolve_recipients"]
