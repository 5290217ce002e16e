"""Human readable notification texts per mutation kind and recipient role."""

from __future__ import annotations

from dataclasses import dataclass

from .participants import MutationKind, Role

_COMMENT_PREVIEW_LENGTH = 140


@dataclass(frozen=True)
class MessageContext:
    """Values interpolated into the notification templates."""

    actor_name: str
    entity: str
    title: str
    task_title: str | None = None
    status: str | None = None
    comment: str | None = None


def render_message(kind: MutationKind, role: Role, context: MessageContext) -> str:
    """Return the text a recipient with ``role`` sees for ``kind``."""

    actor = context.actor_name
    target = f"the {context.entity} '{context.title}'"

    if kind is MutationKind.CREATED:
        if role is Role.TASK_CREATOR and context.entity == "subtask":
            return (
                f"{actor} created {target} in your task '{context.task_title}'."
            )
        if role in (Role.TASK_CREATOR, Role.SUBTASK_CREATOR):
            return f"{actor} created {target} on your behalf."
        return f"{actor} assigned you to {target}."

    if kind is MutationKind.UPDATED:
        if role is Role.ADDED_ASSIGNEE:
            return f"{actor} assigned you to {target}."
        if role is Role.REMOVED_ASSIGNEE:
            return f"{actor} removed you from {target}."
        return f"{actor} updated {target}{_ownership_suffix(role, context)}."

    if kind is MutationKind.STATUS_CHANGED:
        return (
            f"{actor} changed the status of {target}"
            f"{_ownership_suffix(role, context)} to '{context.status}'."
        )

    if kind is MutationKind.COMMENTED:
        return (
            f"{actor} commented on {target}{_ownership_suffix(role, context)}: "
            f"\"{_preview(context.comment or '')}\""
        )

    if kind is MutationKind.DELETED:
        return f"{actor} deleted {target}{_ownership_suffix(role, context)}."

    raise ValueError(f"Unsupported mutation kind: {kind}")


def _ownership_suffix(role: Role, context: MessageContext) -> str:
    if role is Role.TASK_CREATOR:
        if context.entity == "subtask":
            return f" in your task '{context.task_title}'"
        return " you created"
    if role is Role.SUBTASK_CREATOR:
        return " you created"
    return " assigned to you"


def _preview(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= _COMMENT_PREVIEW_LENGTH:
        return text
    return text[: _COMMENT_PREVIEW_LENGTH - 3].rstrip() + "..."


__all__ = ["MessageContext", "render_message"]
