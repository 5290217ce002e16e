"""Fan a domain mutation out into one notification per affected user."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from taskboard.domain.entities import Notification
from taskboard.infrastructure.notifications import NotificationPublisher
from taskboard.infrastructure.unit_of_work import UnitOfWork

from .messages import MessageContext, render_message
from .participants import MutationKind, Participants, resolve_recipients
from .store import create_notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationContext:
    """Everything the engine needs to know about one mutation."""

    actor_id: int
    actor_name: str
    title: str
    participants: Participants = field(default_factory=Participants)
    task_id: int | None = None
    subtask_id: int | None = None
    task_title: str | None = None
    status: str | None = None
    comment: str | None = None

    @property
    def entity(self) -> str:
        return "subtask" if self.subtask_id is not None else "task"

    def message_context(self) -> MessageContext:
        return MessageContext(
            actor_name=self.actor_name,
            entity=self.entity,
            title=self.title,
            task_title=self.task_title,
            status=self.status,
            comment=self.comment,
        )


class FanoutEngine:
    """Create the notifications for a mutation within its unit of work.

    Any error while storing a notification propagates unchanged so the caller's
    unit of work rolls back the mutation together with every notification
    written so far.
    """

    def __init__(
        self,
        publisher: NotificationPublisher | None = None,
        *,
        notify_self_removal: bool = False,
    ) -> None:
        self._publisher = publisher
        self._notify_self_removal = notify_self_removal

    def notify(
        self, uow: UnitOfWork, kind: MutationKind, context: MutationContext
    ) -> list[Notification]:
        """Store one notification per recipient of ``kind`` and return them."""

        recipients = resolve_recipients(
            kind,
            context.participants,
            actor_id=context.actor_id,
            notify_self_removal=self._notify_self_removal,
        )
        message_context = context.message_context()
        created: list[Notification] = []
        for recipient_id, role in recipients.items():
            created.append(
                create_notification(
                    uow,
                    originator_id=context.actor_id,
                    recipient_id=recipient_id,
                    message=render_message(kind, role, message_context),
                    task_id=context.task_id,
                    subtask_id=context.subtask_id,
                    publisher=self._publisher,
                )
            )

        logger.debug(
            "Queued %d notification(s) for %s on %s %s",
            len(created),
            kind.value,
            context.entity,
            context.subtask_id if context.subtask_id is not None else context.task_id,
        )
        return created


__all__ = ["FanoutEngine", "MutationContext"]
