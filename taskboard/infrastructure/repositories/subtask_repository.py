"""Persistence helpers for subtask entities."""

from __future__ import annotations

from sqlalchemy.orm import Session

from taskboard.domain.entities import Subtask, SubtaskSummary
from taskboard.domain.errors import NotFoundError
from taskboard.infrastructure.models import CommentModel, SubtaskModel, UserModel
from taskboard.utils import (
    Page,
    PageRequest,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)

from .task_repository import apply_filters, comment_to_entity, load_users


class SubtaskRepository:
    """Provide CRUD operations for :class:`Subtask` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, subtask_id: int) -> Subtask | None:
        model = self.session.get(SubtaskModel, subtask_id)
        return self._to_entity(model) if model else None

    def get_summary(self, subtask_id: int) -> SubtaskSummary | None:
        model = self.session.get(SubtaskModel, subtask_id)
        if model is None:
            return None
        return SubtaskSummary(
            id=model.id,
            task_id=model.task_id,
            title=model.title,
            status=model.status,
            priority=model.priority,
        )

    def list_for_task(
        self,
        task_id: int,
        *,
        page: PageRequest,
        creator_id: int | None = None,
        assignee_id: int | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Page[Subtask]:
        query = self.session.query(SubtaskModel).filter(SubtaskModel.task_id == task_id)
        if creator_id is not None:
            query = query.filter(SubtaskModel.creator_id == creator_id)
        if assignee_id is not None:
            query = query.filter(SubtaskModel.assignees.any(UserModel.id == assignee_id))
        query = apply_filters(query, SubtaskModel, status=status, priority=priority)

        total = query.count()
        models = (
            query.order_by(SubtaskModel.created_at.desc(), SubtaskModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
            .all()
        )
        return Page(
            items=[self._to_entity(model) for model in models],
            total_count=total,
            page=page.page,
            limit=page.limit,
        )

    def create(self, subtask: Subtask) -> Subtask:
        model = SubtaskModel(task_id=subtask.task_id, creator_id=subtask.creator_id)
        self._apply_entity_to_model(model, subtask)
        if subtask.created_at is not None:
            model.created_at = ensure_app_naive_datetime(subtask.created_at)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def update(self, subtask: Subtask) -> Subtask:
        model = self._require_model(subtask.id)
        self._apply_entity_to_model(model, subtask)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def remove_assignees(self, task_id: int, user_ids: set[int]) -> None:
        """Unassign ``user_ids`` from every subtask of ``task_id``."""

        if not user_ids:
            return
        models = (
            self.session.query(SubtaskModel)
            .filter(SubtaskModel.task_id == task_id)
            .filter(SubtaskModel.assignees.any(UserModel.id.in_(user_ids)))
            .all()
        )
        for model in models:
            model.assignees = [
                user for user in model.assignees if user.id not in user_ids
            ]
        self.session.flush()

    def add_comment(self, subtask_id: int, *, user_id: int, text: str) -> Subtask:
        model = self._require_model(subtask_id)
        now = now_in_app_naive_datetime()
        model.comments.append(
            CommentModel(user_id=user_id, text=text, created_at=now, updated_at=now)
        )
        self.session.flush()
        return self._to_entity(model)

    def delete(self, subtask_id: int) -> None:
        model = self._require_model(subtask_id)
        self.session.delete(model)
        self.session.flush()

    def _require_model(self, subtask_id: int | None) -> SubtaskModel:
        model = (
            self.session.get(SubtaskModel, subtask_id) if subtask_id is not None else None
        )
        if model is None:
            raise NotFoundError(f"Subtask with id {subtask_id} not found")
        return model

    def _apply_entity_to_model(self, model: SubtaskModel, subtask: Subtask) -> None:
        model.title = subtask.title
        model.description = subtask.description
        model.status = subtask.status
        model.priority = subtask.priority
        model.assignees = load_users(self.session, subtask.assigned_to)

    @staticmethod
    def _to_entity(model: SubtaskModel) -> Subtask:
        return Subtask(
            id=model.id,
            task_id=model.task_id,
            title=model.title,
            description=model.description,
            creator_id=model.creator_id,
            status=model.status,
            priority=model.priority,
            assigned_to=sorted(user.id for user in model.assignees),
            comments=[comment_to_entity(comment) for comment in model.comments],
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["SubtaskRepository"]
