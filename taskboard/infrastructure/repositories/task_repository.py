"""Persistence helpers for task entities."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import or_, select
from sqlalchemy.orm import Query, Session

from taskboard.domain.entities import Comment, Task, TaskSummary
from taskboard.domain.errors import NotFoundError
from taskboard.infrastructure.models import (
    CommentModel,
    TaskModel,
    UserModel,
    task_assignee_table,
)
from taskboard.utils import (
    Page,
    PageRequest,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class TaskRepository:
    """Provide CRUD operations for :class:`Task` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, task_id: int) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def get_summary(self, task_id: int) -> TaskSummary | None:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            return None
        return TaskSummary(
            id=model.id, title=model.title, status=model.status, priority=model.priority
        )

    def list(
        self,
        *,
        page: PageRequest,
        involving: int | None = None,
        creator_id: int | None = None,
        assignee_id: int | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Page[Task]:
        query = self.session.query(TaskModel)
        if involving is not None:
            assigned = select(task_assignee_table.c.task_id).where(
                task_assignee_table.c.user_id == involving
            )
            query = query.filter(
                or_(TaskModel.creator_id == involving, TaskModel.id.in_(assigned))
            )
        if creator_id is not None:
            query = query.filter(TaskModel.creator_id == creator_id)
        if assignee_id is not None:
            query = query.filter(TaskModel.assignees.any(UserModel.id == assignee_id))
        query = apply_filters(query, TaskModel, status=status, priority=priority)

        total = query.count()
        models = (
            query.order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
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

    def create(self, task: Task) -> Task:
        model = TaskModel()
        self._apply_entity_to_model(model, task)
        model.creator_id = task.creator_id
        if task.created_at is not None:
            model.created_at = ensure_app_naive_datetime(task.created_at)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self._require_model(task.id)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def add_comment(self, task_id: int, *, user_id: int, text: str) -> Task:
        model = self._require_model(task_id)
        now = now_in_app_naive_datetime()
        model.comments.append(
            CommentModel(user_id=user_id, text=text, created_at=now, updated_at=now)
        )
        self.session.flush()
        return self._to_entity(model)

    def delete(self, task_id: int) -> None:
        model = self._require_model(task_id)
        self.session.delete(model)
        self.session.flush()

    def _require_model(self, task_id: int | None) -> TaskModel:
        model = self.session.get(TaskModel, task_id) if task_id is not None else None
        if model is None:
            raise NotFoundError(f"Task with id {task_id} not found")
        return model

    def _apply_entity_to_model(self, model: TaskModel, task: Task) -> None:
        model.title = task.title
        model.description = task.description
        model.status = task.status
        model.priority = task.priority
        model.assignees = load_users(self.session, task.assigned_to)

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
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


def comment_to_entity(model: CommentModel) -> Comment:
    return Comment(
        id=model.id,
        user_id=model.user_id,
        text=model.text,
        created_at=ensure_app_timezone(model.created_at),
        updated_at=ensure_app_timezone(model.updated_at),
    )


def load_users(session: Session, user_ids: Iterable[int]) -> list[UserModel]:
    """Return the user rows for ``user_ids`` (missing ids are skipped)."""

    ids = sorted({int(user_id) for user_id in user_ids})
    if not ids:
        return []
    return session.query(UserModel).filter(UserModel.id.in_(ids)).all()


def apply_filters(
    query: Query, model: type, *, status: str | None, priority: str | None
) -> Query:
    """Restrict ``query`` by status and priority when they are provided."""

    if status is not None:
        query = query.filter(model.status == status)
    if priority is not None:
        query = query.filter(model.priority == priority)
    return query


__all__ = ["TaskRepository", "apply_filters", "comment_to_entity", "load_users"]
