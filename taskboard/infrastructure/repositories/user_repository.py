"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskboard.domain.entities import User, UserSummary
from taskboard.infrastructure.models import UserModel
from taskboard.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide read and create operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def find_conflict(self, *, email: str, username: str) -> User | None:
        """Return a user that already owns ``email`` or ``username``."""

        model = (
            self.session.query(UserModel)
            .filter(or_(UserModel.email == email, UserModel.username == username))
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            password=user.password,
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def existing_ids(self, user_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``user_ids`` that resolve to a user."""

        unique = {int(user_id) for user_id in user_ids}
        if not unique:
            return set()
        rows = self.session.query(UserModel.id).filter(UserModel.id.in_(unique)).all()
        return {user_id for (user_id,) in rows}

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def get_summary(self, user_id: int) -> UserSummary | None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return None
        return UserSummary(id=model.id, username=model.username, email=model.email)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
