"""Use case for registering users."""

from sqlalchemy.orm import Session

from taskboard.domain.entities import User
from taskboard.domain.errors import ConflictError
from taskboard.infrastructure.repositories import UserRepository
from taskboard.infrastructure.security import get_password_hash
from taskboard.infrastructure.unit_of_work import UnitOfWork
from taskboard.utils import now_in_app_timezone

from .validators import ensure_password_strength, normalize_email, normalize_username


def register_user(session: Session, *, username: str, email: str, password: str) -> User:
    """Create a new user ensuring unique email addresses and usernames."""

    username = normalize_username(username)
    email = normalize_email(email)
    ensure_password_strength(password)

    with UnitOfWork(session) as uow:
        repository = UserRepository(uow.session)
        existing = repository.find_conflict(email=email, username=username)
        if existing is not None:
            field = "email" if existing.email == email else "username"
            raise ConflictError(f"That {field} is already registered")

        user = repository.create(
            User(
                id=None,
                username=username,
                email=email,
                password=get_password_hash(password),
                created_at=now_in_app_timezone(),
            )
        )
        uow.commit()
    return user
