"""Use case for authenticating a user."""

from sqlalchemy.orm import Session

from taskboard.domain.entities import User
from taskboard.infrastructure.repositories import UserRepository
from taskboard.infrastructure.security import verify_password


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """Return the user owning ``email`` when ``password`` matches."""

    user = UserRepository(session).get_by_email(email.strip().lower())
    if user is None or not verify_password(password, user.password):
        return None
    return user
