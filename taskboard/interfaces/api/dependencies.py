"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.requests import HTTPConnection
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import FanoutEngine
from taskboard.config import get_settings
from taskboard.domain.entities import User
from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.notifications import NotificationPublisher, SessionRegistry
from taskboard.infrastructure.repositories import UserRepository
from taskboard.infrastructure.security import user_id_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        user_id = user_id_from_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_session_registry(connection: HTTPConnection) -> SessionRegistry:
    """Return the registry owned by the application serving ``connection``."""

    return connection.app.state.session_registry


def get_publisher(connection: HTTPConnection) -> NotificationPublisher:
    return connection.app.state.notification_publisher


def get_fanout_engine(
    publisher: NotificationPublisher = Depends(get_publisher),
) -> FanoutEngine:
    """Return a fan-out engine that pushes through the application's publisher."""

    return FanoutEngine(
        publisher,
        notify_self_removal=get_settings().notify_self_removal,
    )
