"""Shared fixtures: a throwaway SQLite database and an authenticated client."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "taskboard_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("NOTIFY_SELF_REMOVAL", None)

from taskboard.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from taskboard.domain.entities import User  # noqa: E402
from taskboard.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from taskboard.infrastructure.repositories import UserRepository  # noqa: E402
from taskboard.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
)

TEST_PASSWORD = "Secret123"
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user():
    """Insert a user and return the stored entity."""

    def _make_user(username: str) -> User:
        with SessionLocal() as db:
            user = UserRepository(db).create(
                User(
                    id=None,
                    username=username,
                    email=f"{username}@example.com",
                    password=_PASSWORD_HASH,
                )
            )
            db.commit()
        return user

    return _make_user


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def app():
    from main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
