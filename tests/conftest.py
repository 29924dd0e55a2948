"""Shared fixtures: a throwaway SQLite database and factories for recipients."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="yumix-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["DEBUG"] = "false"

from yumix.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from yumix.domain.entities import Admin, Audience, Notification, User  # noqa: E402
from yumix.infrastructure import database  # noqa: E402
from yumix.infrastructure.repositories import (  # noqa: E402
    AdminRepository,
    NotificationRepository,
    UserRepository,
)
from yumix.infrastructure.security import build_subject, create_access_token  # noqa: E402
from yumix.utils import now_in_app_timezone  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    """Recreate every table so each test starts from an empty database."""

    from yumix.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_admin(session):
    counter = {"value": 0}

    def factory(*, preferences=None, status="active", name=None) -> Admin:
        counter["value"] += 1
        index = counter["value"]
        return AdminRepository(session).create(
            Admin(
                id=None,
                name=name or f"Admin {index}",
                email=f"admin{index}@example.com",
                password="hashed",
                status=status,
                preferences=preferences,
            )
        )

    return factory


@pytest.fixture()
def make_user(session):
    counter = {"value": 0}

    def factory(*, preferences=None, name=None) -> User:
        counter["value"] += 1
        index = counter["value"]
        return UserRepository(session).create(
            User(
                id=None,
                name=name or f"User {index}",
                email=f"user{index}@example.com",
                password="hashed",
                preferences=preferences,
            )
        )

    return factory


@pytest.fixture()
def add_notification(session):
    """Insert a notification directly, optionally backdated by ``days_ago``."""

    def factory(
        audience: Audience,
        recipient_id: int,
        *,
        days_ago: float = 0,
        message: str = "Hello",
        type: str = "info",
        title: str | None = None,
    ) -> Notification:
        return NotificationRepository(session, audience).create(
            Notification(
                id=None,
                recipient_id=recipient_id,
                title=title,
                message=message,
                type=type,
                created_at=now_in_app_timezone() - timedelta(days=days_ago),
            )
        )

    return factory


@pytest.fixture()
def auth_headers():
    def build(kind: str, principal_id: int) -> dict[str, str]:
        token = create_access_token({"sub": build_subject(kind, principal_id)})
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from yumix.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
