# tests/conftest.py

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskexchange import database
from taskexchange.core.security import create_access_token
from taskexchange.database import JsonDatabase
from taskexchange.models.base import utcnow
from taskexchange.models.user import Role, User
from taskexchange.services.task_store import TaskStore
from taskexchange.services.users import UserService
from taskexchange.utils.password import hash_password


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "db.json"


@pytest.fixture()
def db(data_file: Path) -> JsonDatabase:
    return JsonDatabase(data_file)


@pytest.fixture()
def store(db: JsonDatabase) -> TaskStore:
    return TaskStore(db)


@pytest.fixture()
def make_user(db: JsonDatabase):
    """Factory creating users straight through the service layer."""
    users = UserService(db)

    def _make(name: str, role: Role = Role.USER, password: str = "password123") -> User:
        email = f"{name.lower().replace(' ', '.')}@example.com"
        return users.create_user(
            name=name, email=email, password_hash=hash_password(password), role=role
        )

    return _make


@pytest.fixture()
def alice(make_user) -> User:
    return make_user("Alice")


@pytest.fixture()
def bob(make_user) -> User:
    return make_user("Bob")


@pytest.fixture()
def carol(make_user) -> User:
    return make_user("Carol")


@pytest.fixture()
def make_task(store: TaskStore):
    def _make(poster: User, **overrides):
        fields = dict(
            title="Fix sink",
            description="Kitchen sink is leaking under the cabinet",
            category="plumbing",
            urgency="medium",
            location="12 Elm Street",
            deadline=utcnow() + timedelta(days=2),
        )
        fields.update(overrides)
        return store.create_task(poster_id=poster.id, **fields)

    return _make


@pytest.fixture()
def client(db: JsonDatabase, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """
    API client bound to the per-test database.

    The module-level singleton is swapped rather than overriding the
    dependency, so get_current_user and the startup hook see the same file.
    """
    from taskexchange.main import app

    monkeypatch.setattr(database, "_db", db)
    return TestClient(app)


@pytest.fixture()
def auth_headers():
    """Bearer header for a user, as the login endpoint would issue it."""

    def _headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers
