"""
conftest.py: shared fixtures for the Bookshelf API tests.

Every test runs against a fresh SQLite database file: tables are
created before the test and dropped after it. Settings are pointed
at that file through the environment before any app module is imported.
"""

import asyncio
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="bookshelf-tests-")
os.environ["DATABASE_URL_OVERRIDE"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["APP_ENV"] = "test"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["AUTH_ENABLED"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from bookshelf.core.config import settings
from bookshelf.db.session import create_tables, drop_tables
from bookshelf.main import app
from tests.helpers import bearer, login, register


@pytest.fixture(autouse=True)
def database():
    """Create all tables, run the test, then drop them."""
    asyncio.run(create_tables())
    yield
    asyncio.run(drop_tables())


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def auth_disabled(monkeypatch):
    """Turn the token layer off for one test."""
    monkeypatch.setattr(settings, "AUTH_ENABLED", False)


@pytest.fixture()
def user(client):
    """A registered user plus auth headers for it."""
    data = register(client)
    token = login(client)
    return {"id": data["id"], "token": token, "headers": bearer(token)}


@pytest.fixture()
def other_user(client):
    data = register(client, name="Other Person", email="other@example.com", password="secret99")
    token = login(client, email="other@example.com", password="secret99")
    return {"id": data["id"], "token": token, "headers": bearer(token)}
