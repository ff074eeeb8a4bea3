"""
Shared fixtures.

Settings are read from the environment when ``config.settings`` is first
imported, so the test database and token secret are set up before any
application module is loaded.
"""

import os
import tempfile
from pathlib import Path

_DB_PATH = Path(tempfile.mkdtemp(prefix="auth-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["TOKEN_SECRET"] = "test-token-secret"
os.environ.setdefault("TOKEN_EXPIRY_SECONDS", "3600")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from database.models import Base
from database.session import async_session_factory

# Schema resets go through the sync sqlite3 driver on the same file.
_schema_engine = create_engine(f"sqlite:///{_DB_PATH}")

TEST_USER = {
    "name": "Test User",
    "email": "t@test.com",
    "password": "password",
}


@pytest.fixture(autouse=True)
def fresh_database():
    """Drop and recreate every table so each test starts empty."""
    Base.metadata.drop_all(_schema_engine)
    Base.metadata.create_all(_schema_engine)
    yield


@pytest_asyncio.fixture()
async def db():
    async with async_session_factory() as session:
        yield session


@pytest.fixture()
def client():
    from main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def registered_user(client):
    response = client.post("/api/auth/signup", json=TEST_USER)
    assert response.status_code == 201
    return response.json()
