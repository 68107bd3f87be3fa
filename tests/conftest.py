"""
Shared fixtures for the shared ledger API tests.

Every test gets a fresh in-memory SQLite database.  ``StaticPool`` keeps a
single connection so the schema created by the fixture is visible to the
sessions opened by request handlers.
"""

import os

# Settings are cached on first use; configure them before importing the app.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.config import get_settings
from app.database import Database
from app.main import create_app

get_settings.cache_clear()

PASSWORD = "secret123"


@pytest.fixture
def database():
    db = Database("sqlite://", poolclass=StaticPool)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client(app):
    """Factory for independent clients (separate cookie jars)."""
    clients = []

    def _make() -> TestClient:
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()


def register(client: TestClient, email: str, name: str = "Tester", password: str = PASSWORD):
    return client.post(
        "/auth/register",
        json={"email": email, "name": name, "password": password},
    )


def login(client: TestClient, email: str, password: str = PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


@pytest.fixture
def user_client(make_client):
    """Factory returning a client already logged in as a fresh user."""

    def _make(email: str, name: str = "Tester") -> TestClient:
        c = make_client()
        assert register(c, email, name).status_code == 201
        assert login(c, email).status_code == 200
        return c

    return _make


@pytest.fixture
def alice(user_client):
    return user_client("alice@example.com", "Alice")


@pytest.fixture
def bob(user_client):
    return user_client("bob@example.com", "Bob")


def create_manager(client: TestClient, name: str = "Casa", description: str | None = None) -> dict:
    response = client.post("/managers", json={"name": name, "description": description})
    assert response.status_code == 201, response.text
    return response.json()


def create_month(client: TestClient, manager_id: int, start_date: str = "2024-01-01T00:00:00Z") -> dict:
    response = client.post(f"/managers/{manager_id}/months", json={"startDate": start_date})
    assert response.status_code == 201, response.text
    return response.json()
