"""Tests for /auth endpoints and the session cookie guard."""

from types import SimpleNamespace

from jose import jwt
from sqlalchemy import func

from app.config import get_settings
from app.models import User
from app.utils.security import create_session_token
from tests.conftest import login, register


class TestRegister:
    """POST /auth/register."""

    def test_creates_user(self, client):
        response = register(client, "ana@example.com", "Ana")
        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "ana@example.com"
        assert body["name"] == "Ana"
        assert "passwordHash" not in body and "password" not in body

    def test_duplicate_email_rejected_without_new_row(self, client, session):
        assert register(client, "ana@example.com").status_code == 201
        response = register(client, "ana@example.com", "Other")
        assert response.status_code == 400
        assert response.json() == {"error": "User already exists"}
        assert session.query(func.count(User.id)).scalar() == 1

    def test_invalid_payload(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "not-an-email", "name": "A", "password": "123"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_password_is_hashed(self, client, session):
        register(client, "ana@example.com")
        user = session.query(User).filter(User.email == "ana@example.com").one()
        assert user.password_hash.startswith("$2")


class TestLogin:
    """POST /auth/login, /auth/logout and GET /auth/me."""

    def test_login_sets_http_only_cookie(self, client):
        register(client, "ana@example.com", "Ana")
        response = login(client, "ana@example.com")
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ana@example.com"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("token=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=604800" in set_cookie

    def test_me_after_login(self, client):
        register(client, "ana@example.com", "Ana")
        login(client, "ana@example.com")
        response = client.get("/auth/me")
        assert response.status_code == 200
        assert response.json()["name"] == "Ana"

    def test_wrong_password(self, client):
        register(client, "ana@example.com")
        response = login(client, "ana@example.com", "wrong-password")
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email_looks_like_wrong_password(self, client):
        response = login(client, "ghost@example.com")
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_logout_clears_session(self, client):
        register(client, "ana@example.com")
        login(client, "ana@example.com")
        assert client.post("/auth/logout").status_code == 200
        assert client.get("/auth/me").status_code == 401


class TestSessionGuard:
    """get_current_user dependency."""

    def test_no_cookie(self, client):
        response = client.get("/managers")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_garbage_token(self, make_client):
        c = make_client()
        c.cookies.set("token", "garbage")
        assert c.get("/auth/me").status_code == 401

    def test_token_for_deleted_user(self, make_client):
        c = make_client()
        ghost = SimpleNamespace(id=4242, email="x@example.com")
        c.cookies.set("token", create_session_token(ghost))
        assert c.get("/auth/me").status_code == 401

    def test_token_without_numeric_subject(self, make_client):
        c = make_client()
        settings = get_settings()
        token = jwt.encode({"sub": "abc"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        c.cookies.set("token", token)
        assert c.get("/auth/me").status_code == 401
