"""HTTP tests for the authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from freezegun import freeze_time
from movie_catalog.models import UserSession
from sqlalchemy import select
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.utils import bearer

API = "/api/v1/auth"
COOKIE = "refresh_token"


def _set_cookie_header(resp) -> str:
    return next(h for h in resp.headers.getlist("Set-Cookie") if h.startswith(f"{COOKIE}="))


class TestRegister:
    def test_register_returns_token_and_sets_cookie(self, client, session):
        resp = client.post(
            f"{API}/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"},
        )

        assert resp.status_code == 201
        body = resp.get_json()
        assert set(body) == {"access_token"}
        header = _set_cookie_header(resp)
        assert "HttpOnly" in header
        assert "Path=/" in header
        assert "SameSite=Lax" in header
        assert session.scalars(select(UserSession)).one().token == client.get_cookie(COOKIE).value

    def test_duplicate_email(self, client):
        UserFactory(email="ana@example.com")
        resp = client.post(
            f"{API}/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"},
        )
        assert resp.status_code == 400
        assert resp.get_json()["detail"] == "User already exists."

    def test_invalid_payload(self, client):
        resp = client.post(f"{API}/register", json={"email": "nope", "password": "short"})
        assert resp.status_code == 422
        assert resp.mimetype == "application/problem+json"
        errors = resp.get_json()["details"]["errors"]
        assert {"name", "email", "password"} <= set(errors)


class TestLogin:
    def test_login_sets_cookie(self, client, user):
        resp = client.post(f"{API}/login", json={"email": user.email, "password": DEFAULT_PASSWORD})
        assert resp.status_code == 200
        assert resp.get_json()["access_token"]
        assert client.get_cookie(COOKIE) is not None

    def test_wrong_password(self, client, user):
        resp = client.post(f"{API}/login", json={"email": user.email, "password": "x"})
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "Invalid credentials"
        assert client.get_cookie(COOKIE) is None

    def test_second_login_replaces_session(self, client, session, user):
        for _ in range(2):
            client.post(f"{API}/login", json={"email": user.email, "password": DEFAULT_PASSWORD})
        tokens = session.scalars(select(UserSession.token)).all()
        assert tokens == [client.get_cookie(COOKIE).value]


class TestRefresh:
    def test_refresh_with_cookie_rotates(self, client, access_token):
        old = client.get_cookie(COOKIE).value

        resp = client.post(f"{API}/refresh")

        assert resp.status_code == 200
        assert resp.get_json()["access_token"]
        assert client.get_cookie(COOKIE).value != old

        # The rotated-out token is dead
        client.set_cookie(COOKIE, old)
        assert client.post(f"{API}/refresh").status_code == 401

    def test_refresh_with_header_fallback(self, app, db, access_token, client):
        token = client.get_cookie(COOKIE).value
        other = app.test_client()
        resp = other.post(f"{API}/refresh", headers={"Refresh-Token": token})
        assert resp.status_code == 200

    def test_missing_token(self, client):
        resp = client.post(f"{API}/refresh")
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "Refresh token not found"

    def test_access_token_is_not_a_refresh_token(self, client, access_token):
        client.set_cookie(COOKIE, access_token)
        resp = client.post(f"{API}/refresh")
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "Invalid session or already logged out"

    def test_expired_refresh_token(self, app, client, user):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            client.post(f"{API}/login", json={"email": user.email, "password": DEFAULT_PASSWORD})
            frozen.tick(app.config["REFRESH_TOKEN_EXPIRES"] + timedelta(seconds=1))
            resp = client.post(f"{API}/refresh")
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "Refresh token has expired"


class TestLogout:
    def test_logout_clears_cookie_and_session(self, client, session, access_token):
        resp = client.post(f"{API}/logout")

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Logged out successfully"}
        assert client.get_cookie(COOKIE) is None
        assert session.scalars(select(UserSession)).all() == []

    def test_logout_without_token(self, client):
        assert client.post(f"{API}/logout").status_code == 401


class TestMe:
    def test_get_and_post(self, client, user, auth_header):
        for method in (client.get, client.post):
            resp = method(f"{API}/me", headers=auth_header)
            assert resp.status_code == 200
            assert resp.get_json() == {"id": user.id, "name": user.name, "email": user.email}

    def test_requires_bearer(self, client):
        resp = client.get(f"{API}/me")
        assert resp.status_code == 401
        assert resp.mimetype == "application/problem+json"

    def test_rejects_garbage_token(self, client):
        resp = client.get(f"{API}/me", headers=bearer("not-a-jwt"))
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "Invalid token"

    def test_rejects_refresh_token_as_bearer(self, client, access_token):
        refresh = client.get_cookie(COOKIE).value
        assert client.get(f"{API}/me", headers=bearer(refresh)).status_code == 401
