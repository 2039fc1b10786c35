"""Pytest fixtures for an isolated database and application per test.

The application is built once per session with :class:`TestingConfig`
(in-memory SQLite, low bcrypt cost, no Redis). Each test gets a fresh schema,
so data written through committing units of work never leaks between cases.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from movie_catalog.core.config import TestingConfig
from movie_catalog.core.extensions import db as _db  # Flask-SQLAlchemy instance
from movie_catalog.factory import create_app  # application factory under test
from movie_catalog.infra.jwt.jwt_token_issuer import JWTTokenIssuer
from movie_catalog.infra.security.bcrypt_password_hasher import BcryptPasswordHasher
from movie_catalog.services._shared.ports import InMemoryCacheStore
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.utils import bearer


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create all tables for one test and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application, inside an
        application context.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session the units of work also use."""
    return db.session


@pytest.fixture()
def client(app, db):
    """Flask test client sharing the test's application context."""
    return app.test_client()


@pytest.fixture()
def redis_cache(app):
    """Install a fakeredis client as the app's cache backend for one test."""
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server)
    app.extensions["redis_client"] = client
    try:
        yield client
    finally:
        app.extensions.pop("redis_client", None)


@pytest.fixture()
def memory_cache():
    return InMemoryCacheStore()


@pytest.fixture()
def password_hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture()
def token_issuer():
    return JWTTokenIssuer(
        access_secret=TestingConfig.JWT_SECRET,
        refresh_secret=TestingConfig.RT_SECRET,
    )


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the Flask-scoped session ---------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the per-test session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)


# -- HTTP helpers ---------------------------------------------------------------
@pytest.fixture()
def user():
    """Persisted account whose password is :data:`DEFAULT_PASSWORD`."""
    return UserFactory(email="viewer@example.com")


@pytest.fixture()
def access_token(client, user) -> str:
    """Log ``user`` in through the API; the client keeps the refresh cookie."""
    resp = client.post(
        "/api/v1/auth/login", json={"email": user.email, "password": DEFAULT_PASSWORD}
    )
    assert resp.status_code == 200
    return resp.get_json()["access_token"]


@pytest.fixture()
def auth_header(access_token) -> dict[str, str]:
    return bearer(access_token)
