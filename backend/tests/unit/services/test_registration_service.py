# tests/unit/services/test_registration_service.py
from __future__ import annotations

import pytest
from movie_catalog.repositories import SessionRepository, UserRepository
from movie_catalog.services._shared.errors import BadRequestError, InternalError
from movie_catalog.services.registration.dto import RegisterIn
from movie_catalog.services.registration.service import RegistrationService


@pytest.fixture()
def service(password_hasher, token_issuer) -> RegistrationService:
    return RegistrationService(password_hasher=password_hasher, token_issuer=token_issuer)


def test_register_returns_tokens_and_persists_user_and_session(
    service, session, password_hasher, token_issuer
):
    pair = service.register(RegisterIn(name="Amr", email="a@x.com", password="Password123!"))

    assert pair.access_token and pair.refresh_token
    user = UserRepository(session=session).find_by_email("a@x.com")
    assert user is not None
    assert user.name == "Amr"
    assert user.password_hash != "Password123!"
    assert password_hasher.compare("Password123!", user.password_hash)
    assert token_issuer.verify_token(pair.access_token).user_id == user.id

    rows = SessionRepository(session=session).find_by_user_id(user.id)
    assert [r.token for r in rows] == [pair.refresh_token]


def test_duplicate_email_is_rejected(service):
    service.register(RegisterIn(name="Amr", email="a@x.com", password="Password123!"))
    with pytest.raises(BadRequestError) as excinfo:
        service.register(RegisterIn(name="Other", email="a@x.com", password="Password456!"))
    assert str(excinfo.value) == "User already exists."


def test_failure_during_creation_is_generic_and_rolled_back(service, session, monkeypatch):
    def _boom(self, *, user_id, token):
        raise RuntimeError("disk full")

    monkeypatch.setattr(SessionRepository, "create", _boom)
    with pytest.raises(InternalError) as excinfo:
        service.register(RegisterIn(name="Amr", email="a@x.com", password="Password123!"))

    assert str(excinfo.value) == "Error creating user. Please try again later."
    assert UserRepository(session=session).find_by_email("a@x.com") is None
