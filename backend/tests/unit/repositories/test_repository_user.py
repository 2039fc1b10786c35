# tests/unit/repositories/test_repository_user.py
from __future__ import annotations

import pytest
from movie_catalog.repositories import UserRepository
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


class TestUserRepository:
    def test_create_assigns_id_and_trims(self, repo, session):
        user = repo.create(name="  Amr ", email=" a@x.com ", password_hash="h")
        session.commit()
        assert user.id is not None
        assert user.name == "Amr"
        assert user.email == "a@x.com"

    def test_find_by_email_is_exact_and_case_sensitive(self, repo):
        UserFactory(email="Case@x.com")
        assert repo.find_by_email("Case@x.com") is not None
        assert repo.find_by_email("  Case@x.com ") is not None
        assert repo.find_by_email("case@x.com") is None
        assert repo.exists_by_email("Case@x.com") is True
        assert repo.exists_by_email("nobody@x.com") is False

    def test_find_by_id_defers_password_hash(self, repo, session):
        user_id = UserFactory().id
        session.expunge_all()
        found = repo.find_by_id(user_id)
        assert found is not None
        assert "password_hash" in inspect(found).unloaded
        assert repo.find_by_id(999_999) is None

    def test_duplicate_email_hits_unique_constraint(self, repo, session):
        UserFactory(email="dup@x.com")
        with pytest.raises(IntegrityError):
            repo.create(name="Other", email="dup@x.com", password_hash="h")
        session.rollback()

    def test_invalid_email_rejected_by_model(self, repo):
        with pytest.raises(ValueError):
            repo.create(name="X", email="no-at-sign", password_hash="h")
