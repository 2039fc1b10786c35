"""Factories for users and their refresh sessions."""

from __future__ import annotations

import factory
from movie_catalog.infra.security.bcrypt_password_hasher import BcryptPasswordHasher
from movie_catalog.models import User, UserSession

from . import BaseFactory

DEFAULT_PASSWORD = "Password123!"

_hasher = BcryptPasswordHasher(rounds=4)


class UserFactory(BaseFactory):
    """Persisted user whose ``password`` param is hashed with bcrypt."""

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password_hash = factory.LazyAttribute(lambda o: _hasher.hash(o.password))


class UserSessionFactory(BaseFactory):
    class Meta:
        model = UserSession

    user = factory.SubFactory(UserFactory)
    token = factory.Faker("sha256")
