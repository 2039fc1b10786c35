"""User repository: identity lookups and creation."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import defer

from movie_catalog.models.user import User
from movie_catalog.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never hashes passwords or issues tokens; callers pass an already
    computed hash to :meth:`create`.
    """

    model = User

    def _filterable_fields(self):
        return {"email": User.email, "name": User.name}

    def find_by_email(self, email: str) -> User | None:
        """Fetch a user by exact email (includes the password hash).

        :param email: Email as typed by the caller; only surrounding whitespace is ignored.
        :returns: User or ``None``.
        """
        stmt = select(User).where(User.email == email.strip())
        return self.session.execute(stmt).scalars().first()

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.strip())
        return self.session.execute(stmt).first() is not None

    def find_by_id(self, user_id: int) -> User | None:
        """Fetch a user by id without loading the password hash column."""
        stmt = select(User).options(defer(User.password_hash)).where(User.id == user_id)
        return self.session.execute(stmt).scalars().first()

    def create(self, *, name: str, email: str, password_hash: str) -> User:
        """Insert a user and flush to obtain its id."""
        return self.add(User(name=name, email=email, password_hash=password_hash))
