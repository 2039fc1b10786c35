"""Session repository: persistence of issued refresh tokens."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import delete, select

from movie_catalog.models.base import utcnow
from movie_catalog.models.session import UserSession
from movie_catalog.repositories.base import BaseRepository


class SessionRepository(BaseRepository[UserSession]):
    """Persistence-only repository for :class:`UserSession`.

    Deletions are bulk ``DELETE`` statements returning the affected row count,
    so they are idempotent: deleting something already gone reports ``0``.
    """

    model = UserSession

    def _filterable_fields(self):
        return {"user_id": UserSession.user_id, "token": UserSession.token}

    def create(self, *, user_id: int, token: str) -> UserSession:
        return self.add(UserSession(user_id=user_id, token=token))

    def find_by_token(self, token: str) -> UserSession | None:
        stmt = select(UserSession).where(UserSession.token == token)
        return self.session.execute(stmt).scalars().first()

    def find_by_user_id(self, user_id: int) -> list[UserSession]:
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .order_by(UserSession.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def delete_by_token(self, token: str) -> int:
        stmt = delete(UserSession).where(UserSession.token == token)
        return self._execute_delete(stmt)

    def delete_by_user_id(self, user_id: int) -> int:
        stmt = delete(UserSession).where(UserSession.user_id == user_id)
        return self._execute_delete(stmt)

    def delete_expired_sessions(
        self,
        user_id: int,
        max_age: timedelta,
        *,
        now: datetime | None = None,
    ) -> int:
        """Delete the user's sessions last updated before ``now - max_age``.

        :param user_id: Owner of the sessions to sweep.
        :param max_age: Maximum tolerated age measured from ``updated_at``.
        :param now: Reference time (defaults to current UTC time).
        :returns: Number of deleted rows.
        """
        cutoff = (now or utcnow()) - max_age
        stmt = delete(UserSession).where(
            UserSession.user_id == user_id,
            UserSession.updated_at < cutoff,
        )
        return self._execute_delete(stmt)

    def _execute_delete(self, stmt) -> int:
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return int(result.rowcount or 0)
