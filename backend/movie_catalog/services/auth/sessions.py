# movie_catalog/services/auth/sessions.py
from __future__ import annotations

import logging
from datetime import timedelta

from movie_catalog.models.session import UserSession
from movie_catalog.services._shared.base import BaseService
from movie_catalog.services._shared.errors import UnauthorizedError
from movie_catalog.services.auth.dto import SessionOut

INVALID_SESSION_MESSAGE = "Invalid session or already logged out"


class SessionManager(BaseService):
    """
    Session lifecycle over the ``sessions`` table.

    A session row only proves that a refresh token was issued and not yet
    revoked; token signature and expiry are checked separately by the token
    issuer. Each public operation runs in its own transaction.
    """

    #: Sessions older than this (by ``updated_at``) are swept on login.
    EXPIRATION_TIME = timedelta(hours=1)

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        super().__init__(logger=logger)

    @staticmethod
    def _to_out(row: UserSession) -> SessionOut:
        return SessionOut(
            id=row.id,
            user_id=row.user_id,
            token=row.token,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def create_session(self, user_id: int, refresh_token: str) -> SessionOut:
        with self.rw_uow() as uow:
            row = uow.sessions.create(user_id=user_id, token=refresh_token)
            out = self._to_out(row)
        self.log.debug("Session created", extra={"user_id": user_id})
        return out

    def validate_session(self, refresh_token: str) -> SessionOut:
        """
        Return the session bound to ``refresh_token``.

        :raises UnauthorizedError: When no row matches (never issued, rotated
            away or logged out).
        """
        with self.ro_uow() as uow:
            row = uow.sessions.find_by_token(refresh_token)
            if row is None:
                raise UnauthorizedError(INVALID_SESSION_MESSAGE)
            return self._to_out(row)

    def delete_by_token(self, refresh_token: str) -> int:
        with self.rw_uow() as uow:
            return uow.sessions.delete_by_token(refresh_token)

    def delete_by_user_id(self, user_id: int) -> int:
        with self.rw_uow() as uow:
            return uow.sessions.delete_by_user_id(user_id)

    def cleanup_expired_sessions(self, user_id: int) -> int:
        with self.rw_uow() as uow:
            deleted = uow.sessions.delete_expired_sessions(user_id, self.EXPIRATION_TIME)
        if deleted:
            self.log.info("Expired sessions removed", extra={"user_id": user_id, "count": deleted})
        return deleted

    def replace_user_sessions(self, user_id: int, refresh_token: str) -> SessionOut:
        """
        Delete every session of the user and create one for ``refresh_token``.

        Both statements share one transaction. Two concurrent calls for the
        same user can still each commit a row; no lock serializes them.
        """
        with self.rw_uow() as uow:
            uow.sessions.delete_by_user_id(user_id)
            row = uow.sessions.create(user_id=user_id, token=refresh_token)
            return self._to_out(row)
