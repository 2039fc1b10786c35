# movie_catalog/services/auth/service.py
from __future__ import annotations

import logging

from movie_catalog.services._shared.base import BaseService
from movie_catalog.services._shared.errors import (
    BadRequestError,
    InternalError,
    UnauthorizedError,
)
from movie_catalog.services._shared.ports import (
    PasswordHasher,
    TokenErrorKind,
    TokenIssuer,
    TokenVerificationError,
)
from movie_catalog.services.auth.dto import (
    LoginIn,
    MessageOut,
    TokenPairOut,
    UserPublicOut,
)
from movie_catalog.services.auth.sessions import SessionManager

REFRESH_TOKEN_NOT_FOUND = "Refresh token not found"


class AuthenticationService(BaseService):
    """
    Authentication lifecycle: login, logout, refresh and profile lookup.

    State per user: anonymous → (login) → authenticated with one live session
    → (refresh) → authenticated, session rotated → (logout) → anonymous.

    Refresh requires BOTH a stored session row matching the token AND a valid
    signature/expiry. The store check runs first.
    """

    def __init__(
        self,
        *,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        session_manager: SessionManager,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param password_hasher: Verifies submitted passwords.
        :param token_issuer: Mints and verifies access/refresh tokens.
        :param session_manager: Persists and validates refresh sessions.
        :param logger: Optional logger; defaults to the module logger.
        """
        super().__init__(logger=logger)
        self.hasher = password_hasher
        self.tokens = token_issuer
        self.sessions = session_manager

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Unknown email and wrong password fail with the same message.

        :raises UnauthorizedError: If credentials are invalid.
        """
        with self.ro_uow() as uow:
            user = uow.users.find_by_email(dto.email)
            user_id = user.id if user is not None else None
            password_hash = user.password_hash if user is not None else None

        if user_id is None or password_hash is None:
            raise UnauthorizedError("Invalid credentials")
        if not self.hasher.compare(dto.password, password_hash):
            raise UnauthorizedError("Invalid credentials")

        self.sessions.cleanup_expired_sessions(user_id)
        pair = self._mint_pair(user_id)
        self.sessions.replace_user_sessions(user_id, pair.refresh_token)
        self.log.info("User logged in", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str) -> MessageOut:
        """
        Revoke the session bound to ``refresh_token``.

        A second logout with the same token fails, since the row is gone.

        :raises UnauthorizedError: If the token is empty or has no session.
        """
        if not refresh_token:
            raise UnauthorizedError(REFRESH_TOKEN_NOT_FOUND)
        session = self.sessions.validate_session(refresh_token)
        self.sessions.delete_by_token(refresh_token)
        self.log.info("User logged out successfully", extra={"user_id": session.user_id})
        return MessageOut(message="Logged out successfully")

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh_token(self, refresh_token: str) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        Error boundary
        --------------
        :class:`BadRequestError` and :class:`UnauthorizedError` propagate
        unchanged. Anything else, including an unclassified verification
        failure, is logged and surfaced as :class:`InternalError` with a
        generic message.
        """
        if not refresh_token:
            raise BadRequestError("Refresh token is required")

        try:
            self.sessions.validate_session(refresh_token)
            user_id = self._verify_refresh(refresh_token)

            with self.ro_uow() as uow:
                user = uow.users.find_by_id(user_id)
                if user is None:
                    raise UnauthorizedError("User not found")

            pair = self._mint_pair(user_id)
            self.sessions.replace_user_sessions(user_id, pair.refresh_token)
            return pair
        except (UnauthorizedError, BadRequestError):
            raise
        except Exception as exc:
            self.log.error("Refresh Token Error", exc_info=True)
            raise InternalError("An unexpected error occurred") from exc

    def _verify_refresh(self, refresh_token: str) -> int:
        try:
            claims = self.tokens.verify_token(refresh_token, is_refresh=True)
        except TokenVerificationError as exc:
            if exc.kind is TokenErrorKind.EXPIRED:
                raise UnauthorizedError("Refresh token has expired") from exc
            if exc.kind is TokenErrorKind.INVALID_SIGNATURE:
                raise UnauthorizedError("Invalid refresh token") from exc
            raise InternalError("Token verification failed") from exc
        return claims.user_id

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def get_user_info(self, user_id: int) -> UserPublicOut:
        """
        Return the public profile of ``user_id``.

        :raises BadRequestError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.find_by_id(user_id)
            if user is None:
                raise BadRequestError("User not found")
            return UserPublicOut(id=user.id, name=user.name, email=user.email)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _mint_pair(self, user_id: int) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.tokens.generate_access_token(user_id),
            refresh_token=self.tokens.generate_refresh_token(user_id),
        )
