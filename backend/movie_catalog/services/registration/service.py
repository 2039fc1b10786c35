"""
RegistrationService
===================

Creates a user, mints its first token pair and stores the session row.

The session is written directly through the session repository, without the
"delete existing sessions" step that login and refresh perform. A brand-new
user cannot own sessions yet, so nothing is lost.
"""

from __future__ import annotations

import logging

from movie_catalog.services._shared.base import BaseService
from movie_catalog.services._shared.errors import BadRequestError, InternalError
from movie_catalog.services._shared.ports import PasswordHasher, TokenIssuer
from movie_catalog.services.auth.dto import TokenPairOut
from movie_catalog.services.registration.dto import RegisterIn


class RegistrationService(BaseService):
    """Orchestrates account creation."""

    def __init__(
        self,
        *,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self.hasher = password_hasher
        self.tokens = token_issuer

    def register(self, dto: RegisterIn) -> TokenPairOut:
        """
        Register a user and return its first token pair.

        :param dto: Registration input.
        :returns: Access/refresh token pair.
        :raises BadRequestError: If the email is already registered.
        :raises InternalError: If anything fails while creating the user,
            minting tokens or storing the session.
        """
        self.log.info("Registering new user with email")

        with self.ro_uow() as uow:
            taken = uow.users.exists_by_email(dto.email)
        if taken:
            raise BadRequestError("User already exists.")

        password_hash = self.hasher.hash(dto.password)

        try:
            with self.rw_uow() as uow:
                user = uow.users.create(name=dto.name, email=dto.email, password_hash=password_hash)
                pair = TokenPairOut(
                    access_token=self.tokens.generate_access_token(user.id),
                    refresh_token=self.tokens.generate_refresh_token(user.id),
                )
                uow.sessions.create(user_id=user.id, token=pair.refresh_token)
        except Exception as exc:
            self.log.error("Error creating user", exc_info=True)
            raise InternalError("Error creating user. Please try again later.") from exc

        return pair
