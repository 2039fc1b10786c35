# movie_catalog/infra/jwt/jwt_token_issuer.py
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from movie_catalog.services._shared.ports import (
    TokenClaims,
    TokenErrorKind,
    TokenIssuer,
    TokenVerificationError,
)


class JWTTokenIssuer(TokenIssuer):
    """
    HS256 tokens signed with two independent secrets.

    Access and refresh tokens carry the same ``{"id": user_id}`` payload; the
    separate secrets are what keep one from being accepted as the other.
    Every token also gets ``iat``, ``exp`` and a random ``jti``, so two tokens
    minted in the same second still differ.
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_expires: timedelta = timedelta(hours=1),
        refresh_expires: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
        logger: logging.Logger | None = None,
    ) -> None:
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ.")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self.algorithm = algorithm
        self.log = logger or logging.getLogger(__name__)

    def _sign(self, user_id: int, secret: str, lifetime: timedelta) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def generate_access_token(self, user_id: int) -> str:
        return self._sign(user_id, self._access_secret, self.access_expires)

    def generate_refresh_token(self, user_id: int) -> str:
        return self._sign(user_id, self._refresh_secret, self.refresh_expires)

    def verify_token(self, token: str, *, is_refresh: bool = False) -> TokenClaims:
        """
        Verify signature and expiry with the secret selected by ``is_refresh``.

        :raises TokenVerificationError: ``EXPIRED`` for an elapsed ``exp``,
            ``INVALID_SIGNATURE`` for a malformed token or wrong key, ``OTHER``
            for any remaining failure (missing claims, bad ``iat``...).
        """
        secret = self._refresh_secret if is_refresh else self._access_secret
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "id"]},
            )
        except jwt.ExpiredSignatureError as exc:
            self.log.warning("Token verification failed: expired")
            raise TokenVerificationError(TokenErrorKind.EXPIRED, str(exc)) from exc
        except jwt.DecodeError as exc:
            # InvalidSignatureError is a DecodeError subclass
            self.log.warning("Token verification failed: invalid signature or malformed")
            raise TokenVerificationError(TokenErrorKind.INVALID_SIGNATURE, str(exc)) from exc
        except jwt.PyJWTError as exc:
            self.log.warning("Token verification failed: %s", type(exc).__name__)
            raise TokenVerificationError(TokenErrorKind.OTHER, str(exc)) from exc

        try:
            user_id = int(payload["id"])
        except (TypeError, ValueError) as exc:
            raise TokenVerificationError(TokenErrorKind.OTHER, "Invalid id claim") from exc

        return TokenClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
            jti=payload.get("jti"),
        )
