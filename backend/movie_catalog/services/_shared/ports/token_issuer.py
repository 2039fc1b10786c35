"""Token issuing port and the tagged verification failure it raises."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class TokenErrorKind(str, Enum):
    """Why a token failed verification. Set once, where the token is decoded."""

    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    OTHER = "other"


class TokenVerificationError(Exception):
    """
    Verification failure carrying its :class:`TokenErrorKind`.

    :param kind: Failure class callers branch on.
    :param detail: Diagnostic text for logs (never shown to clients).
    """

    def __init__(self, kind: TokenErrorKind, detail: str = "") -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Verified token payload."""

    user_id: int
    issued_at: datetime
    expires_at: datetime
    jti: str | None = None


class TokenIssuer(Protocol):
    """Port for minting and verifying access/refresh tokens."""

    def generate_access_token(self, user_id: int) -> str: ...

    def generate_refresh_token(self, user_id: int) -> str: ...

    def verify_token(self, token: str, *, is_refresh: bool = False) -> TokenClaims: ...
