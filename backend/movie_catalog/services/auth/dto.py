# movie_catalog/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email, compared exactly.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT (1 hour).
    :type access_token: str
    :param refresh_token: Encoded refresh JWT (7 days), bound to a session row.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class MessageOut:
    """Plain acknowledgement returned by logout."""

    message: str


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """User identity without credentials."""

    id: int
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class SessionOut:
    """Snapshot of a persisted refresh-token session."""

    id: int
    user_id: int
    token: str
    created_at: datetime
    updated_at: datetime
