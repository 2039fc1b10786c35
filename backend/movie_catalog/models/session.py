"""Refresh-token session model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class UserSession(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One issued refresh token bound to its user.

    ``token`` is indexed but deliberately not unique, and ``user_id`` carries no
    unique index: login and refresh keep a single live row per user by
    deleting the old rows before inserting the new one.
    """

    __tablename__ = "sessions"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(1024), nullable=False)

    __table_args__ = (
        Index("ix_sessions_user_id", "user_id"),
        Index("ix_sessions_token", "token"),
    )

    user: Mapped[User] = relationship("User", back_populates="sessions")
