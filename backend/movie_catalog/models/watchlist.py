"""Per-user watchlist entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .movie import Movie


class WatchlistItem(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Marks a movie as saved by a user."""

    __tablename__ = "watchlist_items"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_watchlist_items_user_movie"),
        Index("ix_watchlist_items_user_id", "user_id"),
    )

    movie: Mapped[Movie] = relationship("Movie", lazy="joined")
