"""Movie catalog models."""

from __future__ import annotations

from datetime import date

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

movie_genres = Table(
    "movie_genres",
    db.metadata,
    Column("movie_id", ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Genre(ReprMixin, db.Model):
    """Genre keyed by the metadata provider's own identifier."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(80), nullable=False)

    __table_args__ = (Index("ix_genres_name", "name"),)


class Movie(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Catalog entry mirrored from the metadata provider."""

    __tablename__ = "movies"

    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    overview: Mapped[str | None] = mapped_column(Text)
    poster_path: Mapped[str | None] = mapped_column(String(255))
    backdrop_path: Mapped[str | None] = mapped_column(String(255))
    release_date: Mapped[date | None] = mapped_column(Date)
    popularity: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    vote_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    adult: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("tmdb_id", name="uq_movies_tmdb_id"),
        Index("ix_movies_title", "title"),
    )

    genres: Mapped[list[Genre]] = relationship(
        "Genre",
        secondary=movie_genres,
        lazy="selectin",
        order_by="Genre.id",
    )
