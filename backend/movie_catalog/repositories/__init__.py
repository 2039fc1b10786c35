"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from movie_catalog.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from movie_catalog.repositories.movie import GenreRepository, MovieRepository
from movie_catalog.repositories.rating import RatingRepository
from movie_catalog.repositories.session import SessionRepository
from movie_catalog.repositories.user import UserRepository
from movie_catalog.repositories.watchlist import WatchlistRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "apply_sorting",
    "paginate_select",
    # Domain
    "GenreRepository",
    "MovieRepository",
    "RatingRepository",
    "SessionRepository",
    "UserRepository",
    "WatchlistRepository",
]
