"""
Unit of Work contract shared by the read-write and read-only scopes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_catalog.repositories import (
        GenreRepository,
        MovieRepository,
        RatingRepository,
        SessionRepository,
        UserRepository,
        WatchlistRepository,
    )


class UnitOfWork(ABC):
    """
    One transactional boundary for a use case.

    Every repository attribute is bound to the same session, so a use case
    touching users and sessions commits or rolls back as a whole.
    """

    users: UserRepository
    sessions: SessionRepository
    movies: MovieRepository
    genres: GenreRepository
    ratings: RatingRepository
    watchlist: WatchlistRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
