# movie_catalog/services/watchlist/dto.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from movie_catalog.services.movies.dto import MovieOut


@dataclass(frozen=True, slots=True)
class WatchlistItemOut:
    """
    Watchlist entry with its movie embedded.

    :param movie: Movie snapshot at read time.
    """

    id: int
    user_id: int
    movie_id: int
    created_at: str | None
    movie: MovieOut | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WatchlistItemOut:
        values = dict(data)
        movie = values.pop("movie", None)
        return cls(movie=MovieOut.from_dict(movie) if movie else None, **values)
