# movie_catalog/services/movies/dto.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any

# ---------------------------- Shared -------------------------------------- #


@dataclass(frozen=True, slots=True)
class GenreRef:
    """Genre identified by the metadata provider id."""

    id: int
    name: str


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class MovieIn:
    """
    Full movie payload used by create and by the metadata sync.

    :param tmdb_id: Provider identifier (unique).
    :param title: Display title.
    :param genres: Genres to link; unknown ones are created.
    """

    tmdb_id: int
    title: str
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: date | None = None
    popularity: float = 0.0
    vote_count: int = 0
    vote_average: float = 0.0
    adult: bool = False
    genres: tuple[GenreRef, ...] = ()


@dataclass(frozen=True, slots=True)
class MovieUpdateIn:
    """Partial update; ``None`` leaves a field unchanged."""

    title: str | None = None
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: date | None = None
    popularity: float | None = None
    vote_count: int | None = None
    vote_average: float | None = None
    adult: bool | None = None
    genres: tuple[GenreRef, ...] | None = None

    def changes(self) -> dict[str, Any]:
        """Return the scalar fields that were provided (``genres`` excluded)."""
        return {
            k: v
            for k, v in (
                ("title", self.title),
                ("overview", self.overview),
                ("poster_path", self.poster_path),
                ("backdrop_path", self.backdrop_path),
                ("release_date", self.release_date),
                ("popularity", self.popularity),
                ("vote_count", self.vote_count),
                ("vote_average", self.vote_average),
                ("adult", self.adult),
            )
            if v is not None
        }


@dataclass(frozen=True, slots=True)
class MovieFilterIn:
    """
    Catalog listing filters.

    :param page: 1-based page.
    :param limit: Page size (clamped to 1..100).
    :param genre: Case-insensitive fragment of a genre name.
    :param search: Case-insensitive fragment of title or overview.
    """

    page: int = 1
    limit: int = 10
    genre: str | None = None
    search: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class MovieOut:
    """
    Movie read model. Dates are ISO strings so the DTO caches as JSON as-is.

    ``is_in_watchlist`` and ``user_rating`` describe the requesting user and
    stay at their defaults for anonymous reads.
    """

    id: int
    tmdb_id: int
    title: str
    overview: str | None
    poster_path: str | None
    backdrop_path: str | None
    release_date: str | None
    popularity: float
    vote_count: int
    vote_average: float
    adult: bool
    genres: tuple[GenreRef, ...] = ()
    created_at: str | None = None
    updated_at: str | None = None
    is_in_watchlist: bool = False
    user_rating: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MovieOut:
        values = dict(data)
        values["genres"] = tuple(GenreRef(**g) for g in values.get("genres") or ())
        return cls(**values)


@dataclass(frozen=True, slots=True)
class MoviePageOut:
    """One page of movies plus its counters."""

    items: tuple[MovieOut, ...] = field(default_factory=tuple)
    total: int = 0
    page: int = 1
    limit: int = 10

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [m.to_dict() for m in self.items],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MoviePageOut:
        return cls(
            items=tuple(MovieOut.from_dict(m) for m in data.get("items", [])),
            total=int(data.get("total", 0)),
            page=int(data.get("page", 1)),
            limit=int(data.get("limit", 10)),
        )


@dataclass(frozen=True, slots=True)
class SyncOut:
    """Outcome of a metadata sync run."""

    pages: int
    movies: int
    message: str = "Movies synced successfully"
