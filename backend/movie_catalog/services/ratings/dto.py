# movie_catalog/services/ratings/dto.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RateMovieIn:
    """
    Create-or-replace a rating.

    :param movie_id: Rated movie.
    :param rating: Score between 1 and 10.
    :param comment: Optional free text.
    """

    movie_id: int
    rating: float
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class RatingUpdateIn:
    """Partial rating update; ``None`` keeps the stored value."""

    rating: float | None = None
    comment: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RatingOut:
    id: int
    user_id: int
    movie_id: int
    rating: float
    comment: str | None
    created_at: str | None = None
    updated_at: str | None = None
    movie_title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RatingOut:
        return cls(**data)


@dataclass(frozen=True, slots=True)
class AverageRatingOut:
    """Mean score and number of ratings; ``0.0`` and ``0`` for unrated movies."""

    average: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AverageRatingOut:
        return cls(average=float(data["average"]), count=int(data["count"]))
