# movie_catalog/services/ratings/service.py
from __future__ import annotations

from movie_catalog.models.rating import Rating
from movie_catalog.services._shared.base import CachingService
from movie_catalog.services._shared.errors import BadRequestError, NotFoundError
from movie_catalog.services.ratings.dto import (
    AverageRatingOut,
    RateMovieIn,
    RatingOut,
    RatingUpdateIn,
)

MIN_RATING = 1
MAX_RATING = 10


def to_rating_out(rating: Rating) -> RatingOut:
    return RatingOut(
        id=rating.id,
        user_id=rating.user_id,
        movie_id=rating.movie_id,
        rating=float(rating.rating),
        comment=rating.comment,
        created_at=rating.created_at.isoformat() if rating.created_at else None,
        updated_at=rating.updated_at.isoformat() if rating.updated_at else None,
        movie_title=rating.movie.title if rating.movie is not None else None,
    )


def _check_range(value: float) -> float:
    if not MIN_RATING <= value <= MAX_RATING:
        raise BadRequestError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return float(value)


def _dump_list(items: list[RatingOut]) -> list[dict]:
    return [r.to_dict() for r in items]


def _load_list(data: list[dict]) -> list[RatingOut]:
    return [RatingOut.from_dict(r) for r in data]


class RatingService(CachingService):
    """
    User ratings with cached reads.

    Every write drops the user's and the movie's rating caches and the movie
    detail and list caches, since those embed ``user_rating``.
    """

    # ----------------------------- Writes ----------------------------------

    def rate_movie(self, user_id: int, dto: RateMovieIn) -> RatingOut:
        """
        Create the user's rating for a movie, or replace the existing one.

        :raises NotFoundError: If the movie does not exist.
        :raises BadRequestError: If the score is outside 1..10.
        """
        score = _check_range(dto.rating)
        with self.rw_uow() as uow:
            if not uow.movies.exists_by_id(dto.movie_id):
                raise NotFoundError("Movie", dto.movie_id)
            rating = uow.ratings.find_for_user(user_id, dto.movie_id)
            if rating is None:
                rating = uow.ratings.add(
                    Rating(
                        user_id=user_id,
                        movie_id=dto.movie_id,
                        rating=score,
                        comment=dto.comment,
                    )
                )
            else:
                uow.ratings.assign_updates(rating, {"rating": score, "comment": dto.comment})
            out = to_rating_out(rating)
        self._clear_caches(user_id, dto.movie_id)
        self.log.info("Movie rated", extra={"user_id": user_id, "movie_id": dto.movie_id})
        return out

    def update_rating(self, user_id: int, movie_id: int, dto: RatingUpdateIn) -> RatingOut:
        """:raises NotFoundError: If the user has not rated the movie."""
        changes: dict[str, object] = {}
        if dto.rating is not None:
            changes["rating"] = _check_range(dto.rating)
        if dto.comment is not None:
            changes["comment"] = dto.comment
        with self.rw_uow() as uow:
            rating = uow.ratings.find_for_user(user_id, movie_id)
            if rating is None:
                raise NotFoundError(
                    "Rating", movie_id, message=f"Rating for movie ID {movie_id} not found"
                )
            if changes:
                uow.ratings.assign_updates(rating, changes)
            out = to_rating_out(rating)
        self._clear_caches(user_id, movie_id)
        return out

    def delete_rating(self, user_id: int, movie_id: int) -> None:
        """:raises NotFoundError: If the user has not rated the movie."""
        with self.rw_uow() as uow:
            if not uow.ratings.delete_for_user(user_id, movie_id):
                raise NotFoundError(
                    "Rating", movie_id, message=f"Rating for movie ID {movie_id} not found"
                )
        self._clear_caches(user_id, movie_id)

    # ------------------------------ Reads ----------------------------------

    def get_user_rating(self, user_id: int, movie_id: int) -> RatingOut | None:
        def _load() -> RatingOut | None:
            with self.ro_uow() as uow:
                rating = uow.ratings.find_for_user(user_id, movie_id)
                return to_rating_out(rating) if rating is not None else None

        return self.read_through(
            f"rating_{user_id}_{movie_id}",
            _load,
            dump=lambda r: r.to_dict() if r is not None else None,
            load=RatingOut.from_dict,
        )

    def get_user_ratings(self, user_id: int) -> list[RatingOut]:
        def _load() -> list[RatingOut]:
            with self.ro_uow() as uow:
                return [to_rating_out(r) for r in uow.ratings.list_by_user(user_id)]

        return self.read_through(
            f"ratings_user_{user_id}", _load, dump=_dump_list, load=_load_list
        )

    def get_movie_ratings(self, movie_id: int) -> list[RatingOut]:
        def _load() -> list[RatingOut]:
            with self.ro_uow() as uow:
                return [to_rating_out(r) for r in uow.ratings.list_by_movie(movie_id)]

        return self.read_through(
            f"ratings_movie_{movie_id}", _load, dump=_dump_list, load=_load_list
        )

    def get_movie_average_rating(self, movie_id: int) -> AverageRatingOut:
        def _load() -> AverageRatingOut:
            with self.ro_uow() as uow:
                average, count = uow.ratings.average_for_movie(movie_id)
            return AverageRatingOut(average=round(average, 2), count=count)

        return self.read_through(
            f"rating_avg_{movie_id}",
            _load,
            dump=AverageRatingOut.to_dict,
            load=AverageRatingOut.from_dict,
        )

    def _clear_caches(self, user_id: int, movie_id: int) -> None:
        self.invalidate(
            f"rating_{user_id}_{movie_id}",
            f"ratings_user_{user_id}",
            f"ratings_movie_{movie_id}",
            f"rating_avg_{movie_id}",
            patterns=[f"movie_{movie_id}_*", "movies_*"],
        )
