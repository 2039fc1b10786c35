"""Rating repository with per-movie aggregates."""

from __future__ import annotations

from sqlalchemy import delete, func, select

from movie_catalog.models.rating import Rating
from movie_catalog.repositories.base import BaseRepository


class RatingRepository(BaseRepository[Rating]):
    """Persistence-only repository for :class:`Rating`."""

    model = Rating

    def _sortable_fields(self):
        return {"created_at": Rating.created_at, "rating": Rating.rating}

    def _filterable_fields(self):
        return {"user_id": Rating.user_id, "movie_id": Rating.movie_id}

    def _updatable_fields(self):
        return {"rating", "comment"}

    def find_for_user(self, user_id: int, movie_id: int) -> Rating | None:
        return self.find_one(user_id=user_id, movie_id=movie_id)

    def list_by_user(self, user_id: int) -> list[Rating]:
        return self.list(filters={"user_id": user_id}, sort=["-created_at"])

    def list_by_movie(self, movie_id: int) -> list[Rating]:
        return self.list(filters={"movie_id": movie_id}, sort=["-created_at"])

    def delete_for_user(self, user_id: int, movie_id: int) -> int:
        stmt = delete(Rating).where(Rating.user_id == user_id, Rating.movie_id == movie_id)
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return int(result.rowcount or 0)

    def average_for_movie(self, movie_id: int) -> tuple[float, int]:
        """Return ``(average, count)`` of the movie's ratings; ``(0.0, 0)`` when unrated."""
        stmt = select(func.avg(Rating.rating), func.count(Rating.id)).where(
            Rating.movie_id == movie_id
        )
        avg, count = self.session.execute(stmt).one()
        return float(avg or 0.0), int(count or 0)
