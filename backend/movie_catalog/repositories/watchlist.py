"""Watchlist repository."""

from __future__ import annotations

from sqlalchemy import delete, func, select

from movie_catalog.models.movie import Genre, Movie
from movie_catalog.models.watchlist import WatchlistItem
from movie_catalog.repositories.base import BaseRepository


class WatchlistRepository(BaseRepository[WatchlistItem]):
    """Persistence-only repository for :class:`WatchlistItem`."""

    model = WatchlistItem

    def _filterable_fields(self):
        return {"user_id": WatchlistItem.user_id, "movie_id": WatchlistItem.movie_id}

    def find_item(self, user_id: int, movie_id: int) -> WatchlistItem | None:
        return self.find_one(user_id=user_id, movie_id=movie_id)

    def contains(self, user_id: int, movie_id: int) -> bool:
        return self.exists(user_id=user_id, movie_id=movie_id)

    def create(self, *, user_id: int, movie_id: int) -> WatchlistItem:
        return self.add(WatchlistItem(user_id=user_id, movie_id=movie_id))

    def delete_item(self, user_id: int, movie_id: int) -> int:
        stmt = delete(WatchlistItem).where(
            WatchlistItem.user_id == user_id,
            WatchlistItem.movie_id == movie_id,
        )
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return int(result.rowcount or 0)

    def list_for_user(self, user_id: int, *, genre: str | None = None) -> list[WatchlistItem]:
        """List the user's items newest first, optionally by exact genre name (any case)."""
        stmt = select(WatchlistItem).where(WatchlistItem.user_id == user_id)
        if genre:
            stmt = stmt.join(WatchlistItem.movie).where(
                Movie.genres.any(func.lower(Genre.name) == genre.lower())
            )
        stmt = stmt.order_by(WatchlistItem.created_at.desc(), WatchlistItem.id.desc())
        return list(self.session.execute(stmt).scalars().unique().all())

    def movie_ids_for_user(self, user_id: int) -> list[int]:
        stmt = (
            select(WatchlistItem.movie_id)
            .where(WatchlistItem.user_id == user_id)
            .order_by(WatchlistItem.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
