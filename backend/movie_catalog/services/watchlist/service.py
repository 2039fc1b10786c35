# movie_catalog/services/watchlist/service.py
from __future__ import annotations

from movie_catalog.models.watchlist import WatchlistItem
from movie_catalog.services._shared.base import CachingService
from movie_catalog.services._shared.errors import NotFoundError
from movie_catalog.services.movies.service import to_movie_out
from movie_catalog.services.watchlist.dto import WatchlistItemOut


def to_item_out(item: WatchlistItem) -> WatchlistItemOut:
    return WatchlistItemOut(
        id=item.id,
        user_id=item.user_id,
        movie_id=item.movie_id,
        created_at=item.created_at.isoformat() if item.created_at else None,
        movie=to_movie_out(item.movie, is_in_watchlist=True) if item.movie else None,
    )


def watchlist_cache_key(user_id: int, genre: str | None = None) -> str:
    if genre:
        return f"user_watchlist_items_{user_id}_genre_{genre.lower()}"
    return f"user_watchlist_items_{user_id}"


class WatchlistService(CachingService):
    """Per-user saved movies."""

    def add(self, user_id: int, movie_id: int) -> WatchlistItemOut:
        """
        Save a movie; saving it twice returns the existing entry.

        :raises NotFoundError: If the movie does not exist.
        """
        with self.rw_uow() as uow:
            if not uow.movies.exists_by_id(movie_id):
                raise NotFoundError("Movie", movie_id)
            item = uow.watchlist.find_item(user_id, movie_id)
            if item is not None:
                return to_item_out(item)
            item = uow.watchlist.create(user_id=user_id, movie_id=movie_id)
            out = to_item_out(item)
        self._clear_caches(user_id, movie_id)
        self.log.info("Movie added to watchlist", extra={"user_id": user_id, "movie_id": movie_id})
        return out

    def remove(self, user_id: int, movie_id: int) -> bool:
        """
        Drop a movie from the watchlist.

        :returns: ``True`` when an entry was deleted.
        :raises NotFoundError: If the movie does not exist.
        """
        with self.rw_uow() as uow:
            if not uow.movies.exists_by_id(movie_id):
                raise NotFoundError("Movie", movie_id)
            removed = uow.watchlist.delete_item(user_id, movie_id) > 0
        if removed:
            self._clear_caches(user_id, movie_id)
        return removed

    def get_user_watchlist(self, user_id: int, genre: str | None = None) -> list[WatchlistItemOut]:
        def _load() -> list[WatchlistItemOut]:
            with self.ro_uow() as uow:
                return [to_item_out(i) for i in uow.watchlist.list_for_user(user_id, genre=genre)]

        return self.read_through(
            watchlist_cache_key(user_id, genre),
            _load,
            dump=lambda items: [i.to_dict() for i in items],
            load=lambda data: [WatchlistItemOut.from_dict(i) for i in data],
        )

    def is_in_watchlist(self, user_id: int, movie_id: int) -> bool:
        with self.ro_uow() as uow:
            return uow.watchlist.contains(user_id, movie_id)

    def get_movie_ids(self, user_id: int) -> list[int]:
        with self.ro_uow() as uow:
            return uow.watchlist.movie_ids_for_user(user_id)

    def _clear_caches(self, user_id: int, movie_id: int) -> None:
        self.invalidate(
            f"movie_{movie_id}_{user_id}",
            patterns=[f"user_watchlist_items_{user_id}*"],
        )
