# movie_catalog/services/movies/service.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from movie_catalog.models.movie import Movie
from movie_catalog.services._shared.base import CachingService
from movie_catalog.services._shared.errors import ConflictError, NotFoundError, UpstreamError
from movie_catalog.services._shared.ports import CacheStore, MovieMetadataProvider
from movie_catalog.services.movies.dto import (
    GenreRef,
    MovieFilterIn,
    MovieIn,
    MovieOut,
    MoviePageOut,
    MovieUpdateIn,
    SyncOut,
)

MAX_PAGE_SIZE = 100


def list_cache_key(filters: MovieFilterIn) -> str:
    return (
        f"movies_{filters.page}_{filters.limit}_"
        f"{filters.genre or 'allgenre'}_{filters.search or 'nosearch'}"
    )


def detail_cache_key(movie_id: int, user_id: int | None) -> str:
    return f"movie_{movie_id}_{user_id if user_id is not None else 'nouser'}"


def to_movie_out(
    movie: Movie, *, is_in_watchlist: bool = False, user_rating: float | None = None
) -> MovieOut:
    """Map an ORM movie to its read model (call inside the unit of work)."""
    return MovieOut(
        id=movie.id,
        tmdb_id=movie.tmdb_id,
        title=movie.title,
        overview=movie.overview,
        poster_path=movie.poster_path,
        backdrop_path=movie.backdrop_path,
        release_date=movie.release_date.isoformat() if movie.release_date else None,
        popularity=float(movie.popularity or 0.0),
        vote_count=int(movie.vote_count or 0),
        vote_average=float(movie.vote_average or 0.0),
        adult=bool(movie.adult),
        genres=tuple(GenreRef(id=g.id, name=g.name) for g in movie.genres),
        created_at=movie.created_at.isoformat() if movie.created_at else None,
        updated_at=movie.updated_at.isoformat() if movie.updated_at else None,
        is_in_watchlist=is_in_watchlist,
        user_rating=user_rating,
    )


def _parse_release_date(raw: Any) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        return None


def movie_in_from_tmdb(details: dict[str, Any]) -> MovieIn:
    """Translate a TMDB ``movie/{id}`` payload into :class:`MovieIn`."""
    return MovieIn(
        tmdb_id=int(details["id"]),
        title=str(details.get("title") or details.get("original_title") or ""),
        overview=details.get("overview") or None,
        poster_path=details.get("poster_path"),
        backdrop_path=details.get("backdrop_path"),
        release_date=_parse_release_date(details.get("release_date")),
        popularity=float(details.get("popularity") or 0.0),
        vote_count=int(details.get("vote_count") or 0),
        vote_average=float(details.get("vote_average") or 0.0),
        adult=bool(details.get("adult", False)),
        genres=tuple(
            GenreRef(id=int(g["id"]), name=str(g["name"])) for g in details.get("genres") or ()
        ),
    )


class MovieService(CachingService):
    """
    Catalog reads (cached), writes (invalidating) and metadata sync.

    Cache keys
    ----------
    * ``movies_{page}_{limit}_{genre|allgenre}_{search|nosearch}``: list pages.
    * ``movie_{id}_{user_id|nouser}``: detail views.
    """

    def __init__(
        self,
        *,
        cache: CacheStore | None = None,
        cache_ttl: int = 300,
        metadata_provider: MovieMetadataProvider | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(cache=cache, cache_ttl=cache_ttl, logger=logger)
        self.provider = metadata_provider

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def list_movies(self, filters: MovieFilterIn) -> MoviePageOut:
        pagination = self.ensure_pagination(
            page=filters.page,
            limit=filters.limit,
            sort=["-created_at"],
            max_limit=MAX_PAGE_SIZE,
        )
        normalized = MovieFilterIn(
            page=pagination.page,
            limit=pagination.limit,
            genre=filters.genre or None,
            search=filters.search or None,
        )

        def _load() -> MoviePageOut:
            with self.ro_uow() as uow:
                page = uow.movies.search(
                    pagination, genre=normalized.genre, search=normalized.search
                )
                return MoviePageOut(
                    items=tuple(to_movie_out(m) for m in page.items),
                    total=page.total,
                    page=page.page,
                    limit=page.limit,
                )

        return self.read_through(
            list_cache_key(normalized),
            _load,
            dump=MoviePageOut.to_dict,
            load=MoviePageOut.from_dict,
        )

    def get_movie(self, movie_id: int, user_id: int | None = None) -> MovieOut:
        """
        Return one movie, enriched with the caller's watchlist flag and rating.

        :raises NotFoundError: If the movie does not exist.
        """

        def _load() -> MovieOut:
            with self.ro_uow() as uow:
                movie = uow.movies.get(movie_id)
                if movie is None:
                    raise NotFoundError("Movie", movie_id)
                in_watchlist = False
                user_rating = None
                if user_id is not None:
                    in_watchlist = uow.watchlist.contains(user_id, movie_id)
                    rating = uow.ratings.find_for_user(user_id, movie_id)
                    user_rating = float(rating.rating) if rating is not None else None
                return to_movie_out(movie, is_in_watchlist=in_watchlist, user_rating=user_rating)

        return self.read_through(
            detail_cache_key(movie_id, user_id),
            _load,
            dump=MovieOut.to_dict,
            load=MovieOut.from_dict,
        )

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def create_movie(self, dto: MovieIn) -> MovieOut:
        """:raises ConflictError: If a movie with the same ``tmdb_id`` exists."""
        with self.rw_uow() as uow:
            if uow.movies.get_by_tmdb_id(dto.tmdb_id) is not None:
                raise ConflictError("Movie", f"tmdb_id {dto.tmdb_id} already exists")
            out = to_movie_out(self._upsert(uow, dto))
        self.invalidate(patterns=["movies_*"])
        return out

    def update_movie(self, movie_id: int, dto: MovieUpdateIn) -> MovieOut:
        """:raises NotFoundError: If the movie does not exist."""
        with self.rw_uow() as uow:
            movie = uow.movies.get(movie_id)
            if movie is None:
                raise NotFoundError("Movie", movie_id)
            changes: dict[str, Any] = dto.changes()
            if dto.genres is not None:
                changes["genres"] = uow.genres.upsert_many(
                    [{"id": g.id, "name": g.name} for g in dto.genres]
                )
            uow.movies.assign_updates(movie, changes)
            out = to_movie_out(movie)
        self._invalidate_movie(movie_id)
        return out

    def delete_movie(self, movie_id: int) -> None:
        """:raises NotFoundError: If the movie does not exist."""
        with self.rw_uow() as uow:
            movie = uow.movies.get(movie_id)
            if movie is None:
                raise NotFoundError("Movie", movie_id)
            uow.movies.delete(movie)
        self._invalidate_movie(movie_id)

    def _invalidate_movie(self, movie_id: int) -> None:
        self.invalidate(patterns=[f"movie_{movie_id}_*", "movies_*"])

    @staticmethod
    def _upsert(uow, dto: MovieIn) -> Movie:
        """Insert or refresh a movie keyed by ``tmdb_id`` (flushes, no commit)."""
        genres = uow.genres.upsert_many([{"id": g.id, "name": g.name} for g in dto.genres])
        movie = uow.movies.get_by_tmdb_id(dto.tmdb_id)
        if movie is None:
            movie = Movie(tmdb_id=dto.tmdb_id, title=dto.title)
            uow.movies.add(movie)
        movie.title = dto.title
        movie.overview = dto.overview
        movie.poster_path = dto.poster_path
        movie.backdrop_path = dto.backdrop_path
        movie.release_date = dto.release_date
        movie.popularity = dto.popularity
        movie.vote_count = dto.vote_count
        movie.vote_average = dto.vote_average
        movie.adult = dto.adult
        movie.genres = genres
        uow.movies.flush()
        return movie

    # ------------------------------------------------------------------ #
    # Metadata sync
    # ------------------------------------------------------------------ #

    def sync_popular_movies(self, pages: int = 5) -> SyncOut:
        """
        Upsert the provider's popular movies, page by page.

        Each page commits on its own, so a provider failure keeps the pages
        already stored.

        :param pages: Number of "popular" pages to fetch, starting at 1.
        :raises UpstreamError: If no provider is configured or it fails.
        """
        if self.provider is None:
            raise UpstreamError("Movie metadata provider is not configured")

        synced = 0
        try:
            for page in range(1, pages + 1):
                listing = self.provider.get_popular_movies(page)
                results = listing.get("results") or []
                details = [self.provider.get_movie_details(int(item["id"])) for item in results]
                with self.rw_uow() as uow:
                    for payload in details:
                        self._upsert(uow, movie_in_from_tmdb(payload))
                synced += len(details)
                self.log.info("Synced popular movies page", extra={"page": page, "count": len(details)})
        finally:
            if synced:
                self.invalidate(patterns=["movies_*", "movie_*"])

        self.log.info("Movie sync finished", extra={"count": synced})
        return SyncOut(pages=pages, movies=synced)
