"""Movie and genre repositories."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, or_, select

from movie_catalog.models.movie import Genre, Movie
from movie_catalog.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MovieRepository(BaseRepository[Movie]):
    """Persistence-only repository for :class:`Movie`."""

    model = Movie

    def _sortable_fields(self):
        return {
            "created_at": Movie.created_at,
            "title": Movie.title,
            "popularity": Movie.popularity,
            "release_date": Movie.release_date,
            "vote_average": Movie.vote_average,
        }

    def _filterable_fields(self):
        return {"tmdb_id": Movie.tmdb_id}

    def _updatable_fields(self):
        return {
            "title",
            "overview",
            "poster_path",
            "backdrop_path",
            "release_date",
            "popularity",
            "vote_count",
            "vote_average",
            "adult",
            "genres",
        }

    def get_by_tmdb_id(self, tmdb_id: int) -> Movie | None:
        return self.find_one(tmdb_id=tmdb_id)

    def exists_by_id(self, movie_id: int) -> bool:
        stmt = select(Movie.id).where(Movie.id == movie_id)
        return self.session.execute(stmt).first() is not None

    def _filtered(self, *, genre: str | None, search: str | None) -> Select[Any]:
        stmt: Select[Any] = select(Movie)
        if genre:
            pattern = f"%{_escape_like(genre.lower())}%"
            stmt = stmt.where(
                Movie.genres.any(func.lower(Genre.name).like(pattern, escape="\\"))
            )
        if search:
            pattern = f"%{_escape_like(search.lower())}%"
            stmt = stmt.where(
                or_(
                    func.lower(Movie.title).like(pattern, escape="\\"),
                    func.lower(Movie.overview).like(pattern, escape="\\"),
                )
            )
        return stmt

    def search(
        self,
        pagination: Pagination,
        *,
        genre: str | None = None,
        search: str | None = None,
    ) -> Page[Movie]:
        """Paginate movies matching an optional genre and free-text search.

        :param pagination: Page, limit and sort tokens.
        :param genre: Case-insensitive fragment of a genre name.
        :param search: Case-insensitive fragment of the title or overview.
        :returns: Page of movies, newest first unless sort tokens say otherwise.
        """
        stmt = self._filtered(genre=genre, search=search)
        stmt = apply_sorting(
            stmt, self._sortable_fields(), pagination.sort, pk_attr=self._pk_attr()
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)


class GenreRepository(BaseRepository[Genre]):
    """Persistence-only repository for :class:`Genre`."""

    model = Genre

    def upsert(self, *, genre_id: int, name: str) -> Genre:
        """Create the genre or refresh its name, keyed by the provider id."""
        genre = self.session.get(Genre, genre_id)
        if genre is None:
            return self.add(Genre(id=genre_id, name=name))
        if genre.name != name:
            genre.name = name
            self.flush()
        return genre

    def upsert_many(self, items: list[dict[str, Any]]) -> list[Genre]:
        return [self.upsert(genre_id=int(g["id"]), name=str(g["name"])) for g in items]
