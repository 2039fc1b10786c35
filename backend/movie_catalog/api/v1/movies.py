"""Movie catalog endpoints."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, current_app, request

from movie_catalog.api.deps import (
    build_movie_service,
    json_response,
    optional_user_id,
    require_auth,
    timing,
)
from movie_catalog.schemas import (
    MovieCreateSchema,
    MovieListQuerySchema,
    MovieSchema,
    MovieSyncSchema,
    MovieUpdateSchema,
    build_meta,
)
from movie_catalog.services.movies.dto import (
    GenreRef,
    MovieFilterIn,
    MovieIn,
    MovieUpdateIn,
)

bp = Blueprint("movies", __name__, url_prefix="/movies")

movie_schema = MovieSchema()
movie_list_schema = MovieSchema(many=True)
movie_create_schema = MovieCreateSchema()
movie_update_schema = MovieUpdateSchema()
movie_query_schema = MovieListQuerySchema()
movie_sync_schema = MovieSyncSchema()


def _genres(raw: list[dict] | None) -> tuple[GenreRef, ...] | None:
    if raw is None:
        return None
    return tuple(GenreRef(id=g["id"], name=g["name"]) for g in raw)


@bp.get("")
@timing
def list_movies():
    """Return a page of movies, newest first."""

    query = movie_query_schema.load(request.args)
    page = build_movie_service().list_movies(MovieFilterIn(**query))
    data = movie_list_schema.dump([m.to_dict() for m in page.items])
    meta = build_meta(total=page.total, page=page.page, limit=page.limit)
    return json_response({"data": data, "meta": meta})


@bp.get("/<int:movie_id>")
@timing
def get_movie(movie_id: int):
    """Return one movie; a bearer token adds the caller's watchlist flag and rating."""

    movie = build_movie_service().get_movie(movie_id, optional_user_id())
    return json_response({"data": movie_schema.dump(movie.to_dict())})


@bp.post("")
@require_auth
@timing
def create_movie():
    payload = movie_create_schema.load(request.get_json(silent=True) or {})
    payload["genres"] = _genres(payload.get("genres")) or ()
    movie = build_movie_service().create_movie(MovieIn(**payload))
    return json_response({"data": movie_schema.dump(movie.to_dict())}, status=201)


@bp.put("/<int:movie_id>")
@require_auth
@timing
def update_movie(movie_id: int):
    payload = movie_update_schema.load(request.get_json(silent=True) or {})
    payload["genres"] = _genres(payload.get("genres"))
    movie = build_movie_service().update_movie(movie_id, MovieUpdateIn(**payload))
    return json_response({"data": movie_schema.dump(movie.to_dict())})


@bp.delete("/<int:movie_id>")
@require_auth
@timing
def delete_movie(movie_id: int):
    build_movie_service().delete_movie(movie_id)
    return json_response({"message": "Movie deleted successfully"})


@bp.post("/sync")
@require_auth
@timing
def sync_movies():
    """Pull popular movies from the metadata provider."""

    payload = movie_sync_schema.load(request.get_json(silent=True) or {})
    pages = payload.get("pages") or current_app.config.get("TMDB_SYNC_PAGES", 5)
    result = build_movie_service(with_provider=True).sync_popular_movies(pages)
    return json_response({"data": asdict(result)})
