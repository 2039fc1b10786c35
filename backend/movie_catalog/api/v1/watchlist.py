"""Watchlist endpoints (bearer token required)."""

from __future__ import annotations

from flask import Blueprint, request

from movie_catalog.api.deps import (
    build_watchlist_service,
    current_user_id,
    json_response,
    require_auth,
    timing,
)
from movie_catalog.schemas import (
    WatchlistItemSchema,
    WatchlistMovieSchema,
    WatchlistQuerySchema,
)

bp = Blueprint("watchlist", __name__, url_prefix="/watchlist")

item_schema = WatchlistItemSchema()
item_list_schema = WatchlistItemSchema(many=True)
movie_ref_schema = WatchlistMovieSchema()
query_schema = WatchlistQuerySchema()


@bp.post("/add")
@require_auth
@timing
def add_to_watchlist():
    payload = movie_ref_schema.load(request.get_json(silent=True) or {})
    item = build_watchlist_service().add(current_user_id(), payload["movie_id"])
    return json_response({"data": item_schema.dump(item.to_dict())}, status=201)


@bp.delete("/remove")
@require_auth
@timing
def remove_from_watchlist():
    payload = movie_ref_schema.load(request.get_json(silent=True) or {})
    removed = build_watchlist_service().remove(current_user_id(), payload["movie_id"])
    return json_response({"success": removed})


@bp.get("")
@require_auth
@timing
def list_watchlist():
    """Return the caller's watchlist, newest first, optionally by genre."""

    query = query_schema.load(request.args)
    items = build_watchlist_service().get_user_watchlist(current_user_id(), query["genre"])
    data = item_list_schema.dump([i.to_dict() for i in items])
    return json_response({"data": data, "meta": {"total": len(data)}})


@bp.get("/check/<int:movie_id>")
@require_auth
@timing
def check_watchlist(movie_id: int):
    in_watchlist = build_watchlist_service().is_in_watchlist(current_user_id(), movie_id)
    return json_response({"in_watchlist": in_watchlist})
