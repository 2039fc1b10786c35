"""Rating endpoints (bearer token required)."""

from __future__ import annotations

from flask import Blueprint, request

from movie_catalog.api.deps import (
    build_rating_service,
    current_user_id,
    json_response,
    require_auth,
    timing,
)
from movie_catalog.schemas import (
    AverageRatingSchema,
    RatingCreateSchema,
    RatingSchema,
    RatingUpdateSchema,
)
from movie_catalog.services.ratings.dto import RateMovieIn, RatingUpdateIn

bp = Blueprint("ratings", __name__, url_prefix="/ratings")

rating_schema = RatingSchema()
rating_list_schema = RatingSchema(many=True)
rating_create_schema = RatingCreateSchema()
rating_update_schema = RatingUpdateSchema()
average_schema = AverageRatingSchema()


@bp.post("")
@require_auth
@timing
def rate_movie():
    """Create or replace the caller's rating for a movie."""

    payload = rating_create_schema.load(request.get_json(silent=True) or {})
    rating = build_rating_service().rate_movie(current_user_id(), RateMovieIn(**payload))
    return json_response({"data": rating_schema.dump(rating.to_dict())}, status=201)


@bp.patch("/<int:movie_id>")
@require_auth
@timing
def update_rating(movie_id: int):
    payload = rating_update_schema.load(request.get_json(silent=True) or {})
    rating = build_rating_service().update_rating(
        current_user_id(), movie_id, RatingUpdateIn(**payload)
    )
    return json_response({"data": rating_schema.dump(rating.to_dict())})


@bp.delete("/<int:movie_id>")
@require_auth
@timing
def delete_rating(movie_id: int):
    build_rating_service().delete_rating(current_user_id(), movie_id)
    return json_response({"message": "Rating deleted successfully"})


@bp.get("/user")
@require_auth
@timing
def list_user_ratings():
    ratings = build_rating_service().get_user_ratings(current_user_id())
    data = rating_list_schema.dump([r.to_dict() for r in ratings])
    return json_response({"data": data, "meta": {"total": len(data)}})


@bp.get("/<int:movie_id>")
@require_auth
@timing
def get_user_rating(movie_id: int):
    """Return the caller's rating for a movie, or ``null`` when unrated."""

    rating = build_rating_service().get_user_rating(current_user_id(), movie_id)
    return json_response({"data": rating_schema.dump(rating.to_dict()) if rating else None})


@bp.get("/movie/<int:movie_id>")
@require_auth
@timing
def list_movie_ratings(movie_id: int):
    ratings = build_rating_service().get_movie_ratings(movie_id)
    data = rating_list_schema.dump([r.to_dict() for r in ratings])
    return json_response({"data": data, "meta": {"total": len(data)}})


@bp.get("/movie/<int:movie_id>/average")
@require_auth
@timing
def movie_average(movie_id: int):
    average = build_rating_service().get_movie_average_rating(movie_id)
    return json_response({"data": average_schema.dump(average.to_dict())})
