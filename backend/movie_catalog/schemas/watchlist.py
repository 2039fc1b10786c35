"""Watchlist resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .movie import MovieSchema


class WatchlistMovieSchema(Schema):
    """Body carrying the movie to add or remove."""

    movie_id = fields.Integer(required=True, validate=validate.Range(min=1))


class WatchlistQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    genre = fields.String(load_default=None)


class WatchlistItemSchema(Schema):
    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    movie_id = fields.Integer(required=True)
    created_at = fields.String(allow_none=True)
    movie = fields.Nested(MovieSchema, allow_none=True)
