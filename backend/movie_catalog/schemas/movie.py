"""Movie resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import PaginationQuerySchema


class GenreSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))


class MovieCreateSchema(Schema):
    """Payload for adding a movie by hand."""

    tmdb_id = fields.Integer(required=True, validate=validate.Range(min=1))
    title = fields.String(required=True, validate=validate.Length(min=1, max=255))
    overview = fields.String(load_default=None)
    poster_path = fields.String(load_default=None, validate=validate.Length(max=255))
    backdrop_path = fields.String(load_default=None, validate=validate.Length(max=255))
    release_date = fields.Date(load_default=None)
    popularity = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    vote_count = fields.Integer(load_default=0, validate=validate.Range(min=0))
    vote_average = fields.Float(load_default=0.0, validate=validate.Range(min=0, max=10))
    adult = fields.Boolean(load_default=False)
    genres = fields.List(fields.Nested(GenreSchema), load_default=list)


class MovieUpdateSchema(Schema):
    """Partial update payload; omitted fields stay unchanged."""

    title = fields.String(validate=validate.Length(min=1, max=255))
    overview = fields.String()
    poster_path = fields.String(validate=validate.Length(max=255))
    backdrop_path = fields.String(validate=validate.Length(max=255))
    release_date = fields.Date()
    popularity = fields.Float(validate=validate.Range(min=0))
    vote_count = fields.Integer(validate=validate.Range(min=0))
    vote_average = fields.Float(validate=validate.Range(min=0, max=10))
    adult = fields.Boolean()
    genres = fields.List(fields.Nested(GenreSchema))


class MovieListQuerySchema(PaginationQuerySchema):
    """Query parameters accepted by the movie list endpoint."""

    class Meta:
        unknown = EXCLUDE

    genre = fields.String(load_default=None)
    search = fields.String(load_default=None)


class MovieSyncSchema(Schema):
    pages = fields.Integer(load_default=None, validate=validate.Range(min=1, max=50))


class MovieSchema(Schema):
    """Representation of a movie, enriched for the requesting user."""

    id = fields.Integer(required=True)
    tmdb_id = fields.Integer(required=True)
    title = fields.String(required=True)
    overview = fields.String(allow_none=True)
    poster_path = fields.String(allow_none=True)
    backdrop_path = fields.String(allow_none=True)
    release_date = fields.String(allow_none=True)
    popularity = fields.Float()
    vote_count = fields.Integer()
    vote_average = fields.Float()
    adult = fields.Boolean()
    genres = fields.List(fields.Nested(GenreSchema))
    created_at = fields.String(allow_none=True)
    updated_at = fields.String(allow_none=True)
    is_in_watchlist = fields.Boolean()
    user_rating = fields.Float(allow_none=True)
