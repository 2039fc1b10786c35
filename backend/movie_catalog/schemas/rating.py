"""Rating resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

RATING_RANGE = validate.Range(min=1, max=10)


class RatingCreateSchema(Schema):
    movie_id = fields.Integer(required=True, validate=validate.Range(min=1))
    rating = fields.Float(required=True, validate=RATING_RANGE)
    comment = fields.String(load_default=None, validate=validate.Length(max=2000))


class RatingUpdateSchema(Schema):
    rating = fields.Float(validate=RATING_RANGE)
    comment = fields.String(validate=validate.Length(max=2000))


class RatingSchema(Schema):
    """Representation of a stored rating."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    movie_id = fields.Integer(required=True)
    rating = fields.Float(required=True)
    comment = fields.String(allow_none=True)
    movie_title = fields.String(allow_none=True)
    created_at = fields.String(allow_none=True)
    updated_at = fields.String(allow_none=True)


class AverageRatingSchema(Schema):
    average = fields.Float(required=True)
    count = fields.Integer(required=True)
