"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    Password strength is not checked here, so a short wrong password gets the
    same "Invalid credentials" answer as any other.
    """

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class TokenResponseSchema(Schema):
    """Response payload containing an access token."""

    access_token = fields.String(required=True)


class MessageSchema(Schema):
    message = fields.String(required=True)


class UserInfoSchema(Schema):
    """Public profile of the authenticated user."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.String(required=True)
