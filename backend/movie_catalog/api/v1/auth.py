"""Authentication endpoints.

Access tokens travel in the JSON body; refresh tokens only ever travel in the
HTTP-only cookie (with the ``Refresh-Token`` header as a fallback on input).
"""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request

from movie_catalog.api.deps import (
    build_auth_service,
    build_registration_service,
    clear_refresh_cookie,
    current_user_id,
    json_response,
    read_refresh_token,
    require_auth,
    set_refresh_cookie,
    timing,
)
from movie_catalog.core.errors import Unauthorized
from movie_catalog.schemas import (
    LoginSchema,
    MessageSchema,
    RegisterSchema,
    TokenResponseSchema,
    UserInfoSchema,
)
from movie_catalog.services.auth.dto import LoginIn
from movie_catalog.services.auth.service import REFRESH_TOKEN_NOT_FOUND
from movie_catalog.services.registration.dto import RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
token_schema = TokenResponseSchema()
message_schema = MessageSchema()
user_info_schema = UserInfoSchema()


def _token_response(access_token: str, refresh_token: str, *, status: int = 200):
    response = json_response(token_schema.dump({"access_token": access_token}), status=status)
    return set_refresh_cookie(response, refresh_token)


@bp.post("/register")
@timing
def register():
    """Create an account and start its first session."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    pair = build_registration_service().register(RegisterIn(**payload))
    return _token_response(pair.access_token, pair.refresh_token, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and rotate the user's session."""

    data = login_schema.load(request.get_json(silent=True) or {})
    pair = build_auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return _token_response(pair.access_token, pair.refresh_token)


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the refresh cookie for a new token pair."""

    token = read_refresh_token()
    if not token:
        raise Unauthorized(REFRESH_TOKEN_NOT_FOUND)
    pair = build_auth_service().refresh_token(token)
    return _token_response(pair.access_token, pair.refresh_token)


@bp.post("/logout")
@timing
def logout():
    token = read_refresh_token()
    if not token:
        raise Unauthorized(REFRESH_TOKEN_NOT_FOUND)
    result = build_auth_service().logout(token)
    response = json_response(message_schema.dump(asdict(result)))
    return clear_refresh_cookie(response)


@bp.route("/me", methods=["GET", "POST"])
@require_auth
@timing
def me():
    """Return the authenticated user's public profile."""

    user = build_auth_service().get_user_info(current_user_id())
    return json_response(user_info_schema.dump(asdict(user)))
