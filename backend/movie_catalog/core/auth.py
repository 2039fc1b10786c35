"""Bearer-token callbacks for ``flask-jwt-extended``.

Access tokens are minted by :class:`~movie_catalog.infra.jwt.jwt_token_issuer.JWTTokenIssuer`
with the access secret; the extension only verifies them. Each verified token
is resolved to a live user, so tokens of deleted accounts stop working.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, current_app

from movie_catalog.core.errors import problem_response
from movie_catalog.core.extensions import db, jwt


def init_app(app: Flask) -> None:
    """Register identity lookup and 401 problem responses on the JWT manager."""

    from movie_catalog.models import User

    @jwt.user_lookup_loader
    def _load_user(_jwt_header: dict[str, Any], jwt_data: dict[str, Any]) -> User | None:
        identity = jwt_data.get(current_app.config["JWT_IDENTITY_CLAIM"])
        if identity is None:
            return None
        return db.session.get(User, int(identity))

    @jwt.user_lookup_error_loader
    def _unknown_user(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
        return problem_response(status=401, message="User not found")

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return problem_response(status=401, message=reason)

    @jwt.expired_token_loader
    def _expired_token(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
        return problem_response(status=401, message="Token has expired")

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return problem_response(status=401, message="Invalid token")
