"""Shared API helpers: responses, auth guards, cookies and service wiring.

Routes never construct infrastructure themselves; the ``build_*`` helpers
below are the composition root for each request.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from movie_catalog.core.extensions import get_redis
from movie_catalog.infra.jwt.jwt_token_issuer import JWTTokenIssuer
from movie_catalog.infra.redis.redis_cache_store import RedisCacheStore
from movie_catalog.infra.security.bcrypt_password_hasher import BcryptPasswordHasher
from movie_catalog.infra.tmdb.tmdb_client import TmdbClient
from movie_catalog.services import (
    AuthenticationService,
    MovieService,
    RatingService,
    RegistrationService,
    SessionManager,
    WatchlistService,
)
from movie_catalog.services._shared.ports import CacheStore, NullCacheStore

F = TypeVar("F", bound=Callable[..., Any])


# ------------------------------ Responses ---------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# -------------------------------- Auth ------------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid bearer access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    """Return the id of the authenticated user (call after :func:`require_auth`)."""

    return int(get_jwt_identity())


def optional_user_id() -> int | None:
    """Return the caller's id when a bearer token is present, else ``None``."""

    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


def read_refresh_token() -> str:
    """Read the refresh token from its cookie, falling back to the header."""

    cfg = current_app.config
    token = request.cookies.get(cfg["REFRESH_COOKIE_NAME"])
    if not token:
        token = request.headers.get(cfg["REFRESH_TOKEN_HEADER"], "")
    return token.strip()


def set_refresh_cookie(response: Response, token: str) -> Response:
    cfg = current_app.config
    response.set_cookie(
        cfg["REFRESH_COOKIE_NAME"],
        token,
        max_age=int(cfg["REFRESH_TOKEN_EXPIRES"].total_seconds()),
        path="/",
        httponly=True,
        secure=bool(cfg.get("REFRESH_COOKIE_SECURE", False)),
        samesite=cfg.get("REFRESH_COOKIE_SAMESITE", "Lax"),
    )
    return response


def clear_refresh_cookie(response: Response) -> Response:
    cfg = current_app.config
    response.delete_cookie(
        cfg["REFRESH_COOKIE_NAME"],
        path="/",
        httponly=True,
        secure=bool(cfg.get("REFRESH_COOKIE_SECURE", False)),
        samesite=cfg.get("REFRESH_COOKIE_SAMESITE", "Lax"),
    )
    return response


# --------------------------- Service wiring -------------------------------


def get_cache() -> CacheStore:
    """Return the Redis-backed cache, or a no-op store when Redis is disabled."""

    client = get_redis(current_app)
    if client is None:
        return NullCacheStore()
    return RedisCacheStore(client, default_ttl=current_app.config["CACHE_TTL_SECONDS"])


def get_token_issuer() -> JWTTokenIssuer:
    cfg = current_app.config
    return JWTTokenIssuer(
        access_secret=cfg["JWT_SECRET"],
        refresh_secret=cfg["RT_SECRET"],
        access_expires=cfg["ACCESS_TOKEN_EXPIRES"],
        refresh_expires=cfg["REFRESH_TOKEN_EXPIRES"],
        algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
    )


def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=current_app.config["BCRYPT_ROUNDS"])


def get_metadata_provider() -> TmdbClient:
    cfg = current_app.config
    return TmdbClient(
        api_key=cfg.get("TMDB_API_KEY", ""),
        base_url=cfg["TMDB_BASE_URL"],
        timeout=cfg.get("TMDB_TIMEOUT", 10),
    )


def build_auth_service() -> AuthenticationService:
    return AuthenticationService(
        password_hasher=get_password_hasher(),
        token_issuer=get_token_issuer(),
        session_manager=SessionManager(),
        logger=logging.getLogger("movie_catalog.auth"),
    )


def build_registration_service() -> RegistrationService:
    return RegistrationService(
        password_hasher=get_password_hasher(),
        token_issuer=get_token_issuer(),
        logger=logging.getLogger("movie_catalog.auth"),
    )


def build_movie_service(*, with_provider: bool = False) -> MovieService:
    return MovieService(
        cache=get_cache(),
        cache_ttl=current_app.config["CACHE_TTL_SECONDS"],
        metadata_provider=get_metadata_provider() if with_provider else None,
    )


def build_rating_service() -> RatingService:
    return RatingService(cache=get_cache(), cache_ttl=current_app.config["CACHE_TTL_SECONDS"])


def build_watchlist_service() -> WatchlistService:
    return WatchlistService(cache=get_cache(), cache_ttl=current_app.config["CACHE_TTL_SECONDS"])
