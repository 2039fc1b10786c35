"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginSchema,
    MessageSchema,
    RegisterSchema,
    TokenResponseSchema,
    UserInfoSchema,
)
from .common import MetaSchema, PaginationQuerySchema, build_meta
from .movie import (
    GenreSchema,
    MovieCreateSchema,
    MovieListQuerySchema,
    MovieSchema,
    MovieSyncSchema,
    MovieUpdateSchema,
)
from .rating import AverageRatingSchema, RatingCreateSchema, RatingSchema, RatingUpdateSchema
from .watchlist import WatchlistItemSchema, WatchlistMovieSchema, WatchlistQuerySchema

__all__ = [
    "LoginSchema",
    "MessageSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "UserInfoSchema",
    "MetaSchema",
    "PaginationQuerySchema",
    "build_meta",
    "GenreSchema",
    "MovieCreateSchema",
    "MovieListQuerySchema",
    "MovieSchema",
    "MovieSyncSchema",
    "MovieUpdateSchema",
    "AverageRatingSchema",
    "RatingCreateSchema",
    "RatingSchema",
    "RatingUpdateSchema",
    "WatchlistItemSchema",
    "WatchlistMovieSchema",
    "WatchlistQuerySchema",
]
