"""
movie_catalog.services._shared.ports
====================================

*Ports* (hexagonal interfaces) the service layer depends on. Concrete adapters
live under ``movie_catalog.infra``.

Modules
-------
- :mod:`password_hasher`: :class:`~.PasswordHasher`.
- :mod:`token_issuer`: :class:`~.TokenIssuer`, :class:`~.TokenClaims`,
  :class:`~.TokenErrorKind` and :class:`~.TokenVerificationError`.
- :mod:`cache_store`: :class:`~.CacheStore` plus the :class:`~.NullCacheStore`
  and :class:`~.InMemoryCacheStore` fallbacks.
- :mod:`movie_metadata`: :class:`~.MovieMetadataProvider`.
"""

from __future__ import annotations

from .cache_store import CacheStore, InMemoryCacheStore, NullCacheStore
from .movie_metadata import MovieMetadataProvider
from .password_hasher import PasswordHasher
from .token_issuer import (
    TokenClaims,
    TokenErrorKind,
    TokenIssuer,
    TokenVerificationError,
)

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "MovieMetadataProvider",
    "NullCacheStore",
    "PasswordHasher",
    "TokenClaims",
    "TokenErrorKind",
    "TokenIssuer",
    "TokenVerificationError",
]
