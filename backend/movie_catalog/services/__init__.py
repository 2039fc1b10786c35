"""Service layer public API.

Callers import services from :mod:`movie_catalog.services` without knowing the
internal package layout.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`CachingService`
- Auth: :class:`AuthenticationService`, :class:`SessionManager`
- Registration: :class:`RegistrationService`
- Catalog: :class:`MovieService`, :class:`RatingService`, :class:`WatchlistService`
"""

from __future__ import annotations

from ._shared.base import BaseService, CachingService
from .auth.service import AuthenticationService
from .auth.sessions import SessionManager
from .movies.service import MovieService
from .ratings.service import RatingService
from .registration.service import RegistrationService
from .watchlist.service import WatchlistService

__all__ = [
    "AuthenticationService",
    "BaseService",
    "CachingService",
    "MovieService",
    "RatingService",
    "RegistrationService",
    "SessionManager",
    "WatchlistService",
]
