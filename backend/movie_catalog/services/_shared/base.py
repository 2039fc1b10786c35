# movie_catalog/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from movie_catalog.core import errors as api_errors
from movie_catalog.repositories.base import Pagination
from movie_catalog.services._shared.errors import (
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
    UpstreamError,
)
from movie_catalog.services._shared.ports.cache_store import CacheStore, NullCacheStore
from movie_catalog.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

T = TypeVar("T")


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Hold the logger injected by the composition root.
    * Centralize error translation.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Each service receives its logger explicitly; ``None`` falls back to the
      module logger of the concrete class.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.log = logger or logging.getLogger(type(self).__module__)

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success, rollback on error)."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work (flushes blocked, always rolled back)."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self,
        *,
        page: int,
        limit: int,
        sort: Iterable[str] | None = None,
        max_limit: int = 100,
    ) -> Pagination:
        """Build a Pagination value object clamped to ``1 <= limit <= max_limit``."""
        page = max(1, int(page))
        limit = min(max(1, int(limit)), max_limit)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: ServiceError) -> api_errors.APIError:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within a service.
        :returns: Equivalent :class:`~movie_catalog.core.errors.APIError`.
        """
        message = str(exc)
        if isinstance(exc, UnauthorizedError):
            return api_errors.Unauthorized(message)
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(message)
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(message)
        if isinstance(exc, UpstreamError):
            return api_errors.BadGateway(message)
        if isinstance(exc, InternalError):
            return api_errors.InternalServerError(message)
        if isinstance(exc, BadRequestError):
            return api_errors.BadRequest(message)
        # Any other ServiceError subclass → 400 Bad Request
        return api_errors.APIError(message=message, status_code=400, code="bad_request")


class CachingService(BaseService):
    """
    Service with a read-through cache in front of its queries.

    Cached values are plain JSON-compatible structures; services convert their
    DTOs on the way in and out.
    """

    def __init__(
        self,
        *,
        cache: CacheStore | None = None,
        cache_ttl: int = 300,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self.cache = cache or NullCacheStore()
        self.cache_ttl = cache_ttl

    def read_through(
        self,
        key: str,
        loader: Callable[[], T],
        *,
        dump: Callable[[T], Any],
        load: Callable[[Any], T],
    ) -> T:
        """
        Return the cached value for ``key`` or compute, store and return it.

        :param key: Cache key.
        :param loader: Computes the value on a miss.
        :param dump: Converts the value into a JSON-compatible structure.
        :param load: Rebuilds the value from the cached structure.
        """
        cached = self.cache.get(key)
        if cached is not None:
            self.log.debug("cache.hit key=%s", key)
            return load(cached)
        value = loader()
        dumped = dump(value)
        if dumped is not None:
            self.cache.set(key, dumped, self.cache_ttl)
        return value

    def invalidate(self, *keys: str, patterns: Iterable[str] = ()) -> None:
        """Drop exact keys and glob-style key patterns."""
        if keys:
            self.cache.delete(*keys)
        for pattern in patterns:
            self.cache.delete_pattern(pattern)
