"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. The translation to HTTP responses (RFC 7807) is handled by
``movie_catalog/core/errors.py`` via ``BaseService.translate_exceptions()``.

Three kinds carry the authentication contract:

* :class:`BadRequestError` - the caller supplied invalid or missing input.
* :class:`UnauthorizedError` - credentials, session or token are not valid.
* :class:`InternalError` - anything unexpected, surfaced with a fixed message.
"""

from __future__ import annotations


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Subclasses provide a default, client-safe message.
    """

    default_message = "Service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class BadRequestError(ServiceError):
    default_message = "Bad request"


class UnauthorizedError(ServiceError):
    default_message = "Unauthorized"


class InternalError(ServiceError):
    """Unexpected failure. The message is generic and safe to expose."""

    default_message = "An unexpected error occurred"


class UpstreamError(ServiceError):
    """The movie metadata provider failed or answered with an error."""

    default_message = "Movie metadata provider request failed"


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "Movie").
    :param key: Identifier or search key.
    :param message: Optional override of the default wording.
    """

    def __init__(self, entity: str, key: str | int, message: str | None = None) -> None:
        self.entity = entity
        self.key = key
        super().__init__(message or f"{entity} with ID {key} not found")


class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    def __init__(self, entity: str, detail: str) -> None:
        self.entity = entity
        self.detail = detail
        super().__init__(f"Conflict on {entity}: {detail}")
