"""Query and envelope schemas shared by the list endpoints."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


def clamp_limit(value: int | None, *, default: int, maximum: int) -> int:
    """Return ``value`` bounded to ``1..maximum`` (``default`` when missing)."""
    if value is None:
        return default
    return min(max(value, 1), maximum)


class PaginationQuerySchema(Schema):
    """``page`` must be 1 or more; ``limit`` is silently capped at ``max_limit``."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=None)

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self.default_limit = default_limit
        self.max_limit = max_limit
        super().__init__(**kwargs)

    @post_load
    def bound_limit(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["limit"] = clamp_limit(
            data.get("limit"), default=self.default_limit, maximum=self.max_limit
        )
        return data


class MetaSchema(Schema):
    total = fields.Integer(required=True)
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)


def build_meta(*, total: int, page: int, limit: int) -> dict[str, int]:
    """Return the ``meta`` block of a paginated response."""

    return MetaSchema().dump({"total": total, "page": page, "limit": limit})
