from __future__ import annotations

from typing import Any, Protocol


class MovieMetadataProvider(Protocol):
    """Port for the external movie metadata source (TMDB-shaped payloads)."""

    def get_popular_movies(self, page: int = 1) -> dict[str, Any]: ...

    def get_movie_details(self, tmdb_id: int) -> dict[str, Any]: ...
