# movie_catalog/infra/tmdb/tmdb_client.py
from __future__ import annotations

import logging
from typing import Any

import requests

from movie_catalog.services._shared.errors import UpstreamError
from movie_catalog.services._shared.ports import MovieMetadataProvider

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"


class TmdbClient(MovieMetadataProvider):
    """
    Thin client for The Movie Database (TMDB) v3 API.

    Every call sends the ``api_key`` query parameter. Transport errors and
    non-2xx answers are logged and raised as
    :class:`~movie_catalog.services._shared.errors.UpstreamError`.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
        session: requests.Session | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()
        self.log = logger or logging.getLogger(__name__)
        if not api_key:
            self.log.warning("TMDB API key is not configured; metadata requests will fail")

    def _get(self, path: str, **params: Any) -> dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {"api_key": self.api_key, **{k: v for k, v in params.items() if v is not None}}
        try:
            response = self.http.get(url, params=query, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            # Never log the URL with its query string: it carries the API key
            self.log.error("TMDB request failed: path=%s error=%s", path, type(exc).__name__)
            raise UpstreamError(f"TMDB request failed for {path}") from exc
        except ValueError as exc:
            self.log.error("TMDB returned a non-JSON body: path=%s", path)
            raise UpstreamError(f"TMDB returned an invalid payload for {path}") from exc

    def get_popular_movies(self, page: int = 1) -> dict[str, Any]:
        return self._get("movie/popular", page=page)

    def get_movie_details(self, tmdb_id: int) -> dict[str, Any]:
        return self._get(f"movie/{tmdb_id}")

    def search_movies(self, query: str, page: int = 1) -> dict[str, Any]:
        return self._get("search/movie", query=query, page=page)

    def get_genres(self) -> list[dict[str, Any]]:
        return list(self._get("genre/movie/list").get("genres", []))
