"""Tests for the ``flask movies`` command group."""

from __future__ import annotations

import responses
from movie_catalog.infra.tmdb.tmdb_client import DEFAULT_BASE_URL
from movie_catalog.repositories import MovieRepository


@responses.activate
def test_sync_command(app, session):
    responses.add(
        responses.GET,
        f"{DEFAULT_BASE_URL}/movie/popular",
        json={"page": 1, "results": [{"id": 13}]},
    )
    responses.add(
        responses.GET,
        f"{DEFAULT_BASE_URL}/movie/13",
        json={"id": 13, "title": "Forrest Gump", "genres": []},
    )

    result = app.test_cli_runner().invoke(args=["movies", "sync", "--pages", "1"])

    assert result.exit_code == 0, result.output
    assert "1 movies from 1 page(s)" in result.output
    assert MovieRepository(session=session).get_by_tmdb_id(13).title == "Forrest Gump"


@responses.activate
def test_sync_command_reports_provider_errors(app, db):
    responses.add(responses.GET, f"{DEFAULT_BASE_URL}/movie/popular", status=500)

    result = app.test_cli_runner().invoke(args=["movies", "sync", "--pages", "1"])

    assert result.exit_code == 1
    assert "TMDB request failed" in result.output


def test_sync_command_rejects_zero_pages(app, db):
    result = app.test_cli_runner().invoke(args=["movies", "sync", "--pages", "0"])
    assert result.exit_code == 2
