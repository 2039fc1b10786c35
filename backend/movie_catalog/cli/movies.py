"""Flask CLI commands for the movie catalog."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from movie_catalog.api.deps import build_movie_service
from movie_catalog.services._shared.errors import UpstreamError

LOGGER = logging.getLogger(__name__)


@click.group("movies")
def movies_cli() -> None:
    """Movie catalog maintenance commands."""


@movies_cli.command("sync")
@click.option(
    "--pages",
    type=click.IntRange(min=1),
    default=None,
    help="Number of 'popular' pages to fetch (defaults to TMDB_SYNC_PAGES).",
)
@with_appcontext
def sync_command(pages: int | None) -> None:
    """Upsert popular movies from TMDB into the catalog."""
    pages = pages or int(current_app.config.get("TMDB_SYNC_PAGES", 5))
    LOGGER.info("Starting movie sync", extra={"page": pages})
    try:
        result = build_movie_service(with_provider=True).sync_popular_movies(pages)
    except UpstreamError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{result.message}: {result.movies} movies from {result.pages} page(s)")
