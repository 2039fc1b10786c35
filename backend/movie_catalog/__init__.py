"""Expose the application factory at package level.

``from movie_catalog import create_app`` is the entry point for WSGI servers
and the Flask CLI.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
