# tests/unit/services/test_watchlist_service.py
from __future__ import annotations

import pytest
from freezegun import freeze_time
from movie_catalog.services._shared.errors import NotFoundError
from movie_catalog.services.watchlist.service import WatchlistService
from tests.factories.movie import GenreFactory, MovieFactory, WatchlistItemFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service(memory_cache) -> WatchlistService:
    return WatchlistService(cache=memory_cache)


@pytest.fixture()
def user():
    return UserFactory()


def test_add_is_idempotent(service, user):
    movie = MovieFactory()
    first = service.add(user.id, movie.id)
    second = service.add(user.id, movie.id)
    assert first.id == second.id
    assert first.movie is not None and first.movie.is_in_watchlist is True
    assert service.get_movie_ids(user.id) == [movie.id]


def test_add_unknown_movie(service, user):
    with pytest.raises(NotFoundError):
        service.add(user.id, 31337)


def test_remove_reports_whether_deleted(service, user):
    movie = MovieFactory()
    WatchlistItemFactory(user=user, movie=movie)
    assert service.remove(user.id, movie.id) is True
    assert service.remove(user.id, movie.id) is False
    assert service.is_in_watchlist(user.id, movie.id) is False


def test_remove_unknown_movie(service, user):
    with pytest.raises(NotFoundError):
        service.remove(user.id, 31337)


def test_list_newest_first_with_genre_filter(service, user, memory_cache):
    horror = GenreFactory(name="Horror")
    comedy = GenreFactory(name="Comedy")
    with freeze_time("2026-01-01"):
        old = WatchlistItemFactory(user=user, movie=MovieFactory(genres=[horror]))
    with freeze_time("2026-02-01"):
        new = WatchlistItemFactory(user=user, movie=MovieFactory(genres=[comedy]))
    WatchlistItemFactory()  # someone else's

    items = service.get_user_watchlist(user.id)
    assert [i.id for i in items] == [new.id, old.id]
    assert memory_cache.exists(f"user_watchlist_items_{user.id}")

    only_horror = service.get_user_watchlist(user.id, genre="HORROR")
    assert [i.id for i in only_horror] == [old.id]
    assert memory_cache.exists(f"user_watchlist_items_{user.id}_genre_horror")

    # Exact name match, not substring
    assert service.get_user_watchlist(user.id, genre="Hor") == []


def test_writes_invalidate_user_lists_and_movie_view(service, user, memory_cache):
    movie = MovieFactory()
    memory_cache.set(f"user_watchlist_items_{user.id}", [])
    memory_cache.set(f"user_watchlist_items_{user.id}_genre_drama", [])
    memory_cache.set(f"movie_{movie.id}_{user.id}", {"is_in_watchlist": False})
    memory_cache.set(f"movie_{movie.id}_nouser", {"is_in_watchlist": False})

    service.add(user.id, movie.id)

    assert not memory_cache.exists(f"user_watchlist_items_{user.id}")
    assert not memory_cache.exists(f"user_watchlist_items_{user.id}_genre_drama")
    assert not memory_cache.exists(f"movie_{movie.id}_{user.id}")
    assert memory_cache.exists(f"movie_{movie.id}_nouser")
