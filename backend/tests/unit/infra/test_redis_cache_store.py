# tests/unit/infra/test_redis_cache_store.py
from __future__ import annotations

import fakeredis
import pytest
from movie_catalog.infra.redis.redis_cache_store import RedisCacheStore
from redis.exceptions import ConnectionError as RedisConnectionError


@pytest.fixture()
def r():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer())


@pytest.fixture()
def store(r) -> RedisCacheStore:
    return RedisCacheStore(r, default_ttl=60)


class _DownRedis:
    """Client whose every call fails like an unreachable server."""

    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise RedisConnectionError("connection refused")

        return _fail


def test_set_get_round_trips_json(store, r):
    store.set("movie_1_nouser", {"id": 1, "genres": [{"id": 28, "name": "Action"}]})
    assert store.get("movie_1_nouser") == {"id": 1, "genres": [{"id": 28, "name": "Action"}]}
    assert 0 < r.ttl("movie_1_nouser") <= 60


def test_explicit_ttl_overrides_default(store, r):
    store.set("k", [1, 2], ttl=5)
    assert 0 < r.ttl("k") <= 5


def test_get_missing_key_is_none(store):
    assert store.get("nope") is None
    assert store.exists("nope") is False


def test_delete_counts_removed_keys(store):
    store.set("a", 1)
    store.set("b", 2)
    assert store.delete("a", "b", "c") == 2
    assert store.delete() == 0


def test_delete_pattern_only_touches_matching_keys(store):
    for page in range(3):
        store.set(f"movies_{page}_10_allgenre_nosearch", {"page": page})
    store.set("movie_5_nouser", {"id": 5})
    store.set("movie_5_12", {"id": 5})

    assert store.delete_pattern("movies_*") == 3
    assert store.exists("movie_5_nouser")

    assert store.delete_pattern("movie_5_*") == 2
    assert store.get("movie_5_12") is None


def test_undecodable_entry_is_dropped(store, r):
    r.set("broken", b"{not json")
    assert store.get("broken") is None
    assert r.exists("broken") == 0


def test_redis_failures_degrade_to_miss_and_noop():
    store = RedisCacheStore(_DownRedis())
    assert store.get("k") is None
    store.set("k", {"v": 1})
    assert store.delete("k") == 0
    assert store.delete_pattern("k*") == 0
    assert store.exists("k") is False
