# movie_catalog/infra/redis/redis_cache_store.py
from __future__ import annotations

import json
import logging
from typing import Any

import redis
from redis.exceptions import RedisError

from movie_catalog.services._shared.ports import CacheStore


class RedisCacheStore(CacheStore):
    """
    JSON read cache on Redis.

    Values are stored as JSON strings with ``SETEX``. Pattern deletes walk the
    keyspace with ``SCAN`` (never ``KEYS``). Redis failures are logged and
    reported as a miss or a no-op, so an unavailable cache never fails a request.
    """

    def __init__(
        self,
        r: redis.Redis,
        *,
        default_ttl: int = 300,
        logger: logging.Logger | None = None,
    ) -> None:
        self.r = r
        self.default_ttl = default_ttl
        self.log = logger or logging.getLogger(__name__)

    def get(self, key: str) -> Any | None:
        try:
            raw = self.r.get(key)
        except RedisError:
            self.log.warning("Cache read failed for key=%s", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            self.log.warning("Dropping undecodable cache entry key=%s", key)
            self.delete(key)
            return None

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        ttl = ttl if ttl is not None else self.default_ttl
        try:
            self.r.setex(key, ttl, json.dumps(value, default=str))
        except RedisError:
            self.log.warning("Cache write failed for key=%s", key, exc_info=True)

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return int(self.r.delete(*keys))
        except RedisError:
            self.log.warning("Cache delete failed for keys=%s", keys, exc_info=True)
            return 0

    def delete_pattern(self, pattern: str) -> int:
        deleted = 0
        try:
            batch: list[Any] = []
            for key in self.r.scan_iter(match=pattern, count=500):
                batch.append(key)
                if len(batch) >= 500:
                    deleted += int(self.r.delete(*batch))
                    batch.clear()
            if batch:
                deleted += int(self.r.delete(*batch))
        except RedisError:
            self.log.warning("Cache pattern delete failed for pattern=%s", pattern, exc_info=True)
        return deleted

    def exists(self, key: str) -> bool:
        try:
            return int(self.r.exists(key)) == 1
        except RedisError:
            self.log.warning("Cache exists failed for key=%s", key, exc_info=True)
            return False
