from __future__ import annotations

import fnmatch
import time
from typing import Any, Protocol


class CacheStore(Protocol):
    """Port for a key/value read cache holding JSON-compatible values."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: int | None = None) -> None: ...

    def delete(self, *keys: str) -> int: ...

    def delete_pattern(self, pattern: str) -> int: ...

    def exists(self, key: str) -> bool: ...


class NullCacheStore(CacheStore):
    """Cache that never stores anything. Used when no backend is configured."""

    def get(self, key: str) -> Any | None:
        return None

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        return None

    def delete(self, *keys: str) -> int:
        return 0

    def delete_pattern(self, pattern: str) -> int:
        return 0

    def exists(self, key: str) -> bool:
        return False


class InMemoryCacheStore(CacheStore):
    """Process-local cache for tests and single-process development."""

    def __init__(self, default_ttl: int | None = None) -> None:
        self.default_ttl = default_ttl
        self._data: dict[str, tuple[Any, float | None]] = {}

    def _alive(self, key: str) -> bool:
        entry = self._data.get(key)
        if entry is None:
            return False
        _, expires = entry
        if expires is not None and expires <= time.monotonic():
            self._data.pop(key, None)
            return False
        return True

    def get(self, key: str) -> Any | None:
        return self._data[key][0] if self._alive(key) else None

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        ttl = ttl if ttl is not None else self.default_ttl
        expires = time.monotonic() + ttl if ttl else None
        self._data[key] = (value, expires)

    def delete(self, *keys: str) -> int:
        return sum(1 for k in keys if self._data.pop(k, None) is not None)

    def delete_pattern(self, pattern: str) -> int:
        return self.delete(*[k for k in list(self._data) if fnmatch.fnmatchcase(k, pattern)])

    def exists(self, key: str) -> bool:
        return self._alive(key)
