"""
In-process cache with absolute and sliding expiry.

Each entry expires at the earlier of:

- its absolute deadline (``ttl`` seconds after it was written), and
- ``sliding_ttl`` seconds after it was last read or written.

The store is bounded: once ``max_entries`` is reached, writing a new key
evicts expired entries first and then the entry closest to its absolute
deadline.  Not shared between processes.
"""
import fnmatch
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from app.cache.backend import CacheBackend

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float
    last_access: float


class InMemoryCacheBackend(CacheBackend):

    def __init__(
        self,
        key_prefix: str = "",
        default_ttl: int = 1800,
        sliding_ttl: int | None = 300,
        max_entries: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(key_prefix=key_prefix, default_ttl=default_ttl)
        self.sliding_ttl = sliding_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._storage: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._storage)

    def _is_expired(self, entry: _Entry, now: float) -> bool:
        if now >= entry.expires_at:
            return True
        if self.sliding_ttl is not None and now - entry.last_access >= self.sliding_ttl:
            return True
        return False

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, e in self._storage.items() if self._is_expired(e, now)]
        for key in expired:
            del self._storage[key]

    def _make_room(self, now: float) -> None:
        self._purge_expired(now)
        while len(self._storage) >= self.max_entries:
            victim = min(self._storage, key=lambda k: self._storage[k].expires_at)
            del self._storage[victim]
            logger.debug("Cache EVICT: %s (capacity %d)", victim, self.max_entries)

    async def get(self, key: str) -> Any | None:
        now = self._clock()
        entry = self._storage.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            self._record(hit=False)
            return None

        if self._is_expired(entry, now):
            logger.debug("Cache MISS: %s (expired)", key)
            del self._storage[key]
            self._record(hit=False)
            return None

        entry.last_access = now
        logger.debug("Cache HIT: %s", key)
        self._record(hit=True)
        return entry.value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        now = self._clock()
        ttl = self.default_ttl if ttl is None else ttl
        if key not in self._storage and len(self._storage) >= self.max_entries:
            self._make_room(now)
        self._storage[key] = _Entry(value=value, expires_at=now + ttl, last_access=now)
        logger.debug("Cache SET: %s (TTL=%ds)", key, ttl)

    async def remove(self, key: str) -> None:
        if self._storage.pop(key, None) is not None:
            logger.debug("Cache DELETE: %s", key)

    async def remove_pattern(self, pattern: str) -> int:
        matching = [k for k in self._storage if fnmatch.fnmatchcase(k, pattern)]
        for key in matching:
            del self._storage[key]
        if matching:
            logger.debug("Cache invalidated %d key(s) matching %r", len(matching), pattern)
        return len(matching)

    async def clear(self) -> None:
        self._storage.clear()
        logger.info("Cleared all in-memory cache entries")
