import json
import logging
from typing import Any

import redis.asyncio as redis

from app.cache.backend import CacheBackend

logger = logging.getLogger(__name__)


class RedisCacheBackend(CacheBackend):
    """
    Cache backed by Redis, with JSON-serialised values and absolute TTLs.

    All public methods are safe to call even when Redis is unavailable:
    reads return None and writes are skipped, so the API keeps serving
    from the database when the cache is down.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        key_prefix: str = "",
        default_ttl: int = 1800,
        client: "redis.Redis | None" = None,
    ) -> None:
        super().__init__(key_prefix=key_prefix, default_ttl=default_ttl)
        self.url = url
        self._redis: redis.Redis | None = client

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Open the connection pool.  Called once at application startup."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
        # Ping to surface mis-configuration early (non-fatal).
        try:
            await self._redis.ping()
            logger.info("Redis connected: %s", self.url)
        except Exception as exc:
            logger.warning("Redis ping failed, serving without cache until it recovers: %s", exc)

    async def disconnect(self) -> None:
        """Close the connection pool.  Called once at application shutdown."""
        if self._redis is not None:
            try:
                await self._redis.aclose()
            except Exception as exc:
                logger.warning("Redis close failed: %s", exc)
            self._redis = None

    # ------------------------------------------------------------------
    # Core cache operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        if self._redis is None:
            self._record(hit=False)
            return None
        try:
            data = await self._redis.get(key)
            if data is None:
                logger.debug("Cache MISS: %s", key)
                self._record(hit=False)
                return None
            self._record(hit=True)
            logger.debug("Cache HIT: %s", key)
            return json.loads(data)
        except Exception as exc:
            logger.error("Cache GET error for key=%r: %s", key, exc)
            self._record(hit=False)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._redis is None:
            return
        ttl = self.default_ttl if ttl is None else ttl
        try:
            serialised = json.dumps(value, default=str)
            await self._redis.set(key, serialised, ex=ttl)
            logger.debug("Cache SET: %s (TTL=%ds)", key, ttl)
        except Exception as exc:
            logger.error("Cache SET error for key=%r: %s", key, exc)

    async def remove(self, key: str) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.delete(key)
            logger.debug("Cache DELETE: %s", key)
        except Exception as exc:
            logger.error("Cache DELETE error for key=%r: %s", key, exc)

    async def remove_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching *pattern* using SCAN (avoids blocking KEYS).
        """
        if self._redis is None:
            return 0
        try:
            keys: list[str] = []
            async for key in self._redis.scan_iter(match=pattern, count=100):
                keys.append(key)
            if keys:
                await self._redis.delete(*keys)
                logger.debug("Cache invalidated %d key(s) matching %r", len(keys), pattern)
            return len(keys)
        except Exception as exc:
            logger.error("Cache DELETE_PATTERN error for pattern=%r: %s", pattern, exc)
            return 0

    async def clear(self) -> None:
        """
        Remove every key under this cache's prefix.

        The server may be shared with other applications, so this never
        issues FLUSHDB / FLUSHALL, and with no prefix configured there is
        nothing that is provably ours: it refuses rather than match ``*``.
        """
        if not self.key_prefix:
            logger.warning("Refusing to clear Redis cache: no key prefix configured")
            return
        removed = await self.remove_pattern(f"{self.key_prefix}*")
        logger.info("Cleared %d Redis cache entries under prefix %r", removed, self.key_prefix)
