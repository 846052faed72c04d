"""
Cache backends for the service layer.

- ``CacheBackend``: abstract contract (get / set / remove / clear).
- ``InMemoryCacheBackend``: in-process store with sliding + absolute expiry.
- ``RedisCacheBackend``: networked store, JSON values, absolute TTL only.

``create_cache_backend`` picks one from settings.
"""
from app.cache.backend import CacheBackend
from app.cache.memory import InMemoryCacheBackend
from app.cache.redis import RedisCacheBackend
from app.config import Settings


def create_cache_backend(config: Settings) -> CacheBackend:
    backend = config.CACHE_BACKEND.lower()
    if backend == "redis":
        return RedisCacheBackend(
            url=config.REDIS_URL,
            key_prefix=config.CACHE_KEY_PREFIX,
            default_ttl=config.CACHE_DEFAULT_TTL,
        )
    if backend == "memory":
        return InMemoryCacheBackend(
            key_prefix=config.CACHE_KEY_PREFIX,
            default_ttl=config.CACHE_DEFAULT_TTL,
            sliding_ttl=config.CACHE_SLIDING_TTL,
            max_entries=config.CACHE_MAX_ENTRIES,
        )
    raise ValueError(f"Unknown CACHE_BACKEND {config.CACHE_BACKEND!r}; expected 'memory' or 'redis'")


__all__ = [
    "CacheBackend",
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "create_cache_backend",
]
