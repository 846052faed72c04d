"""
Backend-neutral cache contract used by the service layer.

Values are JSON-compatible structures (dicts / lists of primitives).
Entries are written whole and never mutated in place, so concurrent
readers need no locking beyond what each backend already provides.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class CacheBackend(ABC):
    """
    Abstract key-value cache with per-entry TTL.

    Implementations must never raise to callers for infrastructure
    problems: a failed read is a miss and a failed write is a no-op.
    """

    def __init__(self, key_prefix: str = "", default_ttl: int = 1800) -> None:
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Open any underlying connection.  No-op by default."""

    async def disconnect(self) -> None:
        """Release any underlying connection.  No-op by default."""

    # ------------------------------------------------------------------
    # Core cache operations
    # ------------------------------------------------------------------

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the cached value for *key*, or None on a miss."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key* for *ttl* seconds (backend default when None)."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Drop *key* if present."""

    @abstractmethod
    async def remove_pattern(self, pattern: str) -> int:
        """Drop every key matching the glob *pattern*; return how many went."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry owned by this cache."""

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def build_key(self, namespace: str, operation: str | None = None, **params: Any) -> str:
        """
        Build a deterministic key from *namespace*, *operation* and *params*.

        Parameters are sorted by name and ``None`` is rendered as
        ``null``, so identical queries always map to the same key and
        two queries that differ in any parameter never collide::

            >>> cache.build_key("ingredient", "list", page=1, is_active=None)
            'coffee:ingredient:list:is_active=null:page=1'
        """
        parts = [namespace]
        if operation:
            parts.append(operation)
        for name in sorted(params):
            parts.append(f"{name}={_render(params[name])}")
        return self.key_prefix + ":".join(parts)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _record(self, hit: bool) -> None:
        if hit:
            self._hits += 1
        else:
            self._misses += 1

    @property
    def stats(self) -> dict:
        """Return a snapshot of hit/miss counters for metrics endpoints."""
        total = self._hits + self._misses
        return {
            "backend": self.name,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }

    @property
    def name(self) -> str:
        return type(self).__name__


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    # Separators inside free text (search terms) must not merge two fields.
    return str(value).replace("\\", "\\\\").replace(":", "\\:")
