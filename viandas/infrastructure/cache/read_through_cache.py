"""
Read-through caches for the collections shared across screens

Each collection (meals, customers, orders, follow-ups) gets one cache owned
by the application context and handed to the use cases that read it.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ReadThroughCache(Generic[T]):
    """Snapshot of one collection, fetched on demand with TTL support"""

    def __init__(
        self,
        name: str,
        loader: Callable[[], Awaitable[List[T]]],
        ttl: Optional[int] = None,
    ):
        self.name = name
        self._loader = loader
        self._ttl = ttl  # None or 0 keeps the snapshot until refresh/invalidate
        self._items: Optional[List[T]] = None
        self._loaded_at: float = 0.0
        self._stats = {
            "hits": 0,
            "misses": 0,
            "refreshes": 0,
            "invalidations": 0,
        }
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_loaded(self) -> bool:
        return self._items is not None

    def _is_expired(self) -> bool:
        if not self._ttl:
            return False
        return time.time() - self._loaded_at >= self._ttl

    async def get(self) -> List[T]:
        """Cached snapshot, loading it first when missing or expired"""
        if self._items is not None and not self._is_expired():
            self._stats["hits"] += 1
            return list(self._items)

        self._stats["misses"] += 1
        return await self._load()

    async def refresh(self) -> List[T]:
        """Force a re-fetch from the store"""
        self._stats["refreshes"] += 1
        return await self._load()

    def invalidate(self) -> None:
        """Drop the snapshot; the next get() re-fetches"""
        self._items = None
        self._stats["invalidations"] += 1

    async def _load(self) -> List[T]:
        # A failed fetch propagates and leaves the previous snapshot in place
        items = await self._loader()
        self._items = list(items)
        self._loaded_at = time.time()
        self._logger.debug("📦 CACHE %s LOADED: %d records", self.name, len(self._items))
        return list(self._items)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        total_requests = self._stats["hits"] + self._stats["misses"]
        hit_rate = (
            (self._stats["hits"] / total_requests * 100) if total_requests > 0 else 0
        )

        return {
            **self._stats,
            "total_requests": total_requests,
            "hit_rate": round(hit_rate, 2),
            "size": len(self._items) if self._items is not None else 0,
        }
