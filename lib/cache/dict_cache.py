"""
Dictionary-based cache implementation for lib.cache, dood!

In-memory cache with per-entry expiration, lazy expiry on read and
size-bounded storage. All operations on the underlying dict are guarded
by a reentrant lock, so the cache can be shared between coroutines and threads.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from .interface import CacheInterface
from .key_generator import StringKeyGenerator
from .types import MIN_TTL, CacheEntry, K, KeyGenerator, V

logger = logging.getLogger(__name__)


class DictCache(CacheInterface[K, V]):
    """Thread-safe dictionary-based cache, dood!

    Example:
        >>> cache = DictCache[str, dict](defaultTtl=600, maxSize=100)
        >>> await cache.set("london|metric", {"temperature": 21.6})
        >>> await cache.get("london|metric")
        {'temperature': 21.6}
    """

    def __init__(
        self,
        keyGenerator: Optional[KeyGenerator[K]] = None,
        defaultTtl: int = 3600,
        maxSize: Optional[int] = 1000,
        timeSource: Callable[[], float] = time.time,
    ):
        """
        Initialize cache, dood!

        Args:
            keyGenerator: Converts keys to storage strings (default: StringKeyGenerator)
            defaultTtl: TTL in seconds used when set() is called without one
            maxSize: Max number of stored entries, None means unbounded
            timeSource: Clock returning current timestamp in seconds
        """
        self._keyGenerator: KeyGenerator[Any] = keyGenerator if keyGenerator is not None else StringKeyGenerator()
        self._defaultTtl = max(MIN_TTL, defaultTtl)
        self._maxSize = maxSize
        self._timeSource = timeSource
        self._storage: Dict[str, CacheEntry[V]] = {}
        self._lock = threading.RLock()

    def _now(self) -> float:
        return self._timeSource()

    def _cleanupExpired(self, now: float) -> None:
        """Remove expired entries, must be called with lock held"""
        expiredKeys = [key for key, entry in self._storage.items() if entry.isExpired(now)]
        for key in expiredKeys:
            del self._storage[key]

        if expiredKeys:
            logger.debug(f"Cleaned up {len(expiredKeys)} expired entries")

    def _evictIfFull(self) -> None:
        """Drop soonest-to-expire entries until there is room for a new one"""
        if self._maxSize is None:
            return

        while self._storage and len(self._storage) >= self._maxSize:
            victim = min(self._storage, key=lambda k: self._storage[k].expiresAt)
            del self._storage[victim]
            logger.debug(f"Evicted cache entry {victim}")

    async def getEntry(self, key: K) -> Optional[CacheEntry[V]]:
        try:
            storageKey = self._keyGenerator.generateKey(key)
            with self._lock:
                entry = self._storage.get(storageKey)
                if entry is None:
                    logger.debug(f"Cache miss for key: {storageKey}")
                    return None

                if entry.isExpired(self._now()):
                    del self._storage[storageKey]
                    logger.debug(f"Removed expired entry: {storageKey}")
                    return None

                logger.debug(f"Cache hit for key: {storageKey}")
                return entry
        except Exception as e:
            logger.error(f"Failed to get cache entry {key}: {e}")
            return None

    async def set(self, key: K, value: V, ttl: Optional[int] = None) -> bool:
        try:
            storageKey = self._keyGenerator.generateKey(key)
            effectiveTtl = self._defaultTtl if ttl is None else max(MIN_TTL, ttl)
            with self._lock:
                now = self._now()
                self._cleanupExpired(now)
                if storageKey not in self._storage:
                    self._evictIfFull()
                self._storage[storageKey] = CacheEntry(value=value, expiresAt=now + effectiveTtl)

            logger.debug(f"Stored cache entry for key: {storageKey}, ttl: {effectiveTtl}s")
            return True
        except Exception as e:
            logger.error(f"Failed to set cache entry {key}: {e}")
            return False

    async def invalidate(self, key: K) -> bool:
        try:
            storageKey = self._keyGenerator.generateKey(key)
            with self._lock:
                removed = self._storage.pop(storageKey, None) is not None
            if removed:
                logger.debug(f"Invalidated cache entry: {storageKey}")
            return removed
        except Exception as e:
            logger.error(f"Failed to invalidate cache entry {key}: {e}")
            return False

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()
        logger.debug("Cleared all cache data")

    def getStats(self) -> Dict[str, Any]:
        with self._lock:
            self._cleanupExpired(self._now())
            entries = len(self._storage)

        return {
            "enabled": True,
            "entries": entries,
            "maxSize": self._maxSize,
            "defaultTtl": self._defaultTtl,
            "threadSafe": True,
        }
