"""
Abstract cache interface for lib.cache, dood!

This module defines the generic CacheInterface that all cache implementations
must follow. It provides a consistent API for different cache backends
while maintaining type safety through Python generics.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional

from .types import CacheEntry, K, V


class CacheInterface(ABC, Generic[K, V]):
    """
    Generic cache interface for any key-value storage with per-entry expiry, dood!

    Implementations are best-effort: backend failures must never be propagated
    to the caller, a failed read is a cache miss and a failed write or
    invalidation returns False.

    Type Parameters:
        K: The key type
        V: The value type

    Example:
        >>> from lib.cache import DictCache
        >>>
        >>> cache = DictCache[str, dict](defaultTtl=600)
        >>> await cache.set("london|metric", {"temperature": 21.6}, ttl=300)
        >>> payload = await cache.get("london|metric")
        >>> await cache.invalidate("london|metric")
    """

    @abstractmethod
    async def getEntry(self, key: K) -> Optional[CacheEntry[V]]:
        """
        Get cached entry (value and expiration time) by key, dood!

        Args:
            key: The cache key to retrieve

        Returns:
            Optional[CacheEntry[V]]: The entry if found and not expired, None otherwise
        """
        pass

    async def get(self, key: K) -> Optional[V]:
        """
        Get cached value by key, dood!

        Returns None if the key is not found or the cached value has expired.

        Args:
            key: The cache key to retrieve

        Returns:
            Optional[V]: The cached value if found and not expired, None otherwise
        """
        entry = await self.getEntry(key)
        if entry is None:
            return None
        return entry.value

    @abstractmethod
    async def set(self, key: K, value: V, ttl: Optional[int] = None) -> bool:
        """
        Store value in cache, dood!

        Overwrites any existing entry for the same key unconditionally.

        Args:
            key: The cache key to store the value under
            value: The value to cache
            ttl: Entry lifetime in seconds. If None, the cache's default TTL is used.
                 Values below 1 second are clamped to 1 second.

        Returns:
            bool: True if the value was successfully stored, False otherwise
        """
        pass

    @abstractmethod
    async def invalidate(self, key: K) -> bool:
        """
        Remove entry from cache immediately, regardless of its expiry, dood!

        Args:
            key: The cache key to drop

        Returns:
            bool: True if an entry was removed, False otherwise
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """
        Clear all cached data, dood!
        """
        pass

    @abstractmethod
    def getStats(self) -> Dict[str, Any]:
        """
        Get cache statistics, dood!

        Returns implementation-specific statistics about the cache state.
        Common metrics include entry count, size limits and default TTL.

        Returns:
            Dict[str, Any]: Dictionary containing cache statistics
        """
        pass
