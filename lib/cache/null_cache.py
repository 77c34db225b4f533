"""
Null cache implementation for lib.cache, dood!

This module provides a no-op cache implementation that implements the
CacheInterface but doesn't actually cache anything. Used when caching
is disabled in configuration: every lookup goes to the upstream service.
"""

from typing import Any, Dict, Optional

from .interface import CacheInterface
from .types import CacheEntry, K, V


class NullCache(CacheInterface[K, V]):
    """No-op cache that never stores anything, dood!

    Useful for:
    - Testing without cache side effects
    - Disabling cache in production
    """

    async def getEntry(self, key: K) -> Optional[CacheEntry[V]]:
        """Always return None (cache miss), dood!"""
        return None

    async def set(self, key: K, value: V, ttl: Optional[int] = None) -> bool:
        """
        Do nothing (don't cache), but pretend to succeed, dood!

        Returns:
            bool: Always True
        """
        return True

    async def invalidate(self, key: K) -> bool:
        """Nothing is stored, so nothing is removed"""
        return False

    def clear(self) -> None:
        pass

    def getStats(self) -> Dict[str, Any]:
        """
        Return cache statistics indicating cache is disabled, dood!
        """
        return {"enabled": False}
