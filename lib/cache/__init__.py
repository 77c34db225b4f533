"""
lib.cache - Generic cache library, dood!

This library provides a reusable lookaside caching infrastructure with
per-entry expiration, used to keep upstream API calls within rate limits.

Core Components:
- CacheInterface: Abstract base class for all cache implementations
- KeyGenerator: Protocol for generating cache keys from objects
- DictCache: Thread-safe dictionary-based cache implementation
- NullCache: No-op cache for testing and for disabled caching

Example Usage:
    >>> from lib.cache import DictCache, StringKeyGenerator
    >>>
    >>> cache = DictCache[str, dict](
    ...     keyGenerator=StringKeyGenerator(),
    ...     defaultTtl=600,
    ...     maxSize=1000
    ... )
    >>>
    >>> await cache.set("london|metric", {"temperature": 21.6}, ttl=300)
    >>> payload = await cache.get("london|metric")
"""

from .dict_cache import DictCache
from .interface import CacheInterface
from .key_generator import HashKeyGenerator, StringKeyGenerator
from .null_cache import NullCache
from .types import MIN_TTL, CacheEntry, K, KeyGenerator, T, V

__all__ = [
    # Core types
    "CacheEntry",
    "KeyGenerator",
    "MIN_TTL",
    "K",
    "V",
    "T",
    # Interfaces
    "CacheInterface",
    # Implementations
    "DictCache",
    "NullCache",
    # Key generators
    "StringKeyGenerator",
    "HashKeyGenerator",
]
