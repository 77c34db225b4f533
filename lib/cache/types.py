"""
Core type definitions and protocols for lib.cache, dood!

This module contains the fundamental type definitions and protocols
used throughout the cache library: key/value type variables, the
KeyGenerator protocol and the immutable CacheEntry record.
"""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

# Type variables for generic cache operations, dood!
K = TypeVar("K")  # Key type - can be any hashable type
V = TypeVar("V")  # Value type - can be any type
T = TypeVar("T", contravariant=True)  # Generic object type for key generators

# Minimal allowed entry lifetime, in seconds
MIN_TTL = 1


class KeyGenerator(Protocol[T]):
    """
    Protocol for generating cache keys from objects, dood!

    This protocol defines the interface for converting arbitrary objects
    into string cache keys. Different implementations can use various
    strategies like hashing or pass-through.

    Example:
        >>> class StringKeyGenerator(KeyGenerator[str]):
        ...     def generateKey(self, obj: str) -> str:
        ...         return obj
        >>>
        >>> generator = StringKeyGenerator()
        >>> key = generator.generateKey("london|metric")
        >>> print(key)  # "london|metric"
    """

    def generateKey(self, obj: T) -> str:
        """
        Generate string cache key from object, dood!

        Args:
            obj: The object to convert to a cache key

        Returns:
            str: A string representation suitable for use as a cache key
        """
        ...


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """Cached value with its absolute expiration time

    Entries are never mutated: refreshing a key stores a new entry.
    """

    value: V
    expiresAt: float  # Timestamp (same clock as the owning cache)

    def isExpired(self, now: float) -> bool:
        """Check if entry is expired at given moment"""
        return now >= self.expiresAt
