"""
Built-in key generator implementations for lib.cache, dood!

Available Generators:
    - StringKeyGenerator: Pass-through for string keys
    - HashKeyGenerator: Prefixed SHA512 hash of the key's string form
"""

import hashlib
from typing import Any

from .types import KeyGenerator


class StringKeyGenerator(KeyGenerator[str]):
    """
    Pass-through key generator for string keys, dood!

    Example:
        >>> generator = StringKeyGenerator()
        >>> generator.generateKey("london|metric")
        'london|metric'

    Note:
        This generator validates that the input is actually a string.
        If you pass a non-string value, it will raise a TypeError.
    """

    def generateKey(self, obj: str) -> str:
        """
        Generate cache key from string input, dood!

        Raises:
            TypeError: If obj is not a string
        """
        if not isinstance(obj, str):
            raise TypeError(f"StringKeyGenerator expects string input, got {type(obj).__name__}, dood!")

        return obj


class HashKeyGenerator(KeyGenerator[Any]):
    """
    SHA512 hash key generator, dood!

    Converts the object to a string (str() for strings, repr() otherwise) and
    hashes it, so storage keys have fixed length regardless of user input.
    An optional prefix keeps different key spaces apart in a shared backend.

    Example:
        >>> generator = HashKeyGenerator(prefix="simple_weather_")
        >>> key = generator.generateKey("london|metric")
        >>> len(key)
        143
    """

    __slots__ = ("prefix",)

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def generateKey(self, obj: Any) -> str:
        """
        Generate prefixed SHA512 hash from any object, dood!

        Returns:
            str: prefix followed by 128-character SHA512 hexadecimal hash
        """
        objStr = obj if isinstance(obj, str) else repr(obj)
        return self.prefix + hashlib.sha512(objStr.encode("utf-8")).hexdigest()
