"""
Weather service: lookaside cache in front of OpenWeatherMap client

This module owns cache key derivation, expiration policy and invalidation
on reconfiguration. Cache failures are treated as misses, upstream failures
are collapsed into ServiceUnavailableError and are never cached.
"""

import asyncio
import logging
from typing import Dict, Optional

from lib.cache import CacheInterface, NullCache
from lib.openweathermap import OpenWeatherMapClient, UnitsSystem, WeatherClientError, WeatherPayload, WeatherQuery

from .exceptions import MissingConfigError, ServiceUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_TTL = 600  # 10 minutes


class WeatherService:
    """Current weather lookup with caching

    Composed explicitly by the host:

        cache = DictCache[str, WeatherPayload](defaultTtl=600)
        service = WeatherService(client=OpenWeatherMapClient(), cache=cache)
        payload = await service.getWeather(query, ttl=300)

    Concurrent cache misses for the same key are collapsed into a single
    upstream request when singleFlight is enabled.
    """

    def __init__(
        self,
        client: OpenWeatherMapClient,
        cache: Optional[CacheInterface[str, WeatherPayload]] = None,
        defaultTtl: int = DEFAULT_TTL,
        singleFlight: bool = True,
    ):
        """
        Initialize weather service

        Args:
            client: Upstream API client
            cache: Cache for weather payloads (default: NullCache, i.e. no caching)
            defaultTtl: Cache TTL in seconds, used when getWeather() is called without one
            singleFlight: Collapse concurrent fetches for the same key
        """
        self.client = client
        self.cache: CacheInterface[str, WeatherPayload] = cache if cache is not None else NullCache()
        self.defaultTtl = defaultTtl
        self.singleFlight = singleFlight
        self._fetchLocks: Dict[str, asyncio.Lock] = {}
        self._fetchLockUsers: Dict[str, int] = {}

    @staticmethod
    def makeCacheKey(location: str, units: UnitsSystem | str) -> str:
        """
        Derive cache key for location and units

        Location is case-insensitive, units are part of the key,
        so the same city in different units never collides.

        Example:
            >>> WeatherService.makeCacheKey("London,GB", UnitsSystem.METRIC)
            'london,gb|metric'
        """
        return f"{location.strip().lower()}|{units}"

    async def getWeather(self, query: WeatherQuery, ttl: Optional[int] = None) -> WeatherPayload:
        """
        Get current weather, from cache if possible

        Args:
            query: Location, units and API key
            ttl: Cache TTL for freshly fetched payload in seconds (default: defaultTtl)

        Returns:
            WeatherPayload

        Raises:
            MissingConfigError: Location or API key is empty (nothing is looked up or fetched)
            ServiceUnavailableError: Upstream fetch failed
        """
        if not query.isComplete():
            raise MissingConfigError("Both location and API key must be configured")

        cacheKey = self.makeCacheKey(query.location, query.units)
        cachedData = await self._cacheGet(cacheKey)
        if cachedData is not None:
            return cachedData

        if not self.singleFlight:
            return await self._fetchAndStore(query, cacheKey, ttl)

        lock = self._acquireFetchLock(cacheKey)
        try:
            async with lock:
                # Someone could have fetched it while we were waiting
                cachedData = await self._cacheGet(cacheKey)
                if cachedData is not None:
                    return cachedData
                return await self._fetchAndStore(query, cacheKey, ttl)
        finally:
            self._releaseFetchLock(cacheKey)

    async def onConfigChange(
        self,
        oldLocation: Optional[str],
        oldUnits: Optional[UnitsSystem | str],
        newLocation: Optional[str],
        newUnits: Optional[UnitsSystem | str],
    ) -> bool:
        """
        Drop cached data of previous configuration if location or units changed

        Returns:
            True if location or units changed and old key is no longer cached,
            False if there was nothing to drop or invalidation failed
        """
        if not oldLocation or not oldLocation.strip():
            return False

        oldKey = self.makeCacheKey(oldLocation, UnitsSystem.fromStr(oldUnits))
        newKey = self.makeCacheKey(newLocation or "", UnitsSystem.fromStr(newUnits))
        if oldKey == newKey:
            return False

        try:
            await self.cache.invalidate(oldKey)
            logger.debug(f"Invalidated cached weather for {oldKey}")
        except Exception as e:
            logger.warning(f"Failed to invalidate cached weather {oldKey}: {e}")
            return False
        return True

    async def _fetchAndStore(self, query: WeatherQuery, cacheKey: str, ttl: Optional[int]) -> WeatherPayload:
        try:
            payload = await self.client.fetchCurrentWeather(query)
        except WeatherClientError as e:
            logger.warning(f"Failed to fetch weather for {cacheKey}: {type(e).__name__}: {e}")
            raise ServiceUnavailableError("Weather service is currently unavailable") from e

        effectiveTtl = self.defaultTtl if ttl is None else ttl
        try:
            await self.cache.set(cacheKey, payload, effectiveTtl)
            logger.debug(f"Cached weather result: {cacheKey}, ttl: {effectiveTtl}s")
        except Exception as e:
            logger.warning(f"Failed to cache weather result {cacheKey}: {e}")

        return payload

    async def _cacheGet(self, cacheKey: str) -> Optional[WeatherPayload]:
        try:
            cachedData = await self.cache.get(cacheKey)
            if cachedData is not None:
                logger.debug(f"Cache hit for weather: {cacheKey}")
            return cachedData
        except Exception as e:
            logger.warning(f"Cache error for weather {cacheKey}: {e}")
            return None

    def _acquireFetchLock(self, cacheKey: str) -> asyncio.Lock:
        lock = self._fetchLocks.get(cacheKey)
        if lock is None:
            lock = asyncio.Lock()
            self._fetchLocks[cacheKey] = lock
        self._fetchLockUsers[cacheKey] = self._fetchLockUsers.get(cacheKey, 0) + 1
        return lock

    def _releaseFetchLock(self, cacheKey: str) -> None:
        users = self._fetchLockUsers.get(cacheKey, 1) - 1
        if users > 0:
            self._fetchLockUsers[cacheKey] = users
        else:
            self._fetchLockUsers.pop(cacheKey, None)
            self._fetchLocks.pop(cacheKey, None)
