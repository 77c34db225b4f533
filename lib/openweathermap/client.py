"""
OpenWeatherMap Async Client

This module provides the OpenWeatherMapClient class for fetching current
weather from the OpenWeatherMap API. The client performs exactly one request
per call and doesn't cache or retry: both belong to the caller.
"""

import asyncio
import logging
import math
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .exceptions import (
    InvalidResponseError,
    UpstreamStatusError,
    WeatherNetworkError,
    WeatherTimeoutError,
)
from .models import WeatherPayload, WeatherQuery

logger = logging.getLogger(__name__)


class OpenWeatherMapClient:
    """
    Async client for OpenWeatherMap current weather API

    Creates a new HTTP session for each request to support proper concurrent requests.
    Every failure is reported by raising a WeatherClientError subclass.

    Example usage:
        client = OpenWeatherMapClient(requestTimeout=10)
        query = WeatherQuery(location="London,GB", units=UnitsSystem.METRIC, apiKey="your_key")

        try:
            payload = await client.fetchCurrentWeather(query)
            print(f"Temperature: {payload['temperature']}°C")
        except WeatherClientError as e:
            print(f"Weather unavailable: {e}")
    """

    CURRENT_WEATHER_API = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, apiUrl: str = CURRENT_WEATHER_API, requestTimeout: float = 10):
        """
        Initialize OpenWeatherMap client

        Args:
            apiUrl: Current weather endpoint URL
            requestTimeout: Upper bound for the whole request (seconds)
        """
        self.apiUrl = apiUrl
        self.requestTimeout = requestTimeout

    def buildRequestUrl(self, query: WeatherQuery, maskApiKey: bool = False) -> str:
        """
        Build request URL for given query

        All parameter values are percent-encoded (spaces become %20).

        Args:
            query: Weather query
            maskApiKey: Replace API key with "***" (for logging)

        Returns:
            Full request URL
        """
        params = {
            "q": quote(query.location.strip(), safe=""),
            "appid": "***" if maskApiKey else quote(query.apiKey.strip(), safe=""),
            "units": quote(str(query.units), safe=""),
        }
        queryString = "&".join(f"{name}={value}" for name, value in params.items())
        return f"{self.apiUrl}?{queryString}"

    async def fetchCurrentWeather(self, query: WeatherQuery) -> WeatherPayload:
        """
        Fetch current weather for query location

        Args:
            query: Location, units system and API key

        Returns:
            WeatherPayload with temperature and optional details

        Raises:
            WeatherTimeoutError: Request didn't finish within requestTimeout
            WeatherNetworkError: Transport level failure
            UpstreamStatusError: API responded with non-200 status
            InvalidResponseError: Body isn't a JSON object or has no temperature
        """
        url = self.buildRequestUrl(query)
        logger.debug(f"Making request to {self.buildRequestUrl(query, maskApiKey=True)}")

        try:
            response = await asyncio.wait_for(self._makeRequest(url), timeout=self.requestTimeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error(f"Request timeout for {query.location!r} after {self.requestTimeout}s")
            raise WeatherTimeoutError(f"Request timed out after {self.requestTimeout}s") from e
        except httpx.RequestError as e:
            errorMessage = self._maskSecret(f"{type(e).__name__}: {e}", query)
            logger.error(f"Network error: {errorMessage}")
            raise WeatherNetworkError(f"Network error: {errorMessage}") from None

        if response.status_code != 200:
            if response.status_code == 401:
                logger.error("Invalid API key")
            elif response.status_code == 404:
                logger.warning(f"Location not found: {query.location!r}")
            elif response.status_code == 429:
                logger.error("Rate limit exceeded")
            else:
                logger.error(f"API request failed: {response.status_code}")
            raise UpstreamStatusError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            raise InvalidResponseError("Invalid JSON from API") from e

        logger.debug(f"API response: {data}")
        return self.parsePayload(data)

    async def _makeRequest(self, url: str) -> httpx.Response:
        """Perform GET request in a fresh session"""
        async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
            return await session.get(url)

    @staticmethod
    def _maskSecret(text: str, query: WeatherQuery) -> str:
        apiKey = query.apiKey.strip()
        if apiKey:
            return text.replace(apiKey, "***")
        return text

    @classmethod
    def parsePayload(cls, data: Any) -> WeatherPayload:
        """
        Convert API response to WeatherPayload

        Temperature is required, every other field is extracted independently
        and becomes None if missing or malformed.

        Raises:
            InvalidResponseError: data isn't an object or has no numeric main.temp
        """
        if not isinstance(data, dict):
            raise InvalidResponseError("Response is not a JSON object")

        mainData = data.get("main")
        if not isinstance(mainData, dict):
            raise InvalidResponseError("Response has no 'main' section")

        temperature = cls._toFloat(mainData.get("temp"))
        if temperature is None:
            raise InvalidResponseError("Response has no valid temperature")

        weatherList = data.get("weather")
        weatherInfo: Dict[str, Any] = {}
        if isinstance(weatherList, list) and weatherList and isinstance(weatherList[0], dict):
            weatherInfo = weatherList[0]

        windData = data.get("wind")
        if not isinstance(windData, dict):
            windData = {}

        humidity = cls._toFloat(mainData.get("humidity"))

        result: WeatherPayload = {
            "temperature": temperature,
            "description": cls._toStr(weatherInfo.get("description")),
            "iconId": cls._toStr(weatherInfo.get("icon")),
            "humidityPercent": int(round(humidity)) if humidity is not None else None,
            "windSpeed": cls._toFloat(windData.get("speed")),
            "locationName": cls._toStr(data.get("name")),
        }
        return result

    @staticmethod
    def _toFloat(value: Any) -> Optional[float]:
        # bool is an int subclass, but never a measurement
        if value is None or isinstance(value, bool):
            return None
        try:
            ret = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return ret if math.isfinite(ret) else None

    @staticmethod
    def _toStr(value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value if value else None
