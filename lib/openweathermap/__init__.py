"""
OpenWeatherMap Async Client Library

This module provides an async client for the OpenWeatherMap current weather API.
Caching isn't done here: wrap the client with a cache-aware service instead.

Example usage:
    from lib.openweathermap import OpenWeatherMapClient, UnitsSystem, WeatherQuery

    client = OpenWeatherMapClient(requestTimeout=10)
    payload = await client.fetchCurrentWeather(
        WeatherQuery(location="Moscow,RU", units=UnitsSystem.METRIC, apiKey="your_api_key")
    )
    print(f"Temperature: {payload['temperature']}°C")
"""

from .client import OpenWeatherMapClient
from .exceptions import (
    InvalidResponseError,
    UpstreamStatusError,
    WeatherClientError,
    WeatherNetworkError,
    WeatherTimeoutError,
)
from .models import UnitsSystem, WeatherPayload, WeatherQuery

__all__ = [
    "OpenWeatherMapClient",
    "UnitsSystem",
    "WeatherQuery",
    "WeatherPayload",
    "WeatherClientError",
    "WeatherTimeoutError",
    "WeatherNetworkError",
    "UpstreamStatusError",
    "InvalidResponseError",
]
