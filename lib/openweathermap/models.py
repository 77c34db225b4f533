"""
Data models for OpenWeatherMap API client

This module defines the query sent to the current weather API and the
payload extracted from its response.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional, TypedDict


class UnitsSystem(StrEnum):
    """Measurement system, values are passed to the API as-is"""

    METRIC = "metric"  # Celsius, m/s
    IMPERIAL = "imperial"  # Fahrenheit, mph

    @classmethod
    def fromStr(cls, value: Optional[str], default: Optional["UnitsSystem"] = None) -> "UnitsSystem":
        """Parse units name (case-insensitive), fall back to default (metric) if invalid"""
        if default is None:
            default = cls.METRIC
        if not isinstance(value, str):
            return default
        try:
            return cls(value.strip().lower())
        except ValueError:
            return default


@dataclass(frozen=True)
class WeatherQuery:
    """Parameters of a single current weather request"""

    location: str  # City name or "City,CountryCode"
    units: UnitsSystem = UnitsSystem.METRIC
    # Never shown in repr() so it can't leak into logs
    apiKey: str = field(default="", repr=False)

    def isComplete(self) -> bool:
        """Check that both location and API key are present"""
        return bool(self.location.strip()) and bool(self.apiKey.strip())


class WeatherPayload(TypedDict):
    """Current weather extracted from API response"""

    # https://openweathermap.org/current#fields_json

    temperature: float  # main.temp, in units of the query
    description: Optional[str]  # weather[0].description
    iconId: Optional[str]  # weather[0].icon (e.g. "01d")
    humidityPercent: Optional[int]  # main.humidity
    windSpeed: Optional[float]  # wind.speed (m/s for metric, mph for imperial)
    locationName: Optional[str]  # name (resolved place name)
