"""
Widget: display models and settings types
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, TypedDict


class RenderKind(StrEnum):
    """Every terminal display state of the widget"""

    MISSING_CONFIG = "missing_config"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NO_DATA = "no_data"
    RENDERED = "rendered"


@dataclass(frozen=True)
class RenderDetails:
    """Presentational weather data, optional lines are None when source field was absent"""

    temperature: str  # Rounded value with unit symbol, e.g. "22°C"
    unitSymbol: str  # "°C" or "°F"
    description: Optional[str] = None  # "Clear Sky"
    iconUrl: Optional[str] = None
    humidityLine: Optional[str] = None  # "Humidity: 54%"
    windLine: Optional[str] = None  # "3.1 m/s" or "8.2 mph"
    locationName: Optional[str] = None


@dataclass(frozen=True)
class RenderModel:
    """Renderer output, details are set only for RenderKind.RENDERED"""

    kind: RenderKind
    message: Optional[str] = None
    title: Optional[str] = None
    details: Optional[RenderDetails] = None


class WidgetSettings(TypedDict):
    """Sanitized widget configuration"""

    title: str
    location: str  # City name or "City,CountryCode"
    apiKey: str
    units: str  # "metric" or "imperial"
    cacheMinutes: int  # >= 1
