"""
Widget renderer: maps weather lookup outcome to RenderModel

Pure functions only: no I/O and no mutation of inputs, equal inputs
always produce equal models.
"""

import math
from typing import Any, Optional
from urllib.parse import quote

from internal.services.weather import MissingConfigError, WeatherServiceError
from lib.openweathermap import UnitsSystem, WeatherPayload, WeatherQuery

from .models import RenderDetails, RenderKind, RenderModel

MISSING_CONFIG_MESSAGE = "Please configure both City and API Key in the widget settings."
SERVICE_UNAVAILABLE_MESSAGE = "Weather service is currently unavailable."
NO_DATA_MESSAGE = "No weather data available."

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{iconId}@2x.png"

TEMPERATURE_SYMBOLS = {
    UnitsSystem.METRIC: "°C",
    UnitsSystem.IMPERIAL: "°F",
}
WIND_SPEED_UNITS = {
    UnitsSystem.METRIC: "m/s",
    UnitsSystem.IMPERIAL: "mph",
}


def roundHalfAwayFromZero(value: float) -> int:
    """Round to nearest integer, halves go away from zero (2.5 -> 3, -2.5 -> -3)"""
    rounded = int(math.floor(abs(value) + 0.5))
    return rounded if value >= 0 else -rounded


def capitalizeWords(text: str) -> str:
    """Upper-case first letter of every space-separated word, keep the rest as is"""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def formatNumber(value: float) -> str:
    """Format number without trailing zeros: 3.0 -> "3", 3.10 -> "3.1" """
    return f"{value:.14g}"


def _isUsableNumber(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def renderWeather(
    query: WeatherQuery,
    result: WeatherPayload | WeatherServiceError | None,
    title: Optional[str] = None,
) -> RenderModel:
    """
    Build display model for weather lookup outcome

    Args:
        query: Query the result belongs to (units select symbols)
        result: Payload on success, service error on failure
        title: Optional widget title, empty string means no title

    Returns:
        RenderModel of matching kind
    """
    title = title or None

    if isinstance(result, MissingConfigError):
        return RenderModel(kind=RenderKind.MISSING_CONFIG, message=MISSING_CONFIG_MESSAGE, title=title)
    if isinstance(result, BaseException):
        return RenderModel(kind=RenderKind.SERVICE_UNAVAILABLE, message=SERVICE_UNAVAILABLE_MESSAGE, title=title)
    if not isinstance(result, dict) or not _isUsableNumber(result.get("temperature")):
        return RenderModel(kind=RenderKind.NO_DATA, message=NO_DATA_MESSAGE, title=title)

    units = UnitsSystem.fromStr(query.units)
    unitSymbol = TEMPERATURE_SYMBOLS[units]

    description = result.get("description")
    iconId = result.get("iconId")
    humidity = result.get("humidityPercent")
    windSpeed = result.get("windSpeed")

    details = RenderDetails(
        temperature=f"{roundHalfAwayFromZero(result['temperature'])}{unitSymbol}",
        unitSymbol=unitSymbol,
        description=capitalizeWords(description) if description else None,
        iconUrl=ICON_URL_TEMPLATE.format(iconId=quote(iconId, safe="")) if iconId else None,
        humidityLine=f"Humidity: {humidity}%" if humidity is not None else None,
        windLine=f"{formatNumber(windSpeed)} {WIND_SPEED_UNITS[units]}" if _isUsableNumber(windSpeed) else None,
        locationName=result.get("locationName") or None,
    )
    return RenderModel(kind=RenderKind.RENDERED, title=title, details=details)
