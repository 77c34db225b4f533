"""
Widget settings: validation of user-supplied configuration
"""

import logging
import re
from typing import Any, Mapping

from lib.openweathermap import UnitsSystem, WeatherQuery

from .models import WidgetSettings

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Weather"
DEFAULT_CACHE_MINUTES = 10
MIN_CACHE_MINUTES = 1

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitizeText(value: Any) -> str:
    """Convert to single-line text: drop markup, collapse whitespace, strip"""
    if value is None:
        return ""
    text = _TAG_RE.sub("", str(value))
    return _WHITESPACE_RE.sub(" ", text).strip()


def parseCacheMinutes(value: Any) -> int:
    """Parse cache duration, clamped to at least one minute"""
    if value is None or isinstance(value, bool):
        return DEFAULT_CACHE_MINUTES
    try:
        minutes = int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Invalid cache duration {value!r}, using {DEFAULT_CACHE_MINUTES} minutes")
        return DEFAULT_CACHE_MINUTES
    return max(MIN_CACHE_MINUTES, minutes)


def sanitizeSettings(raw: Mapping[str, Any]) -> WidgetSettings:
    """
    Validate raw widget settings

    Unknown units fall back to metric, cache duration is clamped to >= 1 minute,
    missing title becomes "Weather" (empty title is kept and means "no title").

    Args:
        raw: Settings with keys title, location, apiKey, units, cacheMinutes

    Returns:
        Sanitized WidgetSettings
    """
    rawUnits = raw.get("units")
    units = UnitsSystem.fromStr(rawUnits)
    if rawUnits is not None and str(rawUnits).strip().lower() != units:
        logger.warning(f"Unknown units {rawUnits!r}, using {units}")

    return {
        "title": DEFAULT_TITLE if raw.get("title") is None else sanitizeText(raw.get("title")),
        "location": sanitizeText(raw.get("location")),
        "apiKey": sanitizeText(raw.get("apiKey")),
        "units": str(units),
        "cacheMinutes": parseCacheMinutes(raw.get("cacheMinutes")),
    }


def settingsToQuery(settings: WidgetSettings) -> WeatherQuery:
    """Build weather query from sanitized settings"""
    return WeatherQuery(
        location=settings["location"],
        units=UnitsSystem.fromStr(settings["units"]),
        apiKey=settings["apiKey"],
    )


def cacheTtlSeconds(settings: WidgetSettings) -> int:
    return max(MIN_CACHE_MINUTES, settings["cacheMinutes"]) * 60
