"""
Weather widget: composition of settings, weather service and renderer
"""

import logging
from typing import Any, Mapping

from internal.services.weather import WeatherService, WeatherServiceError
from lib.openweathermap import WeatherPayload

from .models import RenderModel, WidgetSettings
from .renderer import renderWeather
from .settings import cacheTtlSeconds, sanitizeSettings, settingsToQuery

logger = logging.getLogger(__name__)


class WeatherWidget:
    """Current weather widget

    Holds its own settings and an injected WeatherService. Rendering never
    raises on configuration, cache or upstream problems: each of them maps
    to a displayable RenderModel.

    Example:
        >>> widget = WeatherWidget(service, {"location": "London", "apiKey": "key"})
        >>> model = await widget.render()
        >>> await widget.updateSettings({"location": "Paris", "apiKey": "key"})
    """

    def __init__(self, service: WeatherService, settings: Mapping[str, Any]):
        self.service = service
        self.settings: WidgetSettings = sanitizeSettings(settings)

    async def render(self) -> RenderModel:
        """Fetch (or take cached) weather and build display model"""
        query = settingsToQuery(self.settings)

        result: WeatherPayload | WeatherServiceError
        try:
            result = await self.service.getWeather(query, ttl=cacheTtlSeconds(self.settings))
        except WeatherServiceError as e:
            logger.debug(f"Rendering fallback state: {type(e).__name__}")
            result = e

        return renderWeather(query, result, title=self.settings["title"])

    async def updateSettings(self, newSettings: Mapping[str, Any]) -> WidgetSettings:
        """
        Replace settings, dropping cached weather of the previous location/units

        Args:
            newSettings: Raw settings, sanitized before use

        Returns:
            Sanitized settings now in effect
        """
        oldSettings = self.settings
        settings = sanitizeSettings(newSettings)

        await self.service.onConfigChange(
            oldSettings["location"],
            oldSettings["units"],
            settings["location"],
            settings["units"],
        )

        self.settings = settings
        logger.info(f"Widget settings updated: location={settings['location']!r}, units={settings['units']}")
        return settings
