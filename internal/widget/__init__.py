"""
Widget module: current weather display fragment
"""

from .formatter import formatText, toDict
from .models import RenderDetails, RenderKind, RenderModel, WidgetSettings
from .renderer import renderWeather
from .settings import cacheTtlSeconds, sanitizeSettings, settingsToQuery
from .widget import WeatherWidget

__all__ = [
    # Widget
    "WeatherWidget",
    # Models
    "RenderKind",
    "RenderDetails",
    "RenderModel",
    "WidgetSettings",
    # Functions
    "renderWeather",
    "sanitizeSettings",
    "settingsToQuery",
    "cacheTtlSeconds",
    "formatText",
    "toDict",
]
