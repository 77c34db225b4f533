"""
Weather module: cached current weather lookup
"""

from .exceptions import MissingConfigError, ServiceUnavailableError, WeatherServiceError
from .service import DEFAULT_TTL, WeatherService

__all__ = [
    # Service
    "WeatherService",
    "DEFAULT_TTL",
    # Exceptions
    "WeatherServiceError",
    "MissingConfigError",
    "ServiceUnavailableError",
]
