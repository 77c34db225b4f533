"""
Weather service exceptions

Coarse error kinds exposed to the display layer. Details of upstream
failures stay on the chained client exception (__cause__).
"""


class WeatherServiceError(Exception):
    """
    Base exception for all weather service errors.
    """

    pass


class MissingConfigError(WeatherServiceError):
    """
    Location or API key isn't configured.

    User-correctable, never retried automatically.
    """

    pass


class ServiceUnavailableError(WeatherServiceError):
    """
    Upstream weather API is unreachable, erroring or returned malformed data.

    Transient: failures aren't cached, so the next call retries.
    """

    pass
