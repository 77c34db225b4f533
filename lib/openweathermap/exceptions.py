"""
OpenWeatherMap client exceptions

All client failures inherit from WeatherClientError, so callers
which don't care about the exact reason can catch the base class.
Messages never contain the API key.
"""


class WeatherClientError(Exception):
    """
    Base exception for all weather client errors.
    """

    pass


class WeatherTimeoutError(WeatherClientError):
    """
    Request didn't complete within the configured timeout.
    """

    pass


class WeatherNetworkError(WeatherClientError):
    """
    Request failed on the transport level (DNS, connection refused, TLS, ...).
    """

    pass


class UpstreamStatusError(WeatherClientError):
    """
    API responded with non-success HTTP status.

    Args:
        statusCode: HTTP status code returned by the API
    """

    def __init__(self, statusCode: int, message: str | None = None):
        super().__init__(message or f"API returned status {statusCode}")
        self.statusCode = statusCode


class InvalidResponseError(WeatherClientError):
    """
    Response body isn't valid JSON or misses required fields.
    """

    pass
