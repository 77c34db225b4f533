"""
Pytest configuration and common fixtures for Simple Weather tests.

All fixtures follow camelCase naming convention.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import pytest

from tests.utils import FakeClock, loadJsonFixture

# ============================================================================
# Time Fixtures
# ============================================================================


@pytest.fixture
def fakeClock() -> FakeClock:
    """Provide manually advanced clock for cache expiration tests."""
    return FakeClock()


# ============================================================================
# Upstream Data Fixtures
# ============================================================================


@pytest.fixture
def londonWeatherResponse() -> Dict[str, Any]:
    """
    Provide recorded OpenWeatherMap current weather response for London.

    Returns:
        dict: Decoded JSON body (metric units)
    """
    return loadJsonFixture("current_weather_london.json")


@pytest.fixture
def newYorkWeatherResponse() -> Dict[str, Any]:
    """Provide recorded OpenWeatherMap response for New York (imperial units)."""
    return loadJsonFixture("current_weather_new_york.json")


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def configFactory(tmp_path: Path):
    """
    Provide factory writing config.toml into temporary directory.

    Example:
        def testSomething(configFactory):
            configPath = configFactory('[weather]\\nlocation = "London"\\n')
    """

    def _create(content: str, name: str = "config.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def restoreRootLogger():
    """Restore root logger handlers and level changed by initLogging()."""
    rootLogger = logging.getLogger()
    savedHandlers = rootLogger.handlers[:]
    savedLevel = rootLogger.level
    yield
    for handler in rootLogger.handlers[:]:
        if handler not in savedHandlers:
            handler.close()
        rootLogger.removeHandler(handler)
    for handler in savedHandlers:
        rootLogger.addHandler(handler)
    rootLogger.setLevel(savedLevel)
