"""
Test utility functions and helpers.

This module provides a manual clock, httpx mocking helpers and
fixture loaders shared by cross-component tests.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# ============================================================================
# Time Utilities
# ============================================================================


class FakeClock:
    """
    Manually advanced clock, usable as DictCache timeSource.

    Example:
        clock = FakeClock()
        cache = DictCache(timeSource=clock)
        clock.advance(600)
    """

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# HTTP Mock Utilities
# ============================================================================


def createMockResponse(
    statusCode: int = 200,
    jsonData: Any = None,
    jsonError: Optional[Exception] = None,
) -> MagicMock:
    """
    Create a mock httpx.Response.

    Args:
        statusCode: HTTP status code (default: 200)
        jsonData: Value returned by response.json()
        jsonError: Exception raised by response.json() instead

    Returns:
        MagicMock: Configured response
    """
    response = MagicMock()
    response.status_code = statusCode
    if jsonError is not None:
        response.json.side_effect = jsonError
    else:
        response.json.return_value = jsonData
    return response


def installMockSession(mockClientClass: MagicMock, **getKwargs) -> MagicMock:
    """
    Make patched httpx.AsyncClient yield a session with mocked async get().

    Example:
        with patch("httpx.AsyncClient") as mockClientClass:
            session = installMockSession(mockClientClass, return_value=createMockResponse(200, {...}))
    """
    session = MagicMock()
    session.get = AsyncMock(**getKwargs)
    mockClientClass.return_value.__aenter__.return_value = session
    return session


def requestedUrl(session: MagicMock, callIndex: int = 0) -> str:
    """Get URL passed to session.get() on given call"""
    return session.get.call_args_list[callIndex].args[0]


# ============================================================================
# Fixture Loaders
# ============================================================================


def loadJsonFixture(name: str) -> Dict[str, Any]:
    """Load JSON document from tests/fixtures directory"""
    with open(FIXTURES_DIR / name, "rt", encoding="utf-8") as f:
        return json.load(f)
