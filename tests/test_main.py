"""
Tests for command line entry point and application composition.
"""

import json
from unittest.mock import patch

import pytest

import main
from lib.cache import DictCache, HashKeyGenerator, NullCache, StringKeyGenerator
from tests.utils import createMockResponse, installMockSession, requestedUrl

CONFIG_TOML = """
[weather]
title = "Weather"
location = "London,GB"
api-key = "cli_test_key"
units = "metric"
cache-minutes = 15
request-timeout = 7

[cache]
enabled = true
max-size = 50
key-generator = "hash"
"""


@pytest.fixture(autouse=True)
def noLoggingSetup():
    """Keep pytest logging handlers intact."""
    with patch("main.initLogging") as mockInitLogging:
        yield mockInitLogging


# ============================================================================
# Composition Tests
# ============================================================================


class TestCreateCache:
    def testDisabled(self):
        assert isinstance(main.createCache({"enabled": False}, defaultTtl=600), NullCache)

    def testDefaults(self):
        cache = main.createCache({}, defaultTtl=600)

        assert isinstance(cache, DictCache)
        assert isinstance(cache._keyGenerator, StringKeyGenerator)
        assert cache.getStats()["maxSize"] == 1000
        assert cache.getStats()["defaultTtl"] == 600

    def testHashKeys(self):
        cache = main.createCache({"key-generator": "hash", "max-size": 0}, defaultTtl=60)

        assert isinstance(cache._keyGenerator, HashKeyGenerator)
        assert cache._keyGenerator.prefix == main.CACHE_KEY_PREFIX
        assert cache.getStats()["maxSize"] is None

    def testUnknownKeyGenerator(self):
        cache = main.createCache({"key-generator": "md5"}, defaultTtl=60)

        assert isinstance(cache._keyGenerator, StringKeyGenerator)


class TestSimpleWeather:
    def testComposition(self, configFactory, tmp_path, noLoggingSetup):
        app = main.SimpleWeather(str(configFactory(CONFIG_TOML)), dotEnvFile=str(tmp_path / ".env"))

        noLoggingSetup.assert_called_once_with({})
        assert app.client.requestTimeout == 7.0
        assert app.service.defaultTtl == 900
        assert app.service.cache is app.cache
        assert app.widget.settings["location"] == "London,GB"

    @pytest.mark.asyncio
    async def testRenderWithOverrides(self, configFactory, tmp_path, newYorkWeatherResponse):
        app = main.SimpleWeather(str(configFactory(CONFIG_TOML)), dotEnvFile=str(tmp_path / ".env"))

        with patch("httpx.AsyncClient") as mockClientClass:
            session = installMockSession(
                mockClientClass, return_value=createMockResponse(200, newYorkWeatherResponse)
            )
            model = await app.render(location="New York", units="imperial")

        assert model.details is not None
        assert model.details.temperature == "71°F"
        assert "q=New%20York&appid=cli_test_key&units=imperial" in requestedUrl(session)
        storedKeys = list(app.cache._storage.keys())
        assert len(storedKeys) == 1
        assert storedKeys[0].startswith(main.CACHE_KEY_PREFIX)


# ============================================================================
# CLI Tests
# ============================================================================


class TestMain:
    def testPrintsTextPanel(self, configFactory, tmp_path, capsys, londonWeatherResponse):
        configPath = configFactory(CONFIG_TOML)

        with patch("httpx.AsyncClient") as mockClientClass:
            installMockSession(mockClientClass, return_value=createMockResponse(200, londonWeatherResponse))
            main.main(["-c", str(configPath), "--env-file", str(tmp_path / ".env")])

        output = capsys.readouterr().out
        assert output.startswith("== Weather ==\n22°C, Clear Sky\n")
        assert "Wind: 3.1 m/s" in output

    def testPrintsJson(self, configFactory, tmp_path, capsys, londonWeatherResponse):
        configPath = configFactory(CONFIG_TOML)

        with patch("httpx.AsyncClient") as mockClientClass:
            installMockSession(mockClientClass, return_value=createMockResponse(200, londonWeatherResponse))
            main.main(["-c", str(configPath), "--env-file", str(tmp_path / ".env"), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["kind"] == "rendered"
        assert data["details"]["temperature"] == "22°C"

    def testMissingApiKey(self, configFactory, tmp_path, capsys, monkeypatch):
        monkeypatch.delenv("SIMPLE_WEATHER_TEST_KEY", raising=False)
        configPath = configFactory('[weather]\nlocation = "Oslo"\napi-key = "${SIMPLE_WEATHER_TEST_KEY}"\n')

        with patch("httpx.AsyncClient") as mockClientClass:
            main.main(["-c", str(configPath), "--env-file", str(tmp_path / ".env")])

        mockClientClass.assert_not_called()
        assert "Please configure both City and API Key" in capsys.readouterr().out

    def testPrintConfigMasksApiKey(self, configFactory, tmp_path, capsys):
        configPath = configFactory(CONFIG_TOML)

        with pytest.raises(SystemExit) as excInfo:
            main.main(["-c", str(configPath), "--env-file", str(tmp_path / ".env"), "--print-config"])

        assert excInfo.value.code == 0
        output = capsys.readouterr().out
        assert "cli_test_key" not in output
        assert '"api-key": "***"' in output

    def testMissingConfigFile(self, tmp_path):
        with pytest.raises(SystemExit) as excInfo:
            main.main(["-c", str(tmp_path / "missing.toml"), "--env-file", str(tmp_path / ".env")])

        assert excInfo.value.code == 1
