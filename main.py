"""
Simple Weather - current weather widget with TOML configuration and in-memory cache.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import lib.utils as utils
from internal.config.manager import ConfigManager
from internal.services.weather import WeatherService
from internal.widget import RenderModel, WeatherWidget, cacheTtlSeconds, formatText, toDict
from lib.cache import CacheInterface, DictCache, HashKeyGenerator, NullCache, StringKeyGenerator
from lib.logging_utils import initLogging
from lib.openweathermap import OpenWeatherMapClient, WeatherPayload

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
# set higher logging level for httpx to avoid all GET requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "simple_weather_"


def createCache(cacheConfig: Dict[str, Any], defaultTtl: int) -> CacheInterface[str, WeatherPayload]:
    """Create weather cache from [cache] config section."""
    if not cacheConfig.get("enabled", True):
        logger.info("Weather cache disabled")
        return NullCache[str, WeatherPayload]()

    keyGeneratorName = str(cacheConfig.get("key-generator", "string")).lower()
    match keyGeneratorName:
        case "hash":
            keyGenerator = HashKeyGenerator(prefix=CACHE_KEY_PREFIX)
        case "string":
            keyGenerator = StringKeyGenerator()
        case _:
            logger.warning(f"Unknown cache key generator '{keyGeneratorName}', using string keys")
            keyGenerator = StringKeyGenerator()

    maxSize = cacheConfig.get("max-size", 1000)
    return DictCache[str, WeatherPayload](
        keyGenerator=keyGenerator,
        defaultTtl=defaultTtl,
        maxSize=int(maxSize) if maxSize else None,
    )


class SimpleWeather:
    """Application orchestrator that composes config, cache, client, service and widget."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize application with all components."""
        self.configManager = ConfigManager(configPath, configDirs, dotEnvFile=dotEnvFile)

        initLogging(self.configManager.getLoggingConfig())

        settings = self.configManager.getWidgetSettings()
        weatherConfig = self.configManager.getWeatherConfig()
        cacheConfig = self.configManager.getCacheConfig()

        self.cache = createCache(cacheConfig, defaultTtl=cacheTtlSeconds(settings))
        self.client = OpenWeatherMapClient(
            apiUrl=weatherConfig.get("api-url", OpenWeatherMapClient.CURRENT_WEATHER_API),
            requestTimeout=float(weatherConfig.get("request-timeout", 10)),
        )
        self.service = WeatherService(
            client=self.client,
            cache=self.cache,
            defaultTtl=cacheTtlSeconds(settings),
            singleFlight=bool(cacheConfig.get("single-flight", True)),
        )
        self.widget = WeatherWidget(self.service, settings)

    async def render(self, location: Optional[str] = None, units: Optional[str] = None) -> RenderModel:
        """Render widget once, optionally overriding configured location and units."""
        if location is not None or units is not None:
            overrides = {k: v for k, v in (("location", location), ("units", units)) if v is not None}
            await self.widget.updateSettings({**self.widget.settings, **overrides})

        return await self.widget.render()


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Simple Weather - show current weather for configured location")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to dotenv file with environment variables (default: .env)",
    )
    parser.add_argument("--location", help="Override configured location, e.g. 'London,GB'")
    parser.add_argument("--units", help="Override configured units: metric or imperial")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print render model as JSON instead of text panel",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)

    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration, API key masked."""
    config = configManager.config
    weatherConfig = config.get("weather")
    if isinstance(weatherConfig, dict) and weatherConfig.get("api-key"):
        config = {**config, "weather": {**weatherConfig, "api-key": "***"}}

    print("=== Simple Weather Configuration ===")
    print()
    print(utils.jsonDumps(config, indent=2))
    print()
    print("=== Configuration loaded successfully ===")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        if args.print_config:
            configManager = ConfigManager(args.config, args.config_dir, dotEnvFile=args.env_file)
            prettyPrintConfig(configManager)
            sys.exit(0)

        app = SimpleWeather(configPath=args.config, configDirs=args.config_dir, dotEnvFile=args.env_file)
        model = asyncio.run(app.render(location=args.location, units=args.units))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        sys.exit(130)

    if args.json:
        print(utils.jsonDumps(toDict(model), indent=2))
    else:
        print(formatText(model))


if __name__ == "__main__":
    main()
