"""
Configuration management for Simple Weather widget.

Main TOML file is loaded first, then every *.toml file found in config
directories is merged over it, then ${VAR} placeholders are substituted
from environment (optionally populated from .env file).
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import tomli

import lib.utils as utils
from internal.widget import WidgetSettings, sanitizeSettings

logger = logging.getLogger(__name__)

ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


def substituteEnvVars(value: Any) -> Any:
    """Replace ${VAR} placeholders in strings, dicts and lists.

    Placeholders of unset variables are left untouched.
    """
    if isinstance(value, str):
        return ENV_PLACEHOLDER_RE.sub(lambda match: os.environ.get(match.group(1), match.group(0)), value)
    if isinstance(value, dict):
        return {key: substituteEnvVars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


def mergeSections(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base, tables merge, everything else is replaced."""
    merged = dict(base)
    for key, value in override.items():
        baseValue = merged.get(key)
        if isinstance(baseValue, dict) and isinstance(value, dict):
            merged[key] = mergeSections(baseValue, value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Loads and exposes Simple Weather configuration."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        self.config_path = configPath
        self.config_dirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    @staticmethod
    def _readToml(path: Path) -> Dict[str, Any]:
        with open(path, "rb") as f:
            return tomli.load(f)

    def _iterDirFiles(self) -> Iterator[Path]:
        """Yield *.toml files of every config directory, sorted within each directory."""
        for configDir in self.config_dirs:
            dirPath = Path(configDir)
            if not dirPath.is_dir():
                logger.warning(f"Config directory {configDir} is missing or not a directory, skipping")
                continue
            yield from sorted(path for path in dirPath.rglob("*.toml") if path.is_file())

    def _loadConfig(self) -> Dict[str, Any]:
        """Load main config file and merge config directories over it.

        Raises:
            SystemExit: Main file is missing and no config directories given,
                        or main file can't be parsed.
        """
        mainPath = Path(self.config_path)
        config: Dict[str, Any] = {}

        if mainPath.exists():
            try:
                config = self._readToml(mainPath)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.config_path}: {e}")
                sys.exit(1)
        elif not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        for path in self._iterDirFiles():
            try:
                config = mergeSections(config, self._readToml(path))
            except (OSError, tomli.TOMLDecodeError) as e:
                # Broken drop-in file shouldn't prevent the widget from starting
                logger.error(f"Skipping config file {path}: {e}")
                continue
            logger.debug(f"Merged config from {path}")

        logger.info(f"Configuration loaded, sections: {sorted(config)}")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get top-level configuration value by key."""
        return self.config.get(key, default)

    def getWeatherConfig(self) -> Dict[str, Any]:
        """Get [weather] section."""
        return self.get("weather", {})

    def getCacheConfig(self) -> Dict[str, Any]:
        """Get [cache] section."""
        return self.get("cache", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get [logging] section."""
        return self.get("logging", {})

    def getWidgetSettings(self) -> WidgetSettings:
        """Get sanitized widget settings from [weather] section.

        Placeholders of unset environment variables are treated as empty values,
        so the widget reports missing configuration instead of calling the API.
        """
        weatherConfig = self.getWeatherConfig()
        return sanitizeSettings(
            {
                "title": weatherConfig.get("title"),
                "location": self._dropUnresolved("location", weatherConfig.get("location")),
                "apiKey": self._dropUnresolved("api-key", weatherConfig.get("api-key")),
                "units": weatherConfig.get("units"),
                "cacheMinutes": weatherConfig.get("cache-minutes"),
            }
        )

    @staticmethod
    def _dropUnresolved(name: str, value: Any) -> Any:
        if isinstance(value, str) and ENV_PLACEHOLDER_RE.search(value):
            logger.warning(f"Config value weather.{name} references unset environment variable, ignoring it")
            return None
        return value
