"""Provides loading and access to configuration settings.

Supports built-in defaults, a YAML configuration file (e.g.
~/.mailcache/config.yaml), a .env file, and environment variables.
Implements the ConfigurationProvider interface; an instance is created by
the composition root and injected wherever configuration is needed.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from mailcache import __version__
from mailcache.domain.interfaces.config import ConfigurationProvider
from mailcache.domain.models.common import (
    CACHE_PREFIX_KEY,
    DEFAULT_TRIM_THRESHOLD,
    MAX_ENTRIES_KEY,
    VERSION_KEY,
)

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".mailcache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "MAILCACHE_"

DEFAULTS: Dict[str, Any] = {
    VERSION_KEY: f"release-{__version__}",
    MAX_ENTRIES_KEY: DEFAULT_TRIM_THRESHOLD,
    "logging.level": "WARNING",
}


def env_var_name(key: str) -> str:
    """Maps a dotted config key to its environment variable name.

    'cache.prefix' -> 'MAILCACHE_CACHE_PREFIX'
    """
    return f"{ENV_PREFIX}{key.upper().replace('.', '_')}"


def flatten(mapping: Dict[str, Any], parent: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys.

    {'cache': {'prefix': '/tmp'}} -> {'cache.prefix': '/tmp'}
    """
    flat: Dict[str, Any] = {}
    for key, value in mapping.items():
        full_key = f"{parent}.{key}" if parent else str(key)
        if isinstance(value, dict):
            flat.update(flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


class Settings(ConfigurationProvider):
    """Layered configuration.

    Priority order (highest to lowest):
    1. Overrides set with set()
    2. Environment variables (MAILCACHE_CACHE_PREFIX, ...)
    3. .env file
    4. YAML configuration file
    5. Built-in defaults
    """

    def __init__(
        self,
        config_file: Optional[Path] = DEFAULT_CONFIG_FILE,
        env_file: Optional[Path] = None,
        use_dotenv: bool = True,
    ):
        self.config_file = Path(config_file) if config_file is not None else None
        self.env_file = env_file
        self.use_dotenv = use_dotenv
        self._file_config: Dict[str, Any] = {}
        self._overrides: Dict[str, Any] = {}
        self._loaded = False

    def load_config(self) -> None:
        """Loads configuration from the YAML file and the .env file."""
        self._file_config = {}

        # 1. Load from YAML file (Lowest priority after defaults)
        if self.config_file is not None and self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load or parse YAML config {self.config_file}: {e}")
                raise
            if isinstance(yaml_config, dict):
                self._file_config.update(flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {self.config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {self.config_file} did not contain a mapping.")
        else:
            logger.debug(f"YAML config file not found: {self.config_file}")

        # 2. Load from .env file; override=False lets real environment variables win
        if self.use_dotenv:
            dotenv_path = self.env_file or find_dotenv_path()
            if dotenv_path and load_dotenv(dotenv_path=dotenv_path, override=False):
                logger.info(f"Loaded environment variables from: {dotenv_path}")
            else:
                logger.debug("No .env file loaded.")

        self._loaded = True

    def get(self, key: str, default: Optional[Any] = None) -> Optional[Any]:
        """Gets a configuration value by key, following the priority order."""
        if not self._loaded:
            self.load_config()

        if key in self._overrides:
            value = self._overrides[key]
        elif env_var_name(key) in os.environ:
            value = os.environ[env_var_name(key)]
        elif key in self._file_config:
            value = self._file_config[key]
        elif key in DEFAULTS:
            value = DEFAULTS[key]
        else:
            logger.debug(f"Config key '{key}' not set. Returning default: {default}")
            return default

        if key == CACHE_PREFIX_KEY and isinstance(value, str):
            value = os.path.expanduser(value)
        return value

    def set(self, key: str, value: Any) -> None:
        """Overrides a configuration value for the lifetime of this instance."""
        logger.debug(f"Setting config: {key} = {value}")
        self._overrides[key] = value
