"""Core service tying the cache to the application's lifetime.

On start the persisted cache is loaded and, if it has grown too large,
flushed straight away. On exit it is saved again. Where the cache file
lives is decided by the injected configuration.
"""

import logging
from types import TracebackType
from typing import Optional, Type

# Domain Layer Imports
from mailcache.domain.interfaces.cache import KeyValueCache
from mailcache.domain.interfaces.config import ConfigurationProvider
from mailcache.domain.models.cache_format import cache_file_path
from mailcache.domain.models.common import (
    CACHE_PREFIX_KEY,
    DEFAULT_TRIM_THRESHOLD,
    MAX_ENTRIES_KEY,
    VERSION_KEY,
    FilePath,
)

logger = logging.getLogger(__name__)


class CacheSession:
    """Loads, trims and saves a cache around a unit of work.

    Usage::

        with CacheSession(cache, settings) as cache:
            cache.set("foo", "bar")
    """

    def __init__(self, cache: KeyValueCache, config: ConfigurationProvider):
        self.cache = cache
        self.config = config

    @property
    def cache_dir(self) -> Optional[str]:
        return self.config.get_str(CACHE_PREFIX_KEY)

    @property
    def version(self) -> Optional[str]:
        return self.config.get_str(VERSION_KEY)

    @property
    def max_entries(self) -> int:
        value = self.config.get(MAX_ENTRIES_KEY)
        if value is None:
            return DEFAULT_TRIM_THRESHOLD
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-integer {MAX_ENTRIES_KEY}={value!r}.")
            return DEFAULT_TRIM_THRESHOLD

    @property
    def cache_file(self) -> Optional[FilePath]:
        """The file the cache persists to, or None if persistence is off."""
        return cache_file_path(self.cache_dir, self.version)

    @property
    def is_persistent(self) -> bool:
        return self.cache_file is not None

    def open(self, trim: bool = True) -> KeyValueCache:
        """Loads the persisted cache, then trims it unless ``trim`` is False."""
        self.cache.load(self.cache_dir, self.version)
        if trim and self.cache.trim(self.max_entries):
            logger.info(f"Cache exceeded {self.max_entries} entries after loading and was flushed.")
        return self.cache

    def close(self) -> None:
        """Saves the cache."""
        self.cache.save(self.cache_dir, self.version)

    def __enter__(self) -> KeyValueCache:
        return self.open()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is not None:
            logger.warning(f"Not saving cache after error: {exc}")
            return
        self.close()
