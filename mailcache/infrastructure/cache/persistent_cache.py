"""Concrete implementation of the key/value cache.

Holds entries in memory and persists them to a single flat file named
after the running version, ``<cache_dir>/<version>``, so a release build
and a development checkout keep separate caches side by side::

    ~/.mailcache/cache/release-0.1.0
    ~/.mailcache/cache/64fd-dirty

Keys set with ``set_file`` are written back only while the file they are
scoped to still exists. Eviction is all-or-nothing: ``trim`` flushes the
whole cache once it grows past its threshold.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

# Domain Layer Imports
from mailcache.domain.interfaces.cache import KeyValueCache
from mailcache.domain.interfaces.config import ConfigurationProvider
from mailcache.domain.interfaces.filesystem import FileSystem
from mailcache.domain.models.cache_format import (
    cache_file_path,
    format_line,
    make_scoped_key,
    parse_line,
    split_scoped_key,
)
from mailcache.domain.models.common import (
    CACHE_PREFIX_KEY,
    DEFAULT_TRIM_THRESHOLD,
    VERSION_KEY,
    CacheKey,
    CacheValue,
    FilePath,
)

# Infrastructure Layer Imports
from mailcache.infrastructure.filesystem.local_fs import LocalFileSystem

logger = logging.getLogger(__name__)


class CacheIOError(IOError):
    """Raised when the cache file or directory cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class PersistentCache(KeyValueCache):
    """In-memory string cache with optional flat-file persistence."""

    def __init__(
        self,
        file_system: Optional[FileSystem] = None,
        trim_threshold: int = DEFAULT_TRIM_THRESHOLD,
    ):
        """Creates an empty cache.

        Args:
            file_system: Used for existence checks and file I/O.
                Defaults to the local disk.
            trim_threshold: Size above which trim() flushes the cache.
        """
        self._store: Dict[CacheKey, CacheValue] = {}
        self.file_system = file_system or LocalFileSystem()
        self.trim_threshold = trim_threshold

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __iter__(self) -> Iterator[CacheKey]:
        return iter(list(self._store))

    # --- KeyValueCache Interface Implementation ---

    def set(self, name: str, value: str) -> None:
        self._store[CacheKey(name)] = CacheValue(value)

    def set_file(self, path: str, name: str, value: str) -> None:
        self.set(make_scoped_key(path, name), value)

    def get(self, name: str) -> Optional[CacheValue]:
        return self._store.get(CacheKey(name))

    def get_file(self, path: str, name: str) -> Optional[CacheValue]:
        return self.get(make_scoped_key(path, name))

    def size(self) -> int:
        return len(self._store)

    def items(self) -> List[Tuple[CacheKey, CacheValue]]:
        return list(self._store.items())

    def flush(self) -> None:
        """Empties the cache."""
        if self._store:
            logger.debug(f"Flushing {len(self._store)} cache entries.")
        self._store = {}

    def trim(self, threshold: Optional[int] = None) -> bool:
        """Flushes the cache if it has grown larger than ``threshold``."""
        limit = self.trim_threshold if threshold is None else threshold
        size = self.size()
        if size > limit:
            logger.info(f"Cache holds {size} entries (limit {limit}); flushing.")
            self.flush()
            return True
        return False

    @staticmethod
    def cache_file(cache_dir: Optional[str], version: Optional[str]) -> Optional[FilePath]:
        """Returns the path of the cache file, or None if it is not configured."""
        return cache_file_path(cache_dir, version)

    def load(self, cache_dir: Optional[str], version: Optional[str]) -> None:
        """Merges the persisted cache file into memory.

        Lines that are not ``key=value`` are skipped. Later lines win over
        earlier ones. Scoped keys are not checked against the file system
        here; that happens on save.
        """
        if not cache_dir:
            logger.debug("No cache directory configured; nothing to load.")
            return
        path = self.cache_file(cache_dir, version)
        if path is None:
            logger.warning("No version configured; cannot locate the cache file.")
            return
        if not self.file_system.path_exists(path):
            logger.debug(f"Cache file {path} does not exist; nothing to load.")
            return

        # Entries are merged only once the whole file has been read.
        entries: Dict[CacheKey, CacheValue] = {}
        skipped = 0
        try:
            for line in self.file_system.read_lines(path):
                entry = parse_line(line)
                if entry is None:
                    skipped += 1
                    continue
                key, value = entry
                entries[key] = value
        except OSError as e:
            logger.error(f"Failed to read cache file {path}: {e}")
            raise CacheIOError(f"Failed to read cache file {path}: {e}", path=path) from e

        self._store.update(entries)
        logger.info(f"Loaded {len(entries)} cache entries from {path} ({skipped} lines skipped).")

    def save(self, cache_dir: Optional[str], version: Optional[str]) -> None:
        """Writes every entry to the cache file, replacing its content.

        Scoped keys whose path has disappeared are left out of the file but
        kept in memory.
        """
        if not cache_dir:
            logger.debug("No cache directory configured; not saving.")
            return
        path = self.cache_file(cache_dir, version)
        if path is None:
            logger.warning("No version configured; not saving the cache.")
            return

        try:
            if not self.file_system.dir_exists(FilePath(cache_dir)):
                self.file_system.make_directory(FilePath(cache_dir))
        except OSError as e:
            logger.error(f"Failed to create cache directory {cache_dir}: {e}")
            raise CacheIOError(f"Failed to create cache directory {cache_dir}: {e}", path=cache_dir) from e

        lines = [format_line(key, value) for key, value in self._persistable_entries()]
        try:
            self.file_system.write_lines(path, lines)
        except OSError as e:
            logger.error(f"Failed to write cache file {path}: {e}")
            raise CacheIOError(f"Failed to write cache file {path}: {e}", path=path) from e

        dropped = self.size() - len(lines)
        logger.info(f"Saved {len(lines)} cache entries to {path} ({dropped} stale file entries dropped).")

    # --- Configuration-driven persistence ---

    def load_from(self, config: ConfigurationProvider) -> None:
        """Loads the cache file named by the given configuration."""
        self.load(config.get_str(CACHE_PREFIX_KEY), config.get_str(VERSION_KEY))

    def save_to(self, config: ConfigurationProvider) -> None:
        """Saves the cache file named by the given configuration."""
        self.save(config.get_str(CACHE_PREFIX_KEY), config.get_str(VERSION_KEY))

    def _persistable_entries(self) -> Iterator[Tuple[CacheKey, CacheValue]]:
        """Yields the entries that should be written to disk."""
        # Each scoped path is checked once per save.
        exists: Dict[str, bool] = {}
        for key, value in self._store.items():
            scoped = split_scoped_key(key)
            if scoped is not None:
                path, _ = scoped
                if path not in exists:
                    exists[path] = self.file_system.path_exists(path)
                if not exists[path]:
                    logger.debug(f"Dropping cache key {key!r}: {path} no longer exists.")
                    continue
            yield key, value
