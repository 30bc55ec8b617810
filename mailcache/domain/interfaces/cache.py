"""Interface for the key/value cache.

Defines the contract for storing, retrieving, evicting and persisting
string values, including keys scoped to the existence of a file.
"""

import abc
from typing import List, Optional, Tuple

# Import relevant domain models
from mailcache.domain.models.common import CacheKey, CacheValue


class KeyValueCache(abc.ABC):
    """Abstract Base Class for cache operations."""

    @abc.abstractmethod
    def set(self, name: str, value: str) -> None:
        """Stores ``value`` under ``name``, replacing any previous value."""
        pass

    @abc.abstractmethod
    def set_file(self, path: str, name: str, value: str) -> None:
        """Stores a value whose persistence depends on ``path`` existing.

        Args:
            path: The file or directory the value was derived from.
            name: The name of the value within that path's scope.
            value: The value to store.
        """
        pass

    @abc.abstractmethod
    def get(self, name: str) -> Optional[CacheValue]:
        """Retrieves the value stored under ``name``, or None."""
        pass

    @abc.abstractmethod
    def get_file(self, path: str, name: str) -> Optional[CacheValue]:
        """Retrieves a value stored with set_file, or None."""
        pass

    @abc.abstractmethod
    def size(self) -> int:
        """Returns the number of entries currently held."""
        pass

    @abc.abstractmethod
    def items(self) -> List[Tuple[CacheKey, CacheValue]]:
        """Returns a snapshot of all entries."""
        pass

    @abc.abstractmethod
    def flush(self) -> None:
        """Discards every entry."""
        pass

    @abc.abstractmethod
    def trim(self, threshold: Optional[int] = None) -> bool:
        """Flushes the cache if it holds more than ``threshold`` entries.

        Args:
            threshold: The largest size left untouched. None uses the
                implementation's configured default.

        Returns:
            True if the cache was flushed.
        """
        pass

    @abc.abstractmethod
    def load(self, cache_dir: Optional[str], version: Optional[str]) -> None:
        """Merges entries from ``<cache_dir>/<version>`` into the cache.

        Does nothing if ``cache_dir`` is None or the file does not exist.

        Raises:
            IOError: If the file exists but cannot be read.
        """
        pass

    @abc.abstractmethod
    def save(self, cache_dir: Optional[str], version: Optional[str]) -> None:
        """Writes all entries to ``<cache_dir>/<version>``.

        Does nothing if ``cache_dir`` is None.

        Raises:
            IOError: If the directory or file cannot be written.
        """
        pass
