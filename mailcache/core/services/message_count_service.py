"""Core service for counting the messages in a maildir folder.

Counting means listing both ``cur/`` and ``new/``, which is slow for large
folders, so results are kept in the cache. Both entries are scoped to the
folder path: once a folder is deleted its entries are no longer persisted.
"""

import logging
import os
from typing import Optional

# Domain Layer Imports
from mailcache.domain.interfaces.cache import KeyValueCache
from mailcache.domain.interfaces.filesystem import FileSystem
from mailcache.domain.models.common import FilePath

logger = logging.getLogger(__name__)

MAILDIR_SUBDIRS = ("cur", "new")
COUNT_NAME = "count"
MTIME_NAME = "mtime"


class MessageCountService:
    """Counts maildir messages, reusing cached counts while a folder is unchanged."""

    def __init__(self, cache: KeyValueCache, file_system: FileSystem):
        self.cache = cache
        self.file_system = file_system

    def stamp(self, folder: str) -> str:
        """Returns a string that changes whenever a message is added or removed.

        Adding or removing a file updates the mtime of its directory, so the
        mtimes of ``cur/`` and ``new/`` are enough.
        """
        parts = []
        for sub in MAILDIR_SUBDIRS:
            path = FilePath(os.path.join(folder, sub))
            if self.file_system.dir_exists(path):
                parts.append(repr(self.file_system.modified_time(path)))
            else:
                parts.append("-")
        return ":".join(parts)

    def cached_count(self, folder: str) -> Optional[int]:
        """Returns the cached count if it is still current, else None."""
        count = self.cache.get_file(folder, COUNT_NAME)
        stamp = self.cache.get_file(folder, MTIME_NAME)
        if count is None or stamp is None or not count.isdigit():
            return None
        if stamp != self.stamp(folder):
            logger.debug(f"Cached count for {folder} is stale.")
            return None
        return int(count)

    def count(self, folder: str) -> int:
        """Returns the number of messages in ``folder``.

        A folder that does not exist holds no messages; nothing is cached
        for it.
        """
        if not self.file_system.dir_exists(FilePath(folder)):
            logger.debug(f"Maildir {folder} does not exist.")
            return 0

        cached = self.cached_count(folder)
        if cached is not None:
            logger.debug(f"Cache hit for message count of {folder}: {cached}")
            return cached

        # Stamp before listing so a delivery during the count marks it stale.
        stamp = self.stamp(folder)
        total = sum(
            len(self.file_system.list_dir(FilePath(os.path.join(folder, sub))))
            for sub in MAILDIR_SUBDIRS
        )
        self.cache.set_file(folder, COUNT_NAME, str(total))
        self.cache.set_file(folder, MTIME_NAME, stamp)
        logger.debug(f"Counted {total} messages in {folder}")
        return total
