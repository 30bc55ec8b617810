"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), runs them against
the cache inside a CacheSession and reports the outcome through the
UserInterface. Every handler returns True on success so the entry point
can pick an exit status.
"""

import logging
from typing import List, Optional

# Core Services Imports
from mailcache.core.services.cache_session import CacheSession
from mailcache.core.services.message_count_service import MessageCountService

# Domain Layer Imports
from mailcache.domain.interfaces.user_interface import UserInterface
from mailcache.domain.models.cache_format import KEY_VALUE_DELIMITER, SCOPE_DELIMITER, make_scoped_key

# Infrastructure Layer Imports
from mailcache.infrastructure.cache.persistent_cache import CacheIOError

logger = logging.getLogger(__name__)


class CommandHandler:
    """Handles incoming commands and delegates to the cache session."""

    def __init__(
        self,
        session: CacheSession,
        message_counter: MessageCountService,
        ui: UserInterface,
    ):
        """Initializes the CommandHandler with required services."""
        self.session = session
        self.message_counter = message_counter
        self.ui = ui

    def _warn_if_not_persistent(self) -> None:
        if not self.session.is_persistent:
            self.ui.display_warning(
                "No cache directory configured (cache.prefix); changes will not be saved."
            )

    def handle_where(self) -> bool:
        """Shows which file the cache persists to."""
        cache_file = self.session.cache_file
        if cache_file is None:
            self._warn_if_not_persistent()
            return True
        self.ui.display_output(cache_file)
        return True

    def handle_show(self) -> bool:
        """Lists every entry of the persisted cache."""
        logger.info("Handling 'show' command.")
        try:
            cache = self.session.open()
        except CacheIOError as e:
            logger.error(f"Failed to load cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to load cache: {e}")
            return False
        self.ui.display_entries(cache.items(), title=self.session.cache_file or "Cache")
        return True

    def handle_get(self, key: str, path: Optional[str] = None) -> bool:
        """Prints the value of a key; False if the key is absent."""
        try:
            cache = self.session.open()
        except CacheIOError as e:
            logger.error(f"Failed to load cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to load cache: {e}")
            return False
        value = cache.get_file(path, key) if path else cache.get(key)
        if value is None:
            shown = make_scoped_key(path, key) if path else key
            self.ui.display_warning(f"Key not found: {shown}")
            return False
        self.ui.display_output(value)
        return True

    def handle_set(self, key: str, value: str, path: Optional[str] = None) -> bool:
        """Stores a value and saves the cache."""
        if not value or "\n" in key or "\n" in value or KEY_VALUE_DELIMITER in value:
            self.ui.display_error(
                f"Values must be non-empty without '{KEY_VALUE_DELIMITER}' or newlines; keys may not contain newlines."
            )
            return False
        if path and SCOPE_DELIMITER in key:
            self.ui.display_error(
                f"Keys scoped with --path may not contain '{SCOPE_DELIMITER}'; the path would be read back wrongly."
            )
            return False
        self._warn_if_not_persistent()
        try:
            with self.session as cache:
                if path:
                    cache.set_file(path, key, value)
                else:
                    cache.set(key, value)
        except CacheIOError as e:
            logger.error(f"Failed to update cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to update cache: {e}")
            return False
        return True

    def handle_size(self) -> bool:
        """Prints the number of entries in the persisted cache."""
        try:
            cache = self.session.open()
        except CacheIOError as e:
            logger.error(f"Failed to load cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to load cache: {e}")
            return False
        self.ui.display_output(str(cache.size()))
        return True

    def handle_flush(self) -> bool:
        """Empties the cache and saves the empty file."""
        self._warn_if_not_persistent()
        try:
            with self.session as cache:
                removed = cache.size()
                cache.flush()
        except CacheIOError as e:
            logger.error(f"Failed to flush cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to flush cache: {e}")
            return False
        self.ui.display_info(f"Flushed {removed} entries.")
        return True

    def handle_trim(self, threshold: Optional[int] = None) -> bool:
        """Flushes the cache if it holds more than ``threshold`` entries.

        Without a threshold the configured ``cache.max_entries`` applies. The
        cache is opened untrimmed so the reported size is the one on disk.
        """
        self._warn_if_not_persistent()
        limit = self.session.max_entries if threshold is None else threshold
        try:
            cache = self.session.open(trim=False)
            size = cache.size()
            flushed = cache.trim(limit)
            self.session.close()
        except CacheIOError as e:
            logger.error(f"Failed to trim cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to trim cache: {e}")
            return False
        if flushed:
            self.ui.display_info(f"Cache held {size} entries; flushed.")
        else:
            self.ui.display_info(f"Cache holds {size} entries; nothing to do.")
        return True

    def handle_count(self, folders: List[str]) -> bool:
        """Prints message counts for maildir folders, caching the results."""
        try:
            with self.session:
                for folder in folders:
                    total = self.message_counter.count(folder)
                    self.ui.display_output(f"{folder}\t{total}")
        except CacheIOError as e:
            logger.error(f"Failed to count messages: {e}", exc_info=True)
            self.ui.display_error(f"Failed to count messages: {e}")
            return False
        return True
