"""Cache Implementation.

Provides the concrete KeyValueCache: an in-memory string store persisted
to a versioned flat file, with file-scoped keys and a size-based flush.
"""

from mailcache.infrastructure.cache.persistent_cache import CacheIOError, PersistentCache

__all__ = ["CacheIOError", "PersistentCache"]
