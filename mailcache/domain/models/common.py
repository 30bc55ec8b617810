"""Defines common Value Objects used across the cache.

These are strings at runtime; NewType keeps the intent visible in signatures.
"""

from typing import NewType

# === Core Value Objects ===

CacheKey = NewType("CacheKey", str)        # Plain key, or scoped key "path'name"
CacheValue = NewType("CacheValue", str)    # Values are always strings
FilePath = NewType("FilePath", str)        # Path on the local filesystem

# === Configuration keys consumed by the cache ===

CACHE_PREFIX_KEY = "cache.prefix"          # Directory holding the cache file
VERSION_KEY = "global.version"             # Cache file name
MAX_ENTRIES_KEY = "cache.max_entries"      # Trim threshold

DEFAULT_TRIM_THRESHOLD = 50000
