"""The flat-file cache format.

Each entry occupies one line, ``key=value``. A key may be scoped to a file
by joining the path and a name with a single quote, ``path'name``.

Both delimiters are split on their *last* occurrence: everything before it
belongs to the left-hand side. Nothing is escaped, so a key or value holding
``=`` or a newline cannot be stored faithfully. Callers are expected to keep
such characters out of their keys and values.
"""

from typing import Optional, Tuple

from mailcache.domain.models.common import CacheKey, CacheValue, FilePath

KEY_VALUE_DELIMITER = "="
SCOPE_DELIMITER = "'"


def split_last(text: str, delimiter: str) -> Optional[Tuple[str, str]]:
    """Splits ``text`` on the last occurrence of ``delimiter``.

    Returns:
        A ``(head, tail)`` pair, or None when the delimiter is absent.
    """
    head, sep, tail = text.rpartition(delimiter)
    if not sep:
        return None
    return head, tail


def make_scoped_key(path: str, name: str) -> CacheKey:
    """Builds the key that ties ``name`` to the existence of ``path``."""
    return CacheKey(f"{path}{SCOPE_DELIMITER}{name}")


def split_scoped_key(key: str) -> Optional[Tuple[FilePath, str]]:
    """Returns ``(path, name)`` for a scoped key, None for a plain key."""
    parts = split_last(key, SCOPE_DELIMITER)
    if parts is None:
        return None
    path, name = parts
    return FilePath(path), name


def parse_line(line: str) -> Optional[Tuple[CacheKey, CacheValue]]:
    """Parses one persisted line into ``(key, value)``.

    The value is whatever follows the last ``=`` and must not be empty;
    the key may be. Lines that do not fit return None.
    """
    parts = split_last(line, KEY_VALUE_DELIMITER)
    if parts is None:
        return None
    key, value = parts
    if not value:
        return None
    return CacheKey(key), CacheValue(value)


def format_line(key: str, value: str) -> str:
    """Formats one entry as a persisted line, without the newline."""
    return f"{key}{KEY_VALUE_DELIMITER}{value}"


def cache_file_path(cache_dir: Optional[str], version: Optional[str]) -> Optional[FilePath]:
    """Returns ``<cache_dir>/<version>``, or None if either part is missing."""
    if not cache_dir or not version:
        return None
    return FilePath(f"{cache_dir}/{version}")
