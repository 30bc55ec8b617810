"""Concrete implementation of the FileSystem interface using standard Python
libraries for local file system operations.

Uses `pathlib` for path handling and `os.replace` for atomic writes.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List

# Domain Layer Imports
from mailcache.domain.interfaces.filesystem import FileSystem
from mailcache.domain.models.common import FilePath

logger = logging.getLogger(__name__)

# Cache files may hold folder names in any encoding; keep the bytes intact.
# Lines end at "\n" only; a bare "\r" belongs to the key or value.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def path_exists(self, path: FilePath) -> bool:
        """Checks if a file or directory exists."""
        if not path:
            return False
        exists = Path(path).exists()
        logger.debug(f"Checked existence for {path}: {exists}")
        return exists

    def dir_exists(self, path: FilePath) -> bool:
        """Checks if a directory exists."""
        return bool(path) and Path(path).is_dir()

    def make_directory(self, path: FilePath) -> None:
        """Creates a single directory level."""
        logger.debug(f"Creating directory: {path}")
        Path(path).mkdir(exist_ok=True)

    def read_lines(self, path: FilePath) -> Iterator[str]:
        """Reads a text file line by line, stripping the newline."""
        logger.debug(f"Reading lines from: {path}")
        with open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n") as f:
            for line in f:
                yield line[:-1] if line.endswith("\n") else line

    def write_lines(self, path: FilePath, lines: Iterable[str]) -> None:
        """Writes lines to a temporary file, then moves it over ``path``."""
        target = Path(path)
        temp_path = target.with_name(target.name + ".tmp")
        count = 0
        try:
            with open(temp_path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n") as f:
                for line in lines:
                    f.write(line + "\n")
                    count += 1
            # Use os.replace for atomic operation (works on Windows and Unix)
            os.replace(temp_path, target)
        except BaseException:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as unlink_err:
                logger.warning(f"Failed to delete temporary file {temp_path}: {unlink_err}")
            raise
        logger.debug(f"Wrote {count} lines to {target}")

    def list_dir(self, path: FilePath) -> List[FilePath]:
        """Lists directory entries, returning an empty list for a missing directory."""
        directory = Path(path)
        if not directory.is_dir():
            return []
        return [FilePath(str(entry)) for entry in directory.iterdir()]

    def modified_time(self, path: FilePath) -> float:
        """Returns the modification time of a path."""
        return Path(path).stat().st_mtime
