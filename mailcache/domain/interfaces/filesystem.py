"""Interface for interacting with the file system.

Defines the existence checks, directory creation and line-oriented text
I/O the cache relies on, so the cache itself stays independent of the
concrete file system implementation.
"""

import abc
from typing import Iterable, Iterator, List

# Import relevant domain models
from mailcache.domain.models.common import FilePath


class FileSystem(abc.ABC):
    """Abstract Base Class for file system operations."""

    @abc.abstractmethod
    def path_exists(self, path: FilePath) -> bool:
        """Checks whether a file or directory exists at ``path``."""
        pass

    @abc.abstractmethod
    def dir_exists(self, path: FilePath) -> bool:
        """Checks whether ``path`` is an existing directory."""
        pass

    @abc.abstractmethod
    def make_directory(self, path: FilePath) -> None:
        """Creates a single directory. Parents are not created.

        Raises:
            OSError: If the directory cannot be created.
        """
        pass

    @abc.abstractmethod
    def read_lines(self, path: FilePath) -> Iterator[str]:
        """Yields the lines of a text file without their line terminators.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: For other file system errors.
        """
        pass

    @abc.abstractmethod
    def write_lines(self, path: FilePath, lines: Iterable[str]) -> None:
        """Replaces the content of ``path`` with ``lines``, one per line.

        Implementations must not leave a partially written file behind.

        Raises:
            OSError: If the file cannot be written.
        """
        pass

    @abc.abstractmethod
    def list_dir(self, path: FilePath) -> List[FilePath]:
        """Lists the entries of a directory (empty if it does not exist)."""
        pass

    @abc.abstractmethod
    def modified_time(self, path: FilePath) -> float:
        """Returns the modification time of ``path`` as a Unix timestamp.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        pass
