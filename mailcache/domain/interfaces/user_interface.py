"""Interface for interacting with the user.

Defines the contract for displaying cache contents, information, warnings
and errors, allowing different UI implementations.
"""

import abc
from typing import Any, List, Tuple


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays plain output (e.g., a cached value) to the user."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_entries(self, entries: List[Tuple[str, str]], **kwargs: Any) -> None:
        """Displays cache entries as a key/value listing.

        Args:
            entries: The ``(key, value)`` pairs to show.
            **kwargs: Additional arguments including:
                - title: A caption for the listing
        """
        pass
