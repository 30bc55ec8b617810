import logging
from typing import Any, List, Optional, Tuple

from rich.box import HEAVY, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mailcache.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self.console = console or Console()

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Prints output verbatim: no markup, no highlighting.

        Cached values are arbitrary strings and may contain square brackets.
        """
        self.console.print(output, markup=False, highlight=False, soft_wrap=True)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message."""
        self.console.print(Text(info_message, style="blue"))

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message with enhanced styling.

        Args:
            warning_message: The warning message to display.
        """
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_entries(self, entries: List[Tuple[str, str]], **kwargs: Any) -> None:
        """Displays cache entries as a two-column table, sorted by key.

        Args:
            entries: The (key, value) pairs to display.
            **kwargs: Additional arguments including:
                - title: Table title (default: "Cache")
        """
        title = kwargs.get("title", "Cache")
        table = Table(title=title, box=SIMPLE, show_lines=False)
        table.add_column("Key", style="cyan", overflow="fold")
        table.add_column("Value", style="white", overflow="fold")
        for key, value in sorted(entries):
            # Text objects keep rich from reading brackets in keys as markup
            table.add_row(Text(key), Text(value))
        self.console.print(table)
        self.console.print(Text(f"{len(entries)} entries", style="dim"))
