"""Main entry point for the mailcache command line tool.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

logger = logging.getLogger(__name__)

# --- Core Layer ---
from mailcache.core.command_handler import CommandHandler
from mailcache.core.services.cache_session import CacheSession
from mailcache.core.services.message_count_service import MessageCountService

# --- Infrastructure Layer ---
# Config
from mailcache.infrastructure.config.settings import DEFAULT_CONFIG_FILE, Settings
# UI
from mailcache.infrastructure.cli.display import ConsoleDisplay
# FileSystem
from mailcache.infrastructure.filesystem.local_fs import LocalFileSystem
# Cache
from mailcache.infrastructure.cache.persistent_cache import PersistentCache
# Monitoring
from mailcache.infrastructure.monitoring.logger_setup import parse_log_level, setup_logging

# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    config_file: Path = DEFAULT_CONFIG_FILE,
    log_level: Optional[str] = None,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {}

    # 1. Load Configuration First
    settings = Settings(config_file=config_file)
    settings.load_config()
    if log_level:
        settings.set('logging.level', log_level)
    setup_logging(
        log_level=parse_log_level(settings.get_str('logging.level')),
        log_file=settings.get_str('logging.file'),
    )
    logger.info("Configuration and logging initialized.")
    dependencies['settings'] = settings

    # 2. Instantiate Infrastructure Adapters
    dependencies['ui'] = ConsoleDisplay()
    dependencies['file_system'] = LocalFileSystem()
    dependencies['cache'] = PersistentCache(file_system=dependencies['file_system'])

    # 3. Instantiate Core Services (injecting dependencies)
    dependencies['session'] = CacheSession(cache=dependencies['cache'], config=settings)
    dependencies['cache'].trim_threshold = dependencies['session'].max_entries
    dependencies['message_counter'] = MessageCountService(
        cache=dependencies['cache'],
        file_system=dependencies['file_system'],
    )

    # 4. Instantiate Command Handler
    dependencies['command_handler'] = CommandHandler(
        session=dependencies['session'],
        message_counter=dependencies['message_counter'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies

# Filled in by the callback before any command runs
_dependencies: Dict[str, Any] = {}

# --- Typer App Definition ---
app = typer.Typer(
    name="mailcache",
    help="Inspect and maintain the mail client's persistent key/value cache.",
    add_completion=False,
)

def _handler() -> CommandHandler:
    return _dependencies['command_handler']

def _finish(ok: bool) -> None:
    if not ok:
        raise typer.Exit(code=1)

# --- CLI Commands ---

# Shared path option for file-scoped keys
PathOption = Annotated[
    Optional[str],
    typer.Option("--path", "-p", help="Scope the key to this file or folder (stored as path'key).")
]

@app.command()
def where():
    """Print the location of the cache file."""
    _finish(_handler().handle_where())

@app.command()
def show():
    """List every cache entry."""
    _finish(_handler().handle_show())

@app.command()
def get(
    key: Annotated[str, typer.Argument(help="The key to look up.")],
    path: PathOption = None,
):
    """Print the value stored under KEY."""
    _finish(_handler().handle_get(key, path))

@app.command(name="set")
def set_command(
    key: Annotated[str, typer.Argument(help="The key to store.")],
    value: Annotated[str, typer.Argument(help="The value to store.")],
    path: PathOption = None,
):
    """Store VALUE under KEY and save the cache."""
    _finish(_handler().handle_set(key, value, path))

@app.command()
def size():
    """Print the number of cache entries."""
    _finish(_handler().handle_size())

@app.command()
def flush():
    """Remove every cache entry."""
    _finish(_handler().handle_flush())

@app.command()
def trim(
    threshold: Annotated[
        Optional[int],
        typer.Option("--threshold", "-t", min=0, help="Flush if the cache holds more entries than this.")
    ] = None,
):
    """Flush the cache if it has grown too large."""
    _finish(_handler().handle_trim(threshold))

@app.command()
def count(
    folders: Annotated[List[str], typer.Argument(help="Maildir folders to count.")],
):
    """Print message counts for maildir folders, using cached counts when current."""
    _finish(_handler().handle_count(folders))

@app.callback()
def main_callback(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", dir_okay=False, help="Path to the YAML configuration file.")
    ] = DEFAULT_CONFIG_FILE,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", "-l", help="Logging level (debug, info, warning, error).")
    ] = None,
):
    """Wire up dependencies before any command runs."""
    _dependencies.clear()
    _dependencies.update(create_dependencies(config_file=config, log_level=log_level))

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
