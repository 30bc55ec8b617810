import pytest
from typer.testing import CliRunner
from pathlib import Path

# Import the application entry point and key components to mock/replace
from mailcache.infrastructure.cache.persistent_cache import PersistentCache
from mailcache.infrastructure.cli.display import ConsoleDisplay
from mailcache.infrastructure.config.settings import Settings
from mailcache.infrastructure.filesystem.local_fs import LocalFileSystem

VERSION = "test-version"

@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()

@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path: Path):
    """Keeps real MAILCACHE_* variables and stray .env files out of the tests."""
    for name in ("MAILCACHE_CACHE_PREFIX", "MAILCACHE_GLOBAL_VERSION",
                 "MAILCACHE_CACHE_MAX_ENTRIES", "MAILCACHE_LOGGING_LEVEL",
                 "MAILCACHE_LOGGING_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A cache directory that does not exist yet."""
    return tmp_path / "cache"

@pytest.fixture
def settings(cache_dir: Path) -> Settings:
    """Settings pointing at the temporary cache directory, no files read."""
    config = Settings(config_file=None, use_dotenv=False)
    config.set("cache.prefix", str(cache_dir))
    config.set("global.version", VERSION)
    return config

@pytest.fixture
def cache() -> PersistentCache:
    return PersistentCache(file_system=LocalFileSystem())

@pytest.fixture
def maildir(tmp_path: Path) -> Path:
    """Creates a maildir with two read and one unread message."""
    folder = tmp_path / "Maildir" / "inbox"
    for sub in ("cur", "new", "tmp"):
        (folder / sub).mkdir(parents=True)
    (folder / "cur" / "1.host:2,S").write_text("one")
    (folder / "cur" / "2.host:2,S").write_text("two")
    (folder / "new" / "3.host").write_text("three")
    return folder

@pytest.fixture
def mock_console_display(mocker):
    """ Mocks the ConsoleDisplay to capture output easily.
        Patches the ConsoleDisplay where main.py wires it up.
    """
    mock = mocker.MagicMock(spec=ConsoleDisplay)
    mocker.patch('mailcache.main.ConsoleDisplay', return_value=mock)
    return mock

@pytest.fixture(autouse=True)
def no_logging_setup(mocker):
    """Leaves the root logger alone; CliRunner swaps the std streams per call."""
    mocker.patch('mailcache.main.setup_logging')
