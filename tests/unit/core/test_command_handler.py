import pytest
from pathlib import Path
from unittest.mock import MagicMock

from mailcache.core.command_handler import CommandHandler
from mailcache.core.services.cache_session import CacheSession
from mailcache.core.services.message_count_service import MessageCountService
from mailcache.domain.interfaces.user_interface import UserInterface
from mailcache.infrastructure.cache.persistent_cache import CacheIOError, PersistentCache
from mailcache.infrastructure.config.settings import Settings
from mailcache.infrastructure.filesystem.local_fs import LocalFileSystem

@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)

@pytest.fixture
def session(cache: PersistentCache, settings: Settings) -> CacheSession:
    return CacheSession(cache=cache, config=settings)

@pytest.fixture
def command_handler(session: CacheSession, cache: PersistentCache, mock_ui: MagicMock):
    """Fixture to create CommandHandler with a real cache in a temporary directory."""
    return CommandHandler(
        session=session,
        message_counter=MessageCountService(cache=cache, file_system=LocalFileSystem()),
        ui=mock_ui,
    )

def cache_text(cache_dir: Path) -> str:
    return (cache_dir / "test-version").read_text()

def test_handle_where(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path):
    assert command_handler.handle_where()
    mock_ui.display_output.assert_called_once_with(f"{cache_dir}/test-version")

def test_handle_set_saves(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path):
    assert command_handler.handle_set("foo", "bar")
    assert cache_text(cache_dir) == "foo=bar\n"
    mock_ui.display_error.assert_not_called()
    mock_ui.display_warning.assert_not_called()

def test_handle_set_with_path(command_handler: CommandHandler, cache_dir: Path, tmp_path: Path):
    assert command_handler.handle_set("count", "5", path=str(tmp_path))
    assert cache_text(cache_dir) == f"{tmp_path}'count=5\n"

@pytest.mark.parametrize("key, value", [
    ("foo", "a=b"),
    ("foo", "two\nlines"),
    ("two\nlines", "x"),
    ("foo", ""),
])
def test_handle_set_rejects_unstorable(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path, key, value):
    assert not command_handler.handle_set(key, value)
    mock_ui.display_error.assert_called_once()
    assert not cache_dir.exists()

@pytest.mark.parametrize("key", ["it's", "'", "a'b'c"])
def test_handle_set_rejects_quote_in_scoped_key(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path, tmp_path: Path, key):
    assert not command_handler.handle_set(key, "1", path=str(tmp_path))
    mock_ui.display_error.assert_called_once()
    assert not cache_dir.exists()

def test_handle_get(command_handler: CommandHandler, mock_ui: MagicMock):
    command_handler.handle_set("foo", "bar")
    assert command_handler.handle_get("foo")
    mock_ui.display_output.assert_called_once_with("bar")

def test_handle_get_missing(command_handler: CommandHandler, mock_ui: MagicMock):
    assert not command_handler.handle_get("nope", path="/mail/inbox")
    mock_ui.display_warning.assert_called_once_with("Key not found: /mail/inbox'nope")

def test_handle_show(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path):
    command_handler.handle_set("b", "2")
    command_handler.handle_set("a", "1")
    assert command_handler.handle_show()
    entries = mock_ui.display_entries.call_args.args[0]
    assert sorted(entries) == [("a", "1"), ("b", "2")]
    assert mock_ui.display_entries.call_args.kwargs["title"] == f"{cache_dir}/test-version"

def test_handle_size(command_handler: CommandHandler, mock_ui: MagicMock):
    command_handler.handle_set("a", "1")
    command_handler.handle_set("b", "2")
    assert command_handler.handle_size()
    mock_ui.display_output.assert_called_once_with("2")

def test_handle_flush(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path):
    command_handler.handle_set("a", "1")
    assert command_handler.handle_flush()
    assert cache_text(cache_dir) == ""
    mock_ui.display_info.assert_called_once_with("Flushed 1 entries.")

def test_handle_trim(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path):
    command_handler.handle_set("a", "1")
    command_handler.handle_set("b", "2")
    assert command_handler.handle_trim(threshold=1)
    assert cache_text(cache_dir) == ""
    mock_ui.display_info.assert_called_once_with("Cache held 2 entries; flushed.")

def test_handle_trim_noop(command_handler: CommandHandler, mock_ui: MagicMock, cache_dir: Path):
    command_handler.handle_set("a", "1")
    assert command_handler.handle_trim(threshold=5)
    assert cache_text(cache_dir) == "a=1\n"
    mock_ui.display_info.assert_called_once_with("Cache holds 1 entries; nothing to do.")

def write_entries(cache_dir: Path, count: int) -> None:
    cache_dir.mkdir()
    (cache_dir / "test-version").write_text("".join(f"k{i}={i}\n" for i in range(count)))

def test_handle_trim_defaults_to_configured_limit(command_handler: CommandHandler, mock_ui: MagicMock, settings: Settings, cache_dir: Path):
    write_entries(cache_dir, 2)
    settings.set("cache.max_entries", 1)
    assert command_handler.handle_trim()
    assert cache_text(cache_dir) == ""
    mock_ui.display_info.assert_called_once_with("Cache held 2 entries; flushed.")

def test_handle_trim_configured_limit_overrides_cache_default(mock_ui: MagicMock, settings: Settings, cache_dir: Path):
    write_entries(cache_dir, 2)
    settings.set("cache.max_entries", 5)
    cache = PersistentCache(trim_threshold=1)
    handler = CommandHandler(
        session=CacheSession(cache=cache, config=settings),
        message_counter=MagicMock(spec=MessageCountService),
        ui=mock_ui,
    )
    assert handler.handle_trim()
    assert cache_text(cache_dir) == "k0=0\nk1=1\n"
    mock_ui.display_info.assert_called_once_with("Cache holds 2 entries; nothing to do.")

def test_handle_trim_reports_size_before_flush(command_handler: CommandHandler, mock_ui: MagicMock, settings: Settings, cache_dir: Path):
    write_entries(cache_dir, 4)
    settings.set("cache.max_entries", 3)
    assert command_handler.handle_trim(threshold=10)
    mock_ui.display_info.assert_called_once_with("Cache holds 4 entries; nothing to do.")

def test_handle_count(command_handler: CommandHandler, mock_ui: MagicMock, maildir: Path, cache_dir: Path):
    assert command_handler.handle_count([str(maildir)])
    mock_ui.display_output.assert_called_once_with(f"{maildir}\t3")
    assert f"{maildir}'count=3" in cache_text(cache_dir)

def test_warns_when_not_persistent(cache: PersistentCache, mock_ui: MagicMock):
    handler = CommandHandler(
        session=CacheSession(cache=cache, config=Settings(config_file=None, use_dotenv=False)),
        message_counter=MagicMock(spec=MessageCountService),
        ui=mock_ui,
    )
    assert handler.handle_set("foo", "bar")
    mock_ui.display_warning.assert_called_once()

def test_io_error_is_reported(mock_ui: MagicMock):
    session = MagicMock(spec=CacheSession)
    session.is_persistent = True
    session.open.side_effect = CacheIOError("Failed to read cache file /x: denied")
    handler = CommandHandler(session=session, message_counter=MagicMock(spec=MessageCountService), ui=mock_ui)

    assert not handler.handle_show()
    mock_ui.display_error.assert_called_once_with("Failed to load cache: Failed to read cache file /x: denied")

def test_save_error_is_reported(command_handler: CommandHandler, mock_ui: MagicMock, settings: Settings, tmp_path: Path):
    settings.set("cache.prefix", str(tmp_path / "missing" / "cache"))
    assert not command_handler.handle_set("foo", "bar")
    mock_ui.display_error.assert_called_once()
    assert mock_ui.display_error.call_args.args[0].startswith("Failed to update cache:")
