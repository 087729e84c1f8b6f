from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from appfiles.errors import InvalidPathError, PathConfinementError
from appfiles.storage.files import ScopedStore

SUBFOLDER = "path/to/subfolder"


@pytest.fixture
def store(tmp_path: Path) -> ScopedStore:
    return ScopedStore("Test Product 1", "Test Company 1", tmp_path)


def test_text_round_trip(store: ScopedStore) -> None:
    assert store.save_text("Test.txt", "hello")
    assert (store.app_root / "Test.txt").read_text(encoding="utf-8") == "hello"
    assert store.load_text("Test.txt") == "hello"


def test_save_text_replaces_existing_content(store: ScopedStore) -> None:
    store.save_text("Test.txt", "first version, longer")
    store.save_text("Test.txt", "second")
    assert store.load_text("Test.txt") == "second"


def test_save_text_creates_nested_subfolders(store: ScopedStore) -> None:
    assert store.save_text("Test.txt", "This is a test file.", SUBFOLDER)
    assert (store.app_root / "path" / "to" / "subfolder" / "Test.txt").is_file()


def test_backslash_separators_resolve_to_same_folder(store: ScopedStore) -> None:
    store.save_text("Test.txt", "content", "path\\to\\subfolder")
    assert store.load_text("Test.txt", "/path//to/subfolder/") == "content"


def test_binary_round_trip(store: ScopedStore) -> None:
    payload = bytes([0x00, 0x01, 0x02, 0x03])
    assert store.save_binary("Test.bin", payload)
    assert store.load_binary("Test.bin") == payload


def test_save_binary_creates_missing_subfolders(store: ScopedStore) -> None:
    assert store.save_binary("Test.bin", b"\x00\x01", SUBFOLDER)
    assert store.load_binary("Test.bin", SUBFOLDER) == b"\x00\x01"


def test_list_directory_filters_by_pattern(store: ScopedStore) -> None:
    store.save_text("Test.txt", "This is a test file.", SUBFOLDER)
    store.save_binary("Test.bin", bytes([0x00, 0x01, 0x02, 0x03]), SUBFOLDER)

    files = store.list_directory(SUBFOLDER, "*.txt")

    assert files == [str(store.app_root / "path" / "to" / "subfolder" / "Test.txt")]
    assert Path(files[0]).is_absolute()


def test_list_directory_without_match_is_empty(store: ScopedStore) -> None:
    store.save_text("Test.txt", "This is a test file.", SUBFOLDER)
    assert store.list_directory(SUBFOLDER, "*.bin") == []


def test_list_directory_skips_nested_folders(store: ScopedStore) -> None:
    store.save_text("a.txt", "a")
    store.save_text("b.txt", "b")
    store.save_text("nested.txt", "n", "inner")

    files = store.list_directory()

    assert sorted(Path(name).name for name in files) == ["a.txt", "b.txt"]


def test_list_directory_single_character_wildcard(store: ScopedStore) -> None:
    store.save_text("a1.log", "")
    store.save_text("a10.log", "")
    assert [Path(name).name for name in store.list_directory(pattern="a?.log")] == ["a1.log"]


def test_missing_file_loads_as_empty(store: ScopedStore) -> None:
    assert store.load_text("never-saved.txt") == ""
    assert store.load_binary("never-saved.bin") == b""


def test_missing_folder_lists_as_empty(store: ScopedStore) -> None:
    assert store.list_directory("does/not/exist") == []


def test_invalid_subfolder_returns_defaults(store: ScopedStore) -> None:
    bad = "path/with\0null"
    assert store.save_text("Test.txt", "x", bad) is False
    assert store.load_text("Test.txt", bad) == ""
    assert store.save_binary("Test.bin", b"x", bad) is False
    assert store.load_binary("Test.bin", bad) == b""
    assert store.list_directory(bad) == []


def test_none_subfolder_is_invalid(store: ScopedStore) -> None:
    store.save_text("Test.txt", "x")
    assert store.load_text("Test.txt", None) == ""
    assert store.list_directory(None) == []


def test_parent_traversal_is_rejected(tmp_path: Path, store: ScopedStore) -> None:
    assert store.save_text("escape.txt", "x", "../../..") is False
    assert store.save_text("escape.txt", "x", "inner/../../outside") is False
    assert not any(tmp_path.rglob("escape.txt"))


def test_file_name_cannot_escape(tmp_path: Path, store: ScopedStore) -> None:
    assert store.save_text("../escape.txt", "x") is False
    assert store.save_text("..", "x") is False
    assert store.save_text("", "x") is False
    assert not (tmp_path / "Test Company 1" / "escape.txt").exists()


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_folder_outside_root_is_rejected(tmp_path: Path, store: ScopedStore) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (store.app_root / "link").symlink_to(outside, target_is_directory=True)

    result = store.try_save_text("Test.txt", "x", "link")

    assert not result.ok
    assert isinstance(result.error, PathConfinementError)
    assert list(outside.iterdir()) == []


def test_try_variants_report_reason(store: ScopedStore) -> None:
    saved = store.try_save_text("Test.txt", "hello")
    assert saved.ok and saved.value is True and saved.error is None

    missing = store.try_load_text("missing.txt")
    assert not missing.ok
    assert missing.value == ""
    assert isinstance(missing.error, FileNotFoundError)

    invalid = store.try_list_directory("bad\0folder")
    assert isinstance(invalid.error, InvalidPathError)
    assert "Invalid subfolder path" in invalid.reason


def test_wrong_content_type_is_reported_not_raised(store: ScopedStore) -> None:
    assert store.save_text("Test.txt", b"bytes") is False
    assert store.save_binary("Test.bin", "text") is False
    assert store.save_binary("Test.bin", 5) is False
    assert not (store.app_root / "Test.txt").exists()
    assert not (store.app_root / "Test.bin").exists()


def test_bytes_like_content_is_accepted(store: ScopedStore) -> None:
    assert store.save_binary("a.bin", bytearray(b"\x01\x02"))
    assert store.save_binary("b.bin", memoryview(b"\x03"))
    assert store.load_binary("a.bin") == b"\x01\x02"
    assert store.load_binary("b.bin") == b"\x03"


def test_unencodable_text_keeps_existing_content(store: ScopedStore) -> None:
    store.save_text("Test.txt", "precious")

    result = store.try_save_text("Test.txt", "bad \ud800")

    assert not result.ok
    assert isinstance(result.error, UnicodeEncodeError)
    assert store.load_text("Test.txt") == "precious"


@pytest.mark.parametrize("file_name, content", [
    ("..", "x"),
    ("bad\0name.txt", "x"),
    ("Test.txt", b"not text"),
    ("Test.txt", "bad \ud800"),
])
def test_rejected_save_creates_no_folders(store: ScopedStore, file_name: str, content: object) -> None:
    assert store.save_text(file_name, content, "made/by/rejected/call") is False
    assert not (store.app_root / "made").exists()


def test_rejected_binary_save_creates_no_folders(store: ScopedStore) -> None:
    assert store.save_binary("Test.bin", 5, "made/by/rejected/call") is False
    assert not (store.app_root / "made").exists()


def test_failures_are_logged_to_injected_logger(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.appfiles")
    store = ScopedStore("App", "Company", tmp_path, logger=logger)

    with caplog.at_level(logging.ERROR, logger="tests.appfiles"):
        store.load_text("missing.txt", "sub")
        store.list_directory("bad\0folder")

    records = [record for record in caplog.records if record.name == "tests.appfiles"]
    assert [record.operation for record in records] == ["load_text", "list_directory"]
    assert records[0].path == "sub/missing.txt"
    assert records[0].exc_info is not None
    assert records[1].exc_info is None


def test_log_target_without_subfolder_is_bare_file_name(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.appfiles")
    store = ScopedStore("App", "Company", tmp_path, logger=logger)

    with caplog.at_level(logging.ERROR, logger="tests.appfiles"):
        store.load_text("missing.txt")

    assert [record.path for record in caplog.records if record.name == "tests.appfiles"] == ["missing.txt"]


def test_app_root_path_is_read_only(store: ScopedStore) -> None:
    assert store.app_root_path == str(store.app_root)
    with pytest.raises(AttributeError):
        store.app_root_path = "/elsewhere"  # type: ignore[misc]
