"""Tests for the line-record fingerprint store backend."""

from __future__ import annotations

from pathlib import Path

import pytest

from freshen.core.errors import ConfigurationError, SizingError, StorageError
from freshen.core.store.backends.lines import LineRecordStore

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def record_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "fingerprints"


@pytest.fixture
def store(record_path: Path):
    s = LineRecordStore(record_path)
    yield s
    s.close()


def _open_with(path: Path, content: bytes) -> LineRecordStore:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return LineRecordStore(path)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    """Opening a record file."""

    def test_creates_file_and_parents(self, record_path: Path) -> None:
        """The file and its parent directories are created on construction."""
        with LineRecordStore(record_path):
            assert record_path.is_file()
            assert record_path.read_bytes() == b""

    def test_directory_path_rejected(self, tmp_path: Path) -> None:
        """A directory at the record path is a configuration error."""
        with pytest.raises(ConfigurationError, match="directory"):
            LineRecordStore(tmp_path)

    def test_existing_content_is_kept(self, record_path: Path) -> None:
        """Opening an existing file does not truncate it."""
        with _open_with(record_path, b"k\nv\n") as s:
            assert s.get("k") == "v"
        assert record_path.read_bytes() == b"k\nv\n"


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestGet:
    """Key lookup."""

    def test_absent_key_returns_empty_string(self, store: LineRecordStore) -> None:
        assert store.get("nope") == ""
        assert store.has("nope") is False

    def test_several_records(self, store: LineRecordStore) -> None:
        """Each key returns its own value."""
        store.put("testKey", "TESTValue")
        store.put("testKey2", "TESTValue2")
        store.put("testKey3", "TESTValue3")

        assert store.get("testKey") == "TESTValue"
        assert store.get("testKey2") == "TESTValue2"
        assert store.get("testKey3") == "TESTValue3"

    def test_keys_only_match_on_even_lines(self, record_path: Path) -> None:
        """A value line equal to the key text is not treated as a key."""
        with _open_with(record_path, b"a\nk\nk\nv\n") as s:
            assert s.get("k") == "v"

    def test_first_match_wins(self, record_path: Path) -> None:
        with _open_with(record_path, b"k\nv1\nk\nv2\n") as s:
            assert s.get("k") == "v1"

    def test_crlf_line_endings(self, record_path: Path) -> None:
        """Carriage returns are not part of keys or values."""
        with _open_with(record_path, b"k1\r\nv1\r\nk2\r\nv2\r\n") as s:
            assert s.get("k1") == "v1"
            assert s.get("k2") == "v2"

    def test_unterminated_last_value(self, record_path: Path) -> None:
        with _open_with(record_path, b"k1\nv1\nk2\nv2") as s:
            assert s.get("k2") == "v2"

    def test_dangling_key_has_no_value(self, record_path: Path) -> None:
        """A key on the last line without a value line is absent."""
        with _open_with(record_path, b"k1\nv1\nk2") as s:
            assert s.has("k2") is False
            assert s.get("k2") == ""

    def test_empty_value_line_is_present(self, record_path: Path) -> None:
        with _open_with(record_path, b"k\n\n") as s:
            assert s.has("k") is True
            assert s.get("k") == ""


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


class TestPut:
    """Appending and in-place overwrites."""

    def test_new_key_appends_two_lines(self, store: LineRecordStore, record_path: Path) -> None:
        store.put("k", "v")
        assert record_path.read_bytes() == b"k\nv\n"
        assert store.has("k") is True

    def test_same_size_overwrite_keeps_file_length(
        self, store: LineRecordStore, record_path: Path
    ) -> None:
        """Replacing a value with one of equal length patches it in place."""
        store.put("k1", "aaaa")
        store.put("k2", "bbbb")
        size = record_path.stat().st_size

        store.put("k1", "cccc")

        assert record_path.stat().st_size == size
        assert record_path.read_bytes() == b"k1\ncccc\nk2\nbbbb\n"
        assert store.get("k1") == "cccc"
        assert store.get("k2") == "bbbb"

    def test_different_size_overwrite_rejected(
        self, store: LineRecordStore, record_path: Path
    ) -> None:
        """A value of another length raises SizingError and leaves the file alone."""
        store.put("k", "short")
        before = record_path.read_bytes()

        with pytest.raises(SizingError, match="illegal size") as exc_info:
            store.put("k", "much longer")

        assert exc_info.value.key == "k"
        assert exc_info.value.expected == 5
        assert exc_info.value.actual == 11
        assert isinstance(exc_info.value, StorageError)
        assert record_path.read_bytes() == before

    def test_equal_value_is_noop(self, store: LineRecordStore, record_path: Path) -> None:
        store.put("k", "v")
        store.put("k", "v")
        assert record_path.read_bytes() == b"k\nv\n"

    def test_overwrite_updates_first_match_only(self, record_path: Path) -> None:
        with _open_with(record_path, b"k\nv1\nk\nv2\n") as s:
            s.put("k", "v3")
        assert record_path.read_bytes() == b"k\nv3\nk\nv2\n"

    def test_overwrite_preserves_crlf(self, record_path: Path) -> None:
        with _open_with(record_path, b"k1\r\nv1\r\n") as s:
            s.put("k1", "v9")
        assert record_path.read_bytes() == b"k1\r\nv9\r\n"

    def test_odd_line_count_gets_blank_line(self, record_path: Path) -> None:
        """Appending after an odd number of lines keeps keys on even lines."""
        with _open_with(record_path, b"orphan\n") as s:
            s.put("k", "v")
            assert s.get("k") == "v"
        assert record_path.read_bytes() == b"orphan\n\nk\nv\n"

    def test_unterminated_last_line_is_terminated_first(self, record_path: Path) -> None:
        with _open_with(record_path, b"k1\nv1") as s:
            s.put("k2", "v2")
            assert s.get("k1") == "v1"
            assert s.get("k2") == "v2"
        assert record_path.read_bytes() == b"k1\nv1\nk2\nv2\n"

    def test_dangling_key_is_completed(self, record_path: Path) -> None:
        """Putting a dangling key writes its missing value line."""
        with _open_with(record_path, b"k1\nv1\nk2") as s:
            s.put("k2", "v2")
            assert s.get("k2") == "v2"
        assert record_path.read_bytes() == b"k1\nv1\nk2\nv2\n"

    def test_terminated_dangling_key_is_completed(self, record_path: Path) -> None:
        with _open_with(record_path, b"k1\nv1\nk2\n") as s:
            s.put("k2", "v2")
        assert record_path.read_bytes() == b"k1\nv1\nk2\nv2\n"

    def test_line_break_in_key_rejected(self, store: LineRecordStore) -> None:
        with pytest.raises(ValueError, match="line breaks"):
            store.put("bad\nkey", "v")
        assert store.has("bad\nkey") is False

    def test_line_break_in_value_rejected(self, store: LineRecordStore) -> None:
        with pytest.raises(ValueError, match="line breaks"):
            store.put("k", "bad\rvalue")

    def test_values_survive_reopen(self, record_path: Path) -> None:
        with LineRecordStore(record_path) as s:
            s.put("styles.scss", "abc123")
            s.sync()

        with LineRecordStore(record_path) as s:
            assert s.get("styles.scss") == "abc123"


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    """Closing the store."""

    def test_close_is_idempotent(self, record_path: Path) -> None:
        s = LineRecordStore(record_path)
        s.close()
        s.close()
        assert s.closed is True

    def test_operations_after_close(self, record_path: Path) -> None:
        s = LineRecordStore(record_path)
        s.close()

        assert s.has("k") is False
        s.sync()
        with pytest.raises(StorageError, match="closed"):
            s.get("k")
        with pytest.raises(StorageError, match="closed"):
            s.put("k", "v")

    def test_context_manager_closes(self, record_path: Path) -> None:
        with LineRecordStore(record_path) as s:
            assert s.closed is False
        assert s.closed is True
