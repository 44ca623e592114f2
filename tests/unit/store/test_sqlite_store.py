"""Tests for the SQLite fingerprint store backend.

All tests use tmp_path for DB isolation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from freshen.core.errors import ConfigurationError, StorageError
from freshen.core.store.backends.sqlite import SQLiteStore


@pytest.fixture
def store(tmp_path: Path):
    s = SQLiteStore(tmp_path / "fp.db")
    yield s
    s.close()


class TestSQLiteStore:
    """Key/value behaviour."""

    def test_absent_key(self, store: SQLiteStore) -> None:
        assert store.get("k") == ""
        assert store.has("k") is False

    def test_put_then_get(self, store: SQLiteStore) -> None:
        store.put("styles.scss", "abc123")
        assert store.get("styles.scss") == "abc123"
        assert store.has("styles.scss") is True

    def test_put_replaces_existing(self, store: SQLiteStore) -> None:
        store.put("k", "short")
        store.put("k", "a longer value")
        assert store.get("k") == "a longer value"

    def test_persists_across_connections(self, tmp_path: Path) -> None:
        db = tmp_path / "nested" / "fp.db"
        first = SQLiteStore(db)
        first.put("k", "v")
        first.sync()
        first.close()

        second = SQLiteStore(db)
        try:
            assert second.get("k") == "v"
        finally:
            second.close()

    def test_custom_table(self, tmp_path: Path) -> None:
        s = SQLiteStore(tmp_path / "fp.db", table="build_state")
        try:
            s.put("k", "v")
            assert s.get("k") == "v"
        finally:
            s.close()


class TestSQLiteStoreErrors:
    """Configuration and lifecycle errors."""

    def test_invalid_table_name(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="table"):
            SQLiteStore(tmp_path / "fp.db", table="drop table; --")

    def test_directory_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="directory"):
            SQLiteStore(tmp_path)

    def test_closed(self, tmp_path: Path) -> None:
        s = SQLiteStore(tmp_path / "fp.db")
        s.close()
        s.close()
        s.sync()

        assert s.has("k") is False
        with pytest.raises(StorageError, match="closed"):
            s.get("k")
        with pytest.raises(StorageError, match="closed"):
            s.put("k", "v")
