"""SQLite fingerprint store backend.

Persists fingerprints to a single two-column table in a local SQLite
database. Satisfies the ``FingerprintStore`` protocol.

Usage::

    from freshen.core.store.backends.sqlite import SQLiteStore

    store = SQLiteStore(Path(".freshen/fingerprints.db"))
    try:
        store.put("styles.scss", digest)
        store.sync()
    finally:
        store.close()
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from freshen.core.errors import ConfigurationError, StorageError

logger = logging.getLogger(__name__)


class SQLiteStore:
    """SQLite-backed fingerprint store.

    The connection is opened (and the table created) on construction.

    Args:
        db_path: Database file path. Parent directories are created.
        table: Table name. Must be a plain identifier.
    """

    def __init__(self, db_path: Path | str, table: str = "fingerprints") -> None:
        if not table.isidentifier():
            raise ConfigurationError(f"Invalid fingerprint table name: {table!r}")
        self.db_path = Path(db_path)
        self.table = table
        if self.db_path.is_dir():
            raise ConfigurationError(f"SQLite store path is a directory: {self.db_path}")

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            conn.execute("PRAGMA synchronous=NORMAL")
            with conn:
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {self.table} "
                    "(key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open SQLite store {self.db_path}: {e}") from e

        self._conn: sqlite3.Connection | None = conn

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError(f"SQLite store is closed: {self.db_path}")
        return self._conn

    def put(self, key: str, value: str) -> None:
        conn = self._connection()
        try:
            with conn:
                conn.execute(
                    f"INSERT INTO {self.table} (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Error saving fingerprint for {key!r}: {e}") from e

    def has(self, key: str) -> bool:
        try:
            row = (
                self._connection()
                .execute(f"SELECT 1 FROM {self.table} WHERE key = ?", (key,))
                .fetchone()
            )
        except (StorageError, sqlite3.Error):
            return False
        return row is not None

    def get(self, key: str) -> str:
        conn = self._connection()
        try:
            row = conn.execute(f"SELECT value FROM {self.table} WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Error reading fingerprint for {key!r}: {e}") from e
        return row[0] if row is not None else ""

    def sync(self) -> None:
        """Commit any open transaction."""
        if self._conn is None:
            return
        try:
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Error syncing SQLite store {self.db_path}: {e}") from e

    def close(self) -> None:
        """Close the SQLite connection. Safe to call multiple times."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
