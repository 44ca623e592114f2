"""In-memory fingerprint store backend.

``MemoryStore`` satisfies ``FingerprintStore`` without performing any I/O.
Useful for unit-testing the change tracker and for dry runs where nothing
should outlive the process.
"""

from __future__ import annotations

from freshen.core.errors import StorageError


class MemoryStore:
    """Dict-backed fingerprint store.

    Args:
        initial: Optional mapping to seed the store with.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._closed = False

    def put(self, key: str, value: str) -> None:
        if self._closed:
            raise StorageError("Memory store is closed")
        self._data[key] = value

    def has(self, key: str) -> bool:
        return not self._closed and key in self._data

    def get(self, key: str) -> str:
        if self._closed:
            raise StorageError("Memory store is closed")
        return self._data.get(key, "")

    def sync(self) -> None:
        """No-op: nothing to flush."""

    def close(self) -> None:
        """Mark the store closed. Safe to call multiple times."""
        self._closed = True

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the stored key/value pairs."""
        return dict(self._data)
