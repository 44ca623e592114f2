"""Fingerprint store protocol definition.

Every backend usable by the change tracker must satisfy ``FingerprintStore``.
The protocol is ``@runtime_checkable`` so callers can guard with
``isinstance(store, FingerprintStore)``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FingerprintStore(Protocol):
    """Synchronous key/value contract for persisted fingerprints.

    All methods are blocking. Keys and values are text; a missing key reads
    back as the empty string rather than raising.

    Lifecycle::

        store = LineRecordStore(path)
        try:
            store.put("a.scss", digest)
            store.sync()
        finally:
            store.close()
    """

    def put(self, key: str, value: str) -> None:
        """Insert or update the value stored under *key*.

        Raises:
            StorageError: On write failure
        """
        ...

    def has(self, key: str) -> bool:
        """Return True if *key* holds a value. Never raises."""
        ...

    def get(self, key: str) -> str:
        """Return the value for *key*, or ``""`` if the key is absent.

        Raises:
            StorageError: On read failure
        """
        ...

    def sync(self) -> None:
        """Force durability of all prior writes.

        Raises:
            StorageError: On flush failure
        """
        ...

    def close(self) -> None:
        """Release backend resources. Safe to call multiple times (idempotent)."""
        ...
