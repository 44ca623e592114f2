"""Fingerprint persistence for freshen.

Backends satisfy the ``FingerprintStore`` protocol:
- ``SidecarFileStore``: one sidecar file per fingerprint
- ``LineRecordStore``: all fingerprints in one key/value line file
- ``MemoryStore``: in-process dict (tests, dry runs)
- ``SQLiteStore``: local SQLite table
"""

from freshen.core.store.backends.lines import LineRecordStore
from freshen.core.store.backends.memory import MemoryStore
from freshen.core.store.backends.sidecar import SidecarFileStore
from freshen.core.store.backends.sqlite import SQLiteStore
from freshen.core.store.factory import create_fingerprint_store
from freshen.core.store.models import FingerprintStoreConfig
from freshen.core.store.protocols import FingerprintStore

__all__ = [
    # Core
    "FingerprintStore",
    "FingerprintStoreConfig",
    "create_fingerprint_store",
    # Backends
    "LineRecordStore",
    "MemoryStore",
    "SidecarFileStore",
    "SQLiteStore",
]
