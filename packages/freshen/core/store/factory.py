"""Fingerprint store factory: selects and constructs the correct backend.

Usage::

    from freshen.core.store.factory import create_fingerprint_store
    from freshen.core.store.models import FingerprintStoreConfig

    config = FingerprintStoreConfig(backend="lines", path=Path(".freshen/fingerprints"))
    store = create_fingerprint_store(config)
"""

from __future__ import annotations

from freshen.core.errors import ConfigurationError
from freshen.core.store.models import FingerprintStoreConfig
from freshen.core.store.protocols import FingerprintStore


def create_fingerprint_store(config: FingerprintStoreConfig) -> FingerprintStore:
    """Construct a fingerprint store backend from *config*.

    Args:
        config: Backend selection and location parameters.

    Returns:
        An open ``FingerprintStore`` implementation. The caller owns it and
        must ``close()`` it.

    Raises:
        ConfigurationError: If the backend is unknown, or if required
            parameters (e.g. ``path`` for the line file) are missing.
    """
    if config.backend == "sidecar":
        from freshen.core.store.backends.sidecar import SidecarFileStore

        return SidecarFileStore(config.path)

    if config.backend == "memory":
        from freshen.core.store.backends.memory import MemoryStore

        return MemoryStore()

    if config.backend in ("lines", "sqlite") and config.path is None:
        raise ConfigurationError(
            f"backend={config.backend!r} requires a path but none was provided. "
            "Set FingerprintStoreConfig.path to a valid file path."
        )

    if config.backend == "lines":
        from freshen.core.store.backends.lines import LineRecordStore

        return LineRecordStore(config.path)  # type: ignore[arg-type]

    if config.backend == "sqlite":
        # Lazy import so that sqlite3 is only pulled in when requested.
        from freshen.core.store.backends.sqlite import SQLiteStore

        return SQLiteStore(config.path, table=config.table)  # type: ignore[arg-type]

    raise ConfigurationError(
        f"Unknown fingerprint store backend: {config.backend!r}. "
        "Supported backends: 'sidecar', 'lines', 'memory', 'sqlite'."
    )
