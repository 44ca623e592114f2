"""Sidecar-file fingerprint store backend.

Each fingerprint lives in its own plain-text file whose entire content is the
hex digest (no trailing newline). The store key is the sidecar path itself,
e.g. ``styles.scss.sha256`` next to ``styles.scss``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from freshen.core.errors import ConfigurationError, StorageError

logger = logging.getLogger(__name__)


class SidecarFileStore:
    """Fingerprint store that maps every key to a file path.

    Writes are atomic (temp file in the same directory, then ``os.replace``)
    so a reader never observes a half-written fingerprint.

    Args:
        root: Optional directory that relative keys are resolved against.
            Absolute keys are used as-is. Defaults to the working directory.
    """

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root is not None else None

    def path_for(self, key: str) -> Path:
        """Resolve *key* to the sidecar file path."""
        path = Path(key)
        if self.root is not None and not path.is_absolute():
            return self.root / path
        return path

    def put(self, key: str, value: str) -> None:
        path = self.path_for(key)
        if path.is_dir():
            raise ConfigurationError(f"Fingerprint location is a directory: {path}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                delete=False,
            )
        except OSError as e:
            raise StorageError(f"Create fingerprint file error: {path}: {e}") from e

        try:
            with tmp:
                tmp.write(value)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp.name, path)
        except OSError as e:
            # Clean up temp on failure
            Path(tmp.name).unlink(missing_ok=True)
            raise StorageError(f"Save fingerprint error: {path}: {e}") from e

        logger.debug(f"Saved fingerprint to {path}")

    def has(self, key: str) -> bool:
        try:
            return self.path_for(key).is_file()
        except OSError:
            return False

    def get(self, key: str) -> str:
        path = self.path_for(key)
        if path.is_dir():
            raise ConfigurationError(f"Fingerprint location is a directory: {path}")
        try:
            return path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Error reading existing fingerprint file {path}: {e}") from e

    def sync(self) -> None:
        """No-op: every ``put`` is fsynced before it is renamed into place."""

    def close(self) -> None:
        """No-op: the store holds no open handles."""
