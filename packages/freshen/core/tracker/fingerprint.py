"""Content fingerprinting for tracked files.

A fingerprint is the hex digest of a file's full byte content. Equal content
always yields an equal fingerprint; any byte difference yields (with
overwhelming probability) a different one.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path

from freshen.core.errors import ConfigurationError, FingerprintError

DEFAULT_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 1024 * 1024

FingerprintFn = Callable[[Path], str]


def sha256_bytes(data: bytes) -> str:
    """Return SHA-256 hex digest for raw bytes."""
    return hashlib.sha256(data).hexdigest()


def file_digest(
    path: Path | str,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Return the hex digest of a file on disk, streamed in chunks.

    Args:
        path: File to hash
        algorithm: Any name accepted by ``hashlib.new``
        chunk_size: Read size in bytes

    Returns:
        Hex digest string

    Raises:
        ConfigurationError: If *algorithm* is not available
        FingerprintError: If the file cannot be read
    """
    try:
        digest = hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Unsupported fingerprint algorithm: {algorithm!r}") from e

    path = Path(path)
    try:
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(chunk_size), b""):
                digest.update(chunk)
    except OSError as e:
        raise FingerprintError(f"Error finding {algorithm} of {path}: {e}") from e

    # Variable-length digests (shake_*) need an explicit size
    if algorithm.lower().startswith("shake"):
        return digest.hexdigest(32)  # type: ignore[call-arg]
    return digest.hexdigest()


def sha256_file(path: Path | str) -> str:
    """Return SHA-256 hex digest for a file on disk."""
    return file_digest(path, DEFAULT_ALGORITHM)


def make_fingerprint_fn(
    algorithm: str = DEFAULT_ALGORITHM, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> FingerprintFn:
    """Build a single-argument fingerprint function for ``ChangeTracker``.

    The algorithm is validated eagerly so a typo surfaces at setup time.
    """
    try:
        hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Unsupported fingerprint algorithm: {algorithm!r}") from e

    if algorithm == DEFAULT_ALGORITHM and chunk_size == DEFAULT_CHUNK_SIZE:
        return sha256_file

    def fingerprint(path: Path) -> str:
        return file_digest(path, algorithm, chunk_size)

    return fingerprint
