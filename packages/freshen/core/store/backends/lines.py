"""Line-record fingerprint store backend.

Keeps every fingerprint in a single flat text file of alternating key and
value lines::

    0  key
    1  value
    2  key
    3  value

Lookups scan from the top; the first matching key wins. Updates patch the
value bytes in place, which only works because fingerprints of one algorithm
always have the same length. A replacement of a different length is rejected
with ``SizingError`` instead of shifting the rest of the file.

Usage::

    with LineRecordStore(Path(".freshen/fingerprints")) as store:
        store.put("styles.scss", digest)
        store.sync()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from freshen.core.errors import ConfigurationError, SizingError, StorageError

logger = logging.getLogger(__name__)

_NEWLINE = b"\n"


@dataclass
class _ScanResult:
    """Outcome of one top-to-bottom pass over the record file."""

    key_found: bool = False
    key_terminated: bool = True
    value: bytes | None = None
    value_offset: int = -1
    line_count: int = 0
    terminated: bool = True


def _strip_eol(raw: bytes) -> bytes:
    line = raw[:-1] if raw.endswith(_NEWLINE) else raw
    if line.endswith(b"\r"):
        line = line[:-1]
    return line


def _encode(text: str, what: str) -> bytes:
    if "\n" in text or "\r" in text:
        raise ValueError(f"Line record {what} must not contain line breaks: {text!r}")
    return text.encode("utf-8")


class LineRecordStore:
    """Fingerprint store backed by one key/value line file.

    The file (and its parent directories) is created on construction and a
    single read/write handle is held until ``close()``. There is no locking:
    one writer, one process.

    Args:
        path: Record file path

    Raises:
        ConfigurationError: If *path* is a directory
        StorageError: If the file cannot be created or opened
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        if self.path.is_dir():
            raise ConfigurationError(f"Line record store path is a directory: {self.path}")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            self._file: BinaryIO | None = self.path.open("r+b")
        except OSError as e:
            raise StorageError(f"Line record store create file error: {self.path}: {e}") from e

        logger.debug(f"Opened line record store {self.path}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> LineRecordStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def sync(self) -> None:
        """Flush buffered writes and fsync the record file."""
        if self._file is None:
            return
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError as e:
            raise StorageError(f"Error syncing line record store {self.path}: {e}") from e

    def close(self) -> None:
        """Close the record file. Safe to call multiple times."""
        if self._file is None:
            return
        file, self._file = self._file, None
        try:
            file.close()
        except OSError as e:
            raise StorageError(f"Error closing line record store {self.path}: {e}") from e

    # ------------------------------------------------------------------
    # Key/value operations
    # ------------------------------------------------------------------

    def has(self, key: str) -> bool:
        """Return True if *key* is present with a value line (even an empty one)."""
        try:
            return self._scan(_encode(key, "key")).value is not None
        except (ValueError, StorageError):
            return False

    def get(self, key: str) -> str:
        """Return the value of the first record keyed *key*, or ``""``."""
        value = self._scan(_encode(key, "key")).value
        if value is None:
            return ""
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageError(f"Undecodable value for key {key!r} in {self.path}: {e}") from e

    def put(self, key: str, value: str) -> None:
        """Store *value* under *key*.

        An existing value is overwritten in place and must keep its encoded
        length. A new key is appended as a key line plus a value line.

        Raises:
            SizingError: If an existing value has a different encoded length
            StorageError: On read or write failure
            ValueError: If key or value contains a line break
        """
        key_bytes = _encode(key, "key")
        value_bytes = _encode(value, "value")
        scan = self._scan(key_bytes)

        if scan.value is not None:
            if scan.value == value_bytes:
                return
            if len(scan.value) != len(value_bytes):
                raise SizingError(key, expected=len(scan.value), actual=len(value_bytes))
            self._write_at(scan.value_offset, value_bytes)
            logger.debug(f"Overwrote value for {key!r} in place in {self.path}")
            return

        if scan.key_found:
            # Key is the last line of the file and has no value line yet
            chunks = [] if scan.key_terminated else [_NEWLINE]
            chunks += [value_bytes, _NEWLINE]
            self._append(b"".join(chunks))
            logger.debug(f"Completed dangling key {key!r} in {self.path}")
            return

        chunks = []
        if not scan.terminated:
            chunks.append(_NEWLINE)
        if scan.line_count % 2 != 0:
            # Keeping keys on even lines
            chunks.append(_NEWLINE)
        chunks += [key_bytes, _NEWLINE, value_bytes, _NEWLINE]
        self._append(b"".join(chunks))
        logger.debug(f"Appended record for {key!r} to {self.path}")

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _handle(self) -> BinaryIO:
        if self._file is None:
            raise StorageError(f"Line record store is closed: {self.path}")
        return self._file

    def _scan(self, key: bytes) -> _ScanResult:
        file = self._handle()
        result = _ScanResult()
        value_index = -1
        offset = 0
        index = 0
        last = b""
        try:
            file.seek(0)
            for raw in file:
                line = _strip_eol(raw)
                if index == value_index:
                    result.value = line
                    result.value_offset = offset
                    return result
                if value_index < 0 and index % 2 == 0 and line == key:
                    result.key_found = True
                    result.key_terminated = raw.endswith(_NEWLINE)
                    value_index = index + 1
                offset += len(raw)
                index += 1
                last = raw
        except OSError as e:
            raise StorageError(f"Error reading line record store {self.path}: {e}") from e

        result.line_count = index
        result.terminated = not last or last.endswith(_NEWLINE)
        return result

    def _write_at(self, offset: int, data: bytes) -> None:
        file = self._handle()
        try:
            file.seek(offset)
            file.write(data)
            file.flush()
        except OSError as e:
            raise StorageError(f"Error writing line record store {self.path}: {e}") from e

    def _append(self, data: bytes) -> None:
        file = self._handle()
        try:
            file.seek(0, os.SEEK_END)
            file.write(data)
            file.flush()
        except OSError as e:
            raise StorageError(f"Error writing line record store {self.path}: {e}") from e
