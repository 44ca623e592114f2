"""Fingerprint store configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FingerprintStoreConfig(BaseModel):
    """Configuration for a fingerprint store backend.

    Args:
        backend: Storage backend to use. ``"sidecar"`` writes one file per
            fingerprint (the location *is* the file path); ``"lines"`` keeps
            every fingerprint in one key/value line file; ``"memory"`` is an
            in-process dict; ``"sqlite"`` persists to a local SQLite table.
        path: Line file or SQLite database path. Required for ``"lines"`` and
            ``"sqlite"``. For ``"sidecar"`` an optional root directory that
            relative locations are resolved against.
        table: SQLite table name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: Literal["sidecar", "lines", "memory", "sqlite"] = "sidecar"
    path: Path | None = None
    table: str = Field(default="fingerprints", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
