"""Tests for the single-file helper functions."""

from __future__ import annotations

from pathlib import Path

from freshen.core.store.backends.lines import LineRecordStore
from freshen.core.tracker.fingerprint import sha256_file
from freshen.core.tracker.shortcuts import (
    if_changed_or_missing_using_file,
    if_changed_using_file,
    if_changed_using_store,
)


def test_if_changed_using_file(tracked_file: Path) -> None:
    sidecar = tracked_file.with_name("a.txt.sha256")
    runs: list[int] = []

    first = if_changed_using_file(tracked_file, sidecar, lambda: runs.append(1))
    second = if_changed_using_file(tracked_file, sidecar, lambda: runs.append(2))

    assert runs == [1]
    assert first.action_succeeded is True
    assert second.action_invoked is False
    assert sidecar.read_text(encoding="utf-8") == sha256_file(tracked_file)


def test_if_changed_using_store(tracked_file: Path, tmp_path: Path) -> None:
    runs: list[int] = []
    with LineRecordStore(tmp_path / "fingerprints") as store:
        if_changed_using_store(tracked_file, store, "a.txt", lambda: runs.append(1))
        if_changed_using_store(tracked_file, store, "a.txt", lambda: runs.append(2))
        assert store.get("a.txt") == sha256_file(tracked_file)

    assert runs == [1]


def test_if_changed_or_missing_using_file(tracked_file: Path) -> None:
    """A generated file that is never created keeps firing the action."""
    sidecar = tracked_file.with_name("a.txt.sha256")
    generated = tracked_file.with_name("a.css")
    runs: list[int] = []

    if_changed_or_missing_using_file(tracked_file, sidecar, generated, lambda: runs.append(1))
    evaluation = if_changed_or_missing_using_file(
        tracked_file, sidecar, generated, lambda: runs.append(2)
    )

    assert runs == [1, 2]
    assert evaluation.missing_detected is True

    generated.write_text("body {}", encoding="utf-8")
    if_changed_or_missing_using_file(tracked_file, sidecar, generated, lambda: runs.append(3))
    assert runs == [1, 2]
