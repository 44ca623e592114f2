"""One-call helpers for the common single-file cases.

Each helper builds a ``ChangeTracker``, executes it and returns the
evaluation. As with ``ChangeTracker.execute()``, the action's own failure is
not raised.
"""

from __future__ import annotations

from pathlib import Path

from freshen.core.store.protocols import FingerprintStore
from freshen.core.tracker.engine import Action, ChangeTracker
from freshen.core.tracker.models import ChangeEvaluation


def if_changed_using_file(
    tracked_file: Path | str, sidecar: Path | str, action: Action
) -> ChangeEvaluation:
    """Run *action* if *tracked_file* differs from the fingerprint in *sidecar*."""
    return ChangeTracker().changed(tracked_file, sidecar).execute(action)


def if_changed_using_store(
    tracked_file: Path | str, store: FingerprintStore, key: str, action: Action
) -> ChangeEvaluation:
    """Run *action* if *tracked_file* differs from the fingerprint under *key* in *store*."""
    return ChangeTracker(store=store).changed(tracked_file, key).execute(action)


def if_changed_or_missing_using_file(
    tracked_file: Path | str,
    sidecar: Path | str,
    missing: Path | str,
    action: Action,
) -> ChangeEvaluation:
    """Run *action* if *tracked_file* changed or *missing* does not exist.

    Example:
        >>> if_changed_or_missing_using_file(
        ...     "styles.scss", "styles.scss.sha256", "styles.css", compile_styles
        ... )
    """
    return ChangeTracker().changed(tracked_file, sidecar).missing(missing).execute(action)
