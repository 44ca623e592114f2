"""Change tracker: run an action only when inputs changed or outputs are missing.

Workflow of ``ChangeTracker.execute()``:
1. Stat every must-exist path; the first absent one forces the action
2. Fingerprint every tracked file and compare with its stored fingerprint
3. Invoke the action once if anything is missing or changed
4. Persist the new fingerprints only if the action succeeded

A failed action leaves every stored fingerprint untouched, so the next
evaluation sees the same mismatch and retries. The action's exception is
recorded on the returned ``ChangeEvaluation``, never raised; engine faults
(missing inputs, directories, storage failures) are raised.

Example:
    >>> evaluation = (
    ...     ChangeTracker()
    ...     .changed("styles.scss", "styles.scss.sha256")
    ...     .missing("styles.css")
    ...     .execute(lambda: run_command("sassc", "styles.scss", "styles.css"))
    ... )
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from pathlib import Path

from freshen.core.errors import ConfigurationError, FreshenError, NotFoundError
from freshen.core.store.backends.sidecar import SidecarFileStore
from freshen.core.store.protocols import FingerprintStore
from freshen.core.tracker.fingerprint import FingerprintFn, sha256_file
from freshen.core.tracker.models import ChangeEvaluation, FileFingerprintPair

logger = logging.getLogger(__name__)

Action = Callable[[], object]


def _stat(path: Path) -> os.stat_result | None:
    """Stat *path*, returning None when it does not exist."""
    try:
        return path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        raise FreshenError(f"Cannot stat {path}: {e}") from e


class ChangeTracker:
    """Builder that accumulates tracked files and must-exist files.

    Declarations are kept in order and are not deduplicated. ``execute()``
    does not consume them, so one tracker can be evaluated repeatedly or
    extended between evaluations.

    Args:
        store: Where fingerprints are persisted. Defaults to sidecar files,
            in which case every location is a file path.
        fingerprint: Function mapping a file path to its content fingerprint.
    """

    def __init__(
        self,
        store: FingerprintStore | None = None,
        fingerprint: FingerprintFn = sha256_file,
    ) -> None:
        self.store: FingerprintStore = store if store is not None else SidecarFileStore()
        self.fingerprint = fingerprint
        self._pairs: list[tuple[Path, str]] = []
        self._missing: list[Path] = []

    @property
    def pairs(self) -> tuple[tuple[Path, str], ...]:
        return tuple(self._pairs)

    @property
    def missing_files(self) -> tuple[Path, ...]:
        return tuple(self._missing)

    def changed(self, tracked_file: Path | str, location: Path | str) -> ChangeTracker:
        """Track *tracked_file*, persisting its fingerprint at *location*."""
        self._pairs.append((Path(tracked_file), str(location)))
        return self

    def missing(self, *paths: Path | str) -> ChangeTracker:
        """Declare paths whose absence alone forces the action."""
        self._missing.extend(Path(p) for p in paths)
        return self

    def check(self) -> ChangeEvaluation:
        """Evaluate missing files and fingerprints without running anything.

        Raises:
            NotFoundError: If a tracked file does not exist
            ConfigurationError: If a tracked file, fingerprint location or
                must-exist path is a directory
            StorageError: If a stored fingerprint cannot be read
        """
        missing_file = self._find_missing()
        pairs = self._fingerprint_pairs(skip_stored=missing_file is not None)
        return ChangeEvaluation(
            pairs=pairs,
            missing_detected=missing_file is not None,
            missing_file=missing_file,
        )

    def execute(self, action: Action, *, force: bool = False) -> ChangeEvaluation:
        """Run *action* once if a must-exist file is absent or a tracked file changed.

        The action succeeds when it returns without raising and does not
        return ``False``. Only then are the new fingerprints written and the
        store synced.

        Args:
            action: Zero-argument callable
            force: Run the action even if nothing changed

        Returns:
            The evaluation, including whether the action ran and succeeded

        Raises:
            NotFoundError: If a tracked file does not exist
            ConfigurationError: If a declared path is a directory
            StorageError: If reading or persisting fingerprints fails
        """
        evaluation = self.check()
        evaluation.forced = force

        if not evaluation.triggered:
            logger.debug(f"Up to date: {len(evaluation.pairs)} tracked file(s) unchanged")
            return evaluation

        if evaluation.missing_detected:
            logger.info(f"Running action: {evaluation.missing_file} is missing")
        elif evaluation.change_detected:
            changed = ", ".join(str(p.tracked_file) for p in evaluation.changed_pairs)
            logger.info(f"Running action: changed {changed}")
        else:
            logger.info("Running action: forced")

        evaluation.action_invoked = True
        try:
            result = action()
        except Exception as e:
            logger.warning(f"Action failed, fingerprints not updated: {e}")
            evaluation.action_succeeded = False
            evaluation.action_error = e
            return evaluation

        if result is False:
            logger.warning("Action reported failure, fingerprints not updated")
            evaluation.action_succeeded = False
            return evaluation

        evaluation.action_succeeded = True
        self._persist(evaluation.pairs)
        evaluation.persisted = True
        return evaluation

    # ------------------------------------------------------------------
    # Evaluation steps
    # ------------------------------------------------------------------

    def _find_missing(self) -> Path | None:
        for path in self._missing:
            info = _stat(path)
            if info is None:
                logger.debug(f"Must-exist file is missing: {path}")
                return path
            if stat.S_ISDIR(info.st_mode):
                raise ConfigurationError(f"Expected a file but found a directory: {path}")
        return None

    def _fingerprint_pairs(self, skip_stored: bool) -> list[FileFingerprintPair]:
        pairs = []
        for tracked_file, location in self._pairs:
            info = _stat(tracked_file)
            if info is None:
                raise NotFoundError(str(tracked_file))
            if stat.S_ISDIR(info.st_mode):
                raise ConfigurationError(f"Tracked file is a directory: {tracked_file}")

            pair = FileFingerprintPair(
                tracked_file=tracked_file,
                location=location,
                computed_fingerprint=self.fingerprint(tracked_file),
            )
            if not skip_stored:
                pair.stored_fingerprint = self.store.get(location)
                pair.changed = (
                    not pair.stored_fingerprint
                    or pair.stored_fingerprint != pair.computed_fingerprint
                )
                logger.debug(
                    f"{tracked_file}: {'changed' if pair.changed else 'unchanged'} "
                    f"(location {location})"
                )
            pairs.append(pair)
        return pairs

    def _persist(self, pairs: list[FileFingerprintPair]) -> None:
        for pair in pairs:
            self.store.put(pair.location, pair.computed_fingerprint or "")
        self.store.sync()
        logger.info(f"Saved {len(pairs)} fingerprint(s)")
