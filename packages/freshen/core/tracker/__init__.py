"""Change detection for freshen.

Runs an action only when tracked inputs changed or expected outputs are
missing, and remembers the new fingerprints only when the action succeeded.
"""

from freshen.core.tracker.engine import Action, ChangeTracker
from freshen.core.tracker.fingerprint import (
    file_digest,
    make_fingerprint_fn,
    sha256_bytes,
    sha256_file,
)
from freshen.core.tracker.models import ChangeEvaluation, FileFingerprintPair
from freshen.core.tracker.shortcuts import (
    if_changed_or_missing_using_file,
    if_changed_using_file,
    if_changed_using_store,
)

__all__ = [
    # Engine
    "Action",
    "ChangeTracker",
    "ChangeEvaluation",
    "FileFingerprintPair",
    # Shortcuts
    "if_changed_or_missing_using_file",
    "if_changed_using_file",
    "if_changed_using_store",
    # Fingerprints
    "file_digest",
    "make_fingerprint_fn",
    "sha256_bytes",
    "sha256_file",
]
