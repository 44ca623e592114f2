"""Models for change evaluation results."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class FileFingerprintPair(BaseModel):
    """One tracked file and where its fingerprint is persisted.

    Lives for a single evaluation. Only the fingerprint strings are ever
    written anywhere.
    """

    tracked_file: Path
    location: str = Field(description="Sidecar path or store key")
    stored_fingerprint: str | None = Field(
        default=None, description="Previously persisted fingerprint (None if not loaded)"
    )
    computed_fingerprint: str | None = Field(
        default=None, description="Fingerprint of the current file content"
    )
    changed: bool = Field(
        default=False, description="Stored fingerprint was empty or differs from computed"
    )


class ChangeEvaluation(BaseModel):
    """Result of one ``ChangeTracker.execute()`` call.

    The action's own exception is kept in ``action_error`` rather than raised;
    call ``raise_for_action()`` to propagate it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    pairs: list[FileFingerprintPair] = Field(default_factory=list)
    missing_detected: bool = False
    missing_file: Path | None = Field(
        default=None, description="First must-exist path found absent"
    )
    forced: bool = False
    action_invoked: bool = False
    action_succeeded: bool | None = Field(
        default=None, description="None when the action was not invoked"
    )
    action_error: BaseException | None = Field(default=None, repr=False)
    persisted: bool = False

    @property
    def change_detected(self) -> bool:
        """True if any pair's fingerprint differs from the stored one."""
        return any(pair.changed for pair in self.pairs)

    @property
    def triggered(self) -> bool:
        """True if the evaluation decided the action had to run."""
        return self.forced or self.missing_detected or self.change_detected

    @property
    def changed_pairs(self) -> list[FileFingerprintPair]:
        return [pair for pair in self.pairs if pair.changed]

    @property
    def new_fingerprints(self) -> dict[str, str]:
        """Location → computed fingerprint for every evaluated pair."""
        return {
            pair.location: pair.computed_fingerprint
            for pair in self.pairs
            if pair.computed_fingerprint is not None
        }

    def raise_for_action(self) -> None:
        """Re-raise the action's exception, if it failed by raising."""
        if self.action_error is not None:
            raise self.action_error
