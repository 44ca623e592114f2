"""Configuration models for freshen."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freshen.core.store.models import FingerprintStoreConfig


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file (default: stderr)")


class TrackedFile(BaseModel):
    """A tracked input and where its fingerprint lives.

    ``fingerprint`` defaults to ``<file>.sha256`` (a sidecar next to the file);
    with a non-sidecar store it is used as the store key.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: Path
    fingerprint: str | None = None

    @property
    def location(self) -> str:
        return self.fingerprint if self.fingerprint is not None else f"{self.file}.sha256"


class Rule(BaseModel):
    """One regeneration rule: run ``command`` when inputs change or outputs go missing."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    changed: list[TrackedFile] = Field(default_factory=list)
    missing: list[Path] = Field(default_factory=list)
    command: list[str] = Field(min_length=1, description="Executable followed by arguments")
    cwd: Path | None = None

    @field_validator("changed", mode="before")
    @classmethod
    def _expand_shorthand(cls, value: object) -> object:
        """Allow plain paths in ``changed`` as shorthand for ``{file: path}``."""
        if isinstance(value, list):
            return [{"file": item} if isinstance(item, str) else item for item in value]
        return value


class FreshenConfig(BaseModel):
    """Top-level freshen configuration (freshen.yaml / freshen.json)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: FingerprintStoreConfig = Field(default_factory=FingerprintStoreConfig)
    algorithm: str = Field(default="sha256", description="hashlib algorithm name")
    chunk_size: int = Field(default=1024 * 1024, gt=0, description="Hashing read size")
    rules: list[Rule] = Field(default_factory=list)

    @field_validator("rules")
    @classmethod
    def _unique_rule_names(cls, rules: list[Rule]) -> list[Rule]:
        seen: set[str] = set()
        for rule in rules:
            if rule.name in seen:
                raise ValueError(f"Duplicate rule name: {rule.name!r}")
            seen.add(rule.name)
        return rules

    def get_rule(self, name: str) -> Rule:
        """Return the rule called *name*.

        Raises:
            KeyError: If no rule has that name
        """
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(name)
