"""Configuration management for freshen."""

from freshen.core.config.loader import (
    configure_logging,
    detect_format,
    load_config,
    load_freshen_config,
)
from freshen.core.config.models import FreshenConfig, LoggingConfig, Rule, TrackedFile

__all__ = [
    "FreshenConfig",
    "LoggingConfig",
    "Rule",
    "TrackedFile",
    "configure_logging",
    "detect_format",
    "load_config",
    "load_freshen_config",
]
