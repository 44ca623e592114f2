"""Shared utilities for freshen."""

from freshen.core.utils.logging import configure_logging, get_logger
from freshen.core.utils.process import run_command

__all__ = [
    "configure_logging",
    "get_logger",
    "run_command",
]
