"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from freshen.core.config.models import FreshenConfig
from freshen.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("freshen.yaml")


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("freshen.json")
        'json'
        >>> detect_format("freshen.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return the raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    return content


def load_freshen_config(path: str | Path | None = None) -> FreshenConfig:
    """Load and validate freshen configuration.

    Relative paths inside the config (tracked files, store path) are kept as
    written; they are interpreted relative to the working directory.

    Args:
        path: Config file path. Defaults to freshen.yaml; when the default
              file does not exist, all defaults are used.

    Returns:
        Validated FreshenConfig

    Raises:
        FileNotFoundError: If an explicitly given path does not exist
        ValueError: If the file cannot be parsed
        ValidationError: If the config is invalid
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug(f"No {DEFAULT_CONFIG_PATH} found, using defaults")
            return FreshenConfig()
        path = DEFAULT_CONFIG_PATH

    raw_config = load_config(path)
    return FreshenConfig.model_validate(raw_config)


def configure_logging(config: FreshenConfig | None = None) -> None:
    """Configure Python logging from a freshen config.

    Args:
        config: FreshenConfig instance (loads default if None)
    """
    if config is None:
        config = load_freshen_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
