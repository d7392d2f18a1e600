"""
Configuration loader — reads lattice.yml into a ProjectConfig.

This is the entry point for loading generation configuration.
It reads YAML (or JSON, which YAML also parses), validates against
the Pydantic schema, and returns a frozen ProjectConfig.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from lattice.core.models.config import ProjectConfig

logger = logging.getLogger(__name__)

# Config filenames, in lookup order
CONFIG_FILES = ("lattice.yml", "lattice.yaml", "lattice.json")

# Used when no config file is given or found
DEFAULT_CONFIG: dict[str, Any] = {
    "projectType": "nextjs",
    "strictnessPreset": "startup",
}


class ConfigError(Exception):
    """Raised when generation configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        for name in CONFIG_FILES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def parse_config(data: Any, source: str = "<config>") -> ProjectConfig:
    """Validate raw config data.

    A top-level ``project:`` wrapper is accepted and unwrapped.

    Raises:
        ConfigError: If the data is not a mapping or fails validation.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {source}, got {type(data).__name__}")

    if isinstance(data.get("project"), dict):
        data = data["project"]

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def load_config(path: Path | None = None, *, search: bool = True) -> ProjectConfig:
    """Load and validate generation configuration.

    Args:
        path: Explicit config path. If None, searches upward from cwd
            (when ``search`` is true) and falls back to DEFAULT_CONFIG.
        search: Whether to look for a config file when ``path`` is None.

    Returns:
        Validated ProjectConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None and search:
        path = find_config_file()

    if path is None:
        logger.info("No config file found, using defaults")
        return parse_config(dict(DEFAULT_CONFIG), source="defaults")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    config = parse_config(data, source=str(path))
    logger.info(
        "Loaded config: %s (%s preset)", config.project_type, config.strictness_preset
    )
    return config
