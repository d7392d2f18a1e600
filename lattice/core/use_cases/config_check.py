"""
Config check use case — validate the generation config and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from lattice.core.config.loader import ConfigError, find_config_file, load_config
from lattice.core.models.config import ProjectConfig
from lattice.core.services.policy import resolve_policy


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ProjectConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump(mode="json", by_alias=True) if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate generation configuration and report issues.

    Args:
        config_path: Optional explicit path to the config file.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No lattice.yml found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    # Semantic checks
    policy = resolve_policy(config)
    if config.testing_level == "none" and policy.requires("test"):
        result.warnings.append(
            f"Preset '{config.strictness_preset}' requires tests but testingLevel is 'none'."
        )
    if config.testing_level != "unit-e2e" and policy.requires("e2e"):
        result.warnings.append(
            f"Preset '{config.strictness_preset}' requires e2e checks; "
            "consider testingLevel 'unit-e2e'."
        )

    result.valid = not result.errors
    return result
