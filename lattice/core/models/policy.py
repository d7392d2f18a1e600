"""
Policy models — the effective ruleset derived from a strictness preset.

``Policy`` is the resolved, immutable shape handed to plugins.
``PolicyOverlay`` and its nested overlays describe what a preset
changes; every field is optional so a preset only touches what it names.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

VersionPosture = Literal["latest-major", "pinned-minor", "pinned-exact"]


class RuntimeSafety(BaseModel):
    """Runtime safety requirements for generated code."""

    model_config = ConfigDict(frozen=True)

    boundary_validation_required: bool = False


class ProcessFlags(BaseModel):
    """Repository process requirements."""

    model_config = ConfigDict(frozen=True)

    codeowners_required: bool = False
    audit_trail_required: bool = False


class Policy(BaseModel):
    """Resolved policy — read by plugins, never mutated."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0.0"
    required_checks: tuple[str, ...] = ()
    version_posture: VersionPosture = "latest-major"
    runtime_safety: RuntimeSafety = Field(default_factory=RuntimeSafety)
    process: ProcessFlags = Field(default_factory=ProcessFlags)

    def requires(self, check: str) -> bool:
        """Whether a named check (lint, test, ...) is required."""
        return check in self.required_checks


class RuntimeSafetyOverlay(BaseModel):
    model_config = ConfigDict(frozen=True)

    boundary_validation_required: bool | None = None


class ProcessOverlay(BaseModel):
    model_config = ConfigDict(frozen=True)

    codeowners_required: bool | None = None
    audit_trail_required: bool | None = None


class PolicyOverlay(BaseModel):
    """Partial policy contributed by a strictness preset."""

    model_config = ConfigDict(frozen=True)

    required_checks: tuple[str, ...] | None = None
    version_posture: VersionPosture | None = None
    runtime_safety: RuntimeSafetyOverlay | None = None
    process: ProcessOverlay | None = None
