"""
Policy resolution — base policy + strictness preset → effective Policy.

Presets only name what they change. Nested groups (runtime safety,
process) are merged field by field, so a preset that sets one flag
keeps the base value of its siblings.
"""

from __future__ import annotations

import logging

from lattice.core.models.config import ProjectConfig, StrictnessPreset
from lattice.core.models.policy import (
    Policy,
    PolicyOverlay,
    ProcessFlags,
    ProcessOverlay,
    RuntimeSafety,
    RuntimeSafetyOverlay,
)

logger = logging.getLogger(__name__)

BASE_POLICY = Policy(
    version="1.0.0",
    required_checks=(),
    version_posture="latest-major",
    runtime_safety=RuntimeSafety(boundary_validation_required=False),
    process=ProcessFlags(codeowners_required=False, audit_trail_required=False),
)

PRESET_POLICIES: dict[StrictnessPreset, PolicyOverlay] = {
    "startup": PolicyOverlay(
        required_checks=("lint", "typecheck"),
        version_posture="latest-major",
        runtime_safety=RuntimeSafetyOverlay(boundary_validation_required=False),
    ),
    "pro": PolicyOverlay(
        required_checks=("lint", "typecheck", "test", "build"),
        version_posture="pinned-minor",
        runtime_safety=RuntimeSafetyOverlay(boundary_validation_required=True),
    ),
    "enterprise": PolicyOverlay(
        required_checks=("lint", "typecheck", "test", "build", "e2e", "security", "audit"),
        version_posture="pinned-exact",
        runtime_safety=RuntimeSafetyOverlay(boundary_validation_required=True),
        process=ProcessOverlay(codeowners_required=True, audit_trail_required=True),
    ),
}


def _merge_runtime_safety(
    base: RuntimeSafety,
    overlay: RuntimeSafetyOverlay | None,
) -> RuntimeSafety:
    if overlay is None:
        return base
    return RuntimeSafety(
        boundary_validation_required=(
            base.boundary_validation_required
            if overlay.boundary_validation_required is None
            else overlay.boundary_validation_required
        ),
    )


def _merge_process(base: ProcessFlags, overlay: ProcessOverlay | None) -> ProcessFlags:
    if overlay is None:
        return base
    return ProcessFlags(
        codeowners_required=(
            base.codeowners_required
            if overlay.codeowners_required is None
            else overlay.codeowners_required
        ),
        audit_trail_required=(
            base.audit_trail_required
            if overlay.audit_trail_required is None
            else overlay.audit_trail_required
        ),
    )


def merge_policy(base: Policy, overlay: PolicyOverlay) -> Policy:
    """Apply an overlay on top of a policy, field by field."""
    return Policy(
        version=base.version,
        required_checks=(
            base.required_checks
            if overlay.required_checks is None
            else overlay.required_checks
        ),
        version_posture=overlay.version_posture or base.version_posture,
        runtime_safety=_merge_runtime_safety(base.runtime_safety, overlay.runtime_safety),
        process=_merge_process(base.process, overlay.process),
    )


def resolve_policy(config: ProjectConfig) -> Policy:
    """Resolve the effective policy for a config's strictness preset.

    Args:
        config: Validated project configuration.

    Returns:
        Frozen Policy.
    """
    overlay = PRESET_POLICIES.get(config.strictness_preset)
    if overlay is None:
        return BASE_POLICY
    policy = merge_policy(BASE_POLICY, overlay)
    logger.debug(
        "Resolved policy for preset '%s': %s",
        config.strictness_preset,
        policy.model_dump(mode="json"),
    )
    return policy
