"""
Tests for policy resolution — presets merged onto the base policy.
"""

import pytest
from pydantic import ValidationError

from lattice.core.models.config import ProjectConfig
from lattice.core.models.policy import (
    Policy,
    PolicyOverlay,
    ProcessOverlay,
    RuntimeSafetyOverlay,
)
from lattice.core.services.policy import BASE_POLICY, merge_policy, resolve_policy


def _config(preset: str) -> ProjectConfig:
    return ProjectConfig(project_type="nextjs", strictness_preset=preset)


class TestResolvePolicy:
    def test_startup(self):
        policy = resolve_policy(_config("startup"))
        assert policy.required_checks == ("lint", "typecheck")
        assert policy.version_posture == "latest-major"
        assert policy.runtime_safety.boundary_validation_required is False
        assert policy.process.codeowners_required is False

    def test_pro(self):
        policy = resolve_policy(_config("pro"))
        assert policy.required_checks == ("lint", "typecheck", "test", "build")
        assert policy.version_posture == "pinned-minor"
        assert policy.runtime_safety.boundary_validation_required is True
        assert policy.process.audit_trail_required is False

    def test_enterprise(self):
        policy = resolve_policy(_config("enterprise"))
        assert policy.requires("e2e")
        assert policy.requires("security")
        assert policy.requires("audit")
        assert policy.version_posture == "pinned-exact"
        assert policy.process.codeowners_required is True
        assert policy.process.audit_trail_required is True

    def test_version_from_base(self):
        for preset in ("startup", "pro", "enterprise"):
            assert resolve_policy(_config(preset)).version == BASE_POLICY.version

    def test_same_config_same_policy(self):
        assert resolve_policy(_config("pro")) == resolve_policy(_config("pro"))


class TestMergePolicy:
    def test_empty_overlay_keeps_base(self):
        assert merge_policy(BASE_POLICY, PolicyOverlay()) == BASE_POLICY

    def test_nested_fields_merged_individually(self):
        base = Policy(
            process={"codeowners_required": True, "audit_trail_required": False},
        )
        merged = merge_policy(
            base, PolicyOverlay(process=ProcessOverlay(audit_trail_required=True))
        )
        assert merged.process.codeowners_required is True
        assert merged.process.audit_trail_required is True

    def test_overlay_can_clear_flag(self):
        base = Policy(runtime_safety={"boundary_validation_required": True})
        merged = merge_policy(
            base,
            PolicyOverlay(
                runtime_safety=RuntimeSafetyOverlay(boundary_validation_required=False)
            ),
        )
        assert merged.runtime_safety.boundary_validation_required is False

    def test_empty_required_checks_override(self):
        base = Policy(required_checks=("lint",))
        merged = merge_policy(base, PolicyOverlay(required_checks=()))
        assert merged.required_checks == ()


class TestPolicyModel:
    def test_frozen(self):
        with pytest.raises(ValidationError):
            BASE_POLICY.version = "2.0.0"

    def test_requires(self):
        policy = Policy(required_checks=("lint",))
        assert policy.requires("lint")
        assert not policy.requires("test")
