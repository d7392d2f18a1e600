"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from lattice.core.context import GenerationContext
from lattice.core.models.config import ProjectConfig
from lattice.core.models.policy import Policy
from lattice.core.services.policy import resolve_policy
from lattice.plugins.base import Plugin, ValidationResult
from lattice.plugins.registry import PluginRegistry


class StubPlugin(Plugin):
    """Configurable plugin for engine tests.

    Writes ``files`` on apply and appends its id to ``call_log``.
    """

    def __init__(
        self,
        plugin_id: str,
        dependencies: tuple[str, ...] = (),
        phase: str = "render",
        conflict_policy: str = "error",
        files: dict[str, bytes] | None = None,
        applies: bool | Callable[[ProjectConfig], bool] = True,
        call_log: list[str] | None = None,
        validation: ValidationResult | None = None,
        error: Exception | None = None,
    ):
        self.id = plugin_id
        self.dependencies = tuple(dependencies)
        self.phase = phase  # type: ignore[assignment]
        self.conflict_policy = conflict_policy  # type: ignore[assignment]
        self._files = files or {}
        self._applies = applies
        self._call_log = call_log
        self._validation = validation
        self._error = error

    def applies_to(self, config: ProjectConfig) -> bool:
        if callable(self._applies):
            return self._applies(config)
        return self._applies

    def apply(self, context: GenerationContext) -> None:
        if self._call_log is not None:
            self._call_log.append(self.id)
        if self._error is not None:
            raise self._error
        for path, content in self._files.items():
            context.add_file(path, content)

    def validate(self, context: GenerationContext) -> ValidationResult:
        return self._validation or ValidationResult.ok()


@pytest.fixture
def make_plugin() -> Callable[..., StubPlugin]:
    """Factory for StubPlugin instances."""
    return StubPlugin


@pytest.fixture
def registry() -> PluginRegistry:
    return PluginRegistry()


@pytest.fixture
def nextjs_config() -> ProjectConfig:
    return ProjectConfig.model_validate(
        {"projectType": "nextjs", "strictnessPreset": "startup"}
    )


@pytest.fixture
def expo_config() -> ProjectConfig:
    return ProjectConfig.model_validate(
        {"projectType": "expo-eas", "strictnessPreset": "pro"}
    )


@pytest.fixture
def startup_policy(nextjs_config: ProjectConfig) -> Policy:
    return resolve_policy(nextjs_config)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """CLI invocations reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
