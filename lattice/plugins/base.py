"""
Plugin base — the contract between the engine and generation logic.

Every stack or provider plugin implements this interface. The engine
treats plugins as opaque: it asks whether they apply, orders them by
their declared dependencies and phase, and calls ``apply`` with the
shared GenerationContext.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

from lattice.core.models.config import ProjectConfig

if TYPE_CHECKING:
    from lattice.core.context import GenerationContext

PluginPhase = Literal["pre", "render", "post", "ci"]
ConflictPolicy = Literal["error", "last-wins"]

PHASES: tuple[PluginPhase, ...] = ("pre", "render", "post", "ci")
CONFLICT_POLICIES: tuple[ConflictPolicy, ...] = ("error", "last-wins")


class ValidationResult(BaseModel):
    """Outcome of a plugin's post-generation check."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, *errors: str) -> ValidationResult:
        return cls(valid=False, errors=list(errors))


class Plugin(ABC):
    """Abstract base class for all generation plugins.

    Subclasses declare identity and ordering as class attributes and
    implement ``applies_to`` and ``apply``.

    Attributes:
        id:               Unique id within a registry (e.g. ``stack/nextjs``).
        version:          Plugin version string.
        dependencies:     Ids of plugins that must run before this one.
        phase:            Execution phase (pre, render, post, ci).
        conflict_policy:  ``error`` aborts when another plugin writes the
                          same path; ``last-wins`` tolerates it.
    """

    id: str
    version: str = "0.1.0"
    dependencies: tuple[str, ...] = ()
    phase: PluginPhase = "render"
    conflict_policy: ConflictPolicy = "error"

    @abstractmethod
    def applies_to(self, config: ProjectConfig) -> bool:
        """Whether this plugin contributes to the given config."""

    @abstractmethod
    def apply(self, context: GenerationContext) -> None:
        """Add files to the context.

        May raise; the exception aborts the render unchanged.
        """

    def validate(self, context: GenerationContext) -> ValidationResult:
        """Check the generated output. Default: always valid."""
        return ValidationResult.ok()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}@{self.version}>"
