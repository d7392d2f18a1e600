"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from lattice.core.models import ProjectConfig, Policy, Manifest, RenderResult
"""

from lattice.core.models.config import ProjectConfig
from lattice.core.models.manifest import Manifest, ManifestEntry, RenderResult
from lattice.core.models.policy import (
    Policy,
    PolicyOverlay,
    ProcessFlags,
    ProcessOverlay,
    RuntimeSafety,
    RuntimeSafetyOverlay,
)

__all__ = [
    # config.py
    "ProjectConfig",
    # manifest.py
    "Manifest",
    "ManifestEntry",
    "RenderResult",
    # policy.py
    "Policy",
    "PolicyOverlay",
    "ProcessFlags",
    "ProcessOverlay",
    "RuntimeSafety",
    "RuntimeSafetyOverlay",
]
