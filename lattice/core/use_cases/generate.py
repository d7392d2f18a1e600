"""
Generate use case — config → policy → render → pack on disk.

Ties together config loading, policy resolution, the renderer and
the pack writer. Failures are captured on the result so every
surface (CLI, tests) reports them the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lattice.core.config.loader import ConfigError, load_config
from lattice.core.engine.errors import GenerationError
from lattice.core.engine.renderer import Renderer
from lattice.core.models.config import ProjectConfig
from lattice.core.models.manifest import RenderResult
from lattice.core.models.policy import Policy
from lattice.core.services.pack_ops import (
    ApplyReport,
    PackError,
    apply_pack,
    scan_existing_files,
    verify_pack,
    write_pack,
)
from lattice.core.services.policy import resolve_policy
from lattice.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    config: ProjectConfig | None = None
    policy: Policy | None = None
    render: RenderResult | None = None
    output_dir: Path | None = None
    manifest_path: Path | None = None
    error: str | None = None

    @property
    def file_count(self) -> int:
        return len(self.render.files) if self.render else 0

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.render is not None
        return {
            "output_dir": str(self.output_dir),
            "manifest_path": str(self.manifest_path),
            "file_count": self.file_count,
            "manifest": self.render.manifest.to_dict(),
        }


def run_generate(
    registry: PluginRegistry,
    output_dir: Path,
    config_path: Path | None = None,
    existing_dir: Path | None = None,
) -> GenerateResult:
    """Render a pack and write it to ``output_dir``.

    Args:
        registry: Plugins available to the render.
        output_dir: Where the pack is written.
        config_path: Optional explicit config file; otherwise searched
            for, then defaulted.
        existing_dir: Optional repository whose files seed the render.

    Returns:
        GenerateResult; ``error`` is set when anything failed.
    """
    result = GenerateResult(output_dir=output_dir.resolve())

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result
    result.config = config
    result.policy = resolve_policy(config)

    existing = scan_existing_files(existing_dir) if existing_dir else None

    try:
        result.render = Renderer(registry).render(config, result.policy, existing)
    except GenerationError as e:
        result.error = str(e)
        return result
    except Exception as e:
        # A plugin's own failure: reported, never retried
        logger.debug("Plugin raised during render", exc_info=True)
        result.error = f"Plugin failed: {e}"
        return result

    try:
        result.manifest_path = write_pack(result.render, output_dir)
    except (PackError, OSError) as e:
        result.error = f"Cannot write pack: {e}"
        return result

    return result


@dataclass
class VerifyResult:
    """Result of verifying a pack against its manifest."""

    pack_dir: Path | None = None
    problems: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.problems

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "pack_dir": str(self.pack_dir),
            "ok": self.ok,
            "problems": self.problems,
        }


def run_verify(pack_dir: Path) -> VerifyResult:
    result = VerifyResult(pack_dir=pack_dir.resolve())
    try:
        result.problems = verify_pack(pack_dir)
    except PackError as e:
        result.error = str(e)
    return result


@dataclass
class ApplyResult:
    """Result of applying a pack to a target directory."""

    report: ApplyReport | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.report is not None
        return self.report.to_dict()


def run_apply(pack_dir: Path, target_dir: Path) -> ApplyResult:
    result = ApplyResult()
    try:
        result.report = apply_pack(pack_dir, target_dir)
    except (PackError, OSError) as e:
        result.error = str(e)
    return result
