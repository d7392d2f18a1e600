"""
Renderer — the generation pipeline.

The renderer takes a config and a resolved policy, runs every
applicable plugin against one GenerationContext, and returns the
sorted file map plus its manifest.

Flow:
    filter → resolve order → group by phase → execute → check conflicts
    → validate → normalize → sort + hash → manifest

Any failure aborts the whole render; nothing partial is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from lattice import __version__
from lattice.core.context import GenerationContext
from lattice.core.engine.errors import FileConflict, PluginValidationFailed
from lattice.core.engine.graph import resolve_plugin_order
from lattice.core.engine.phases import group_plugins_by_phase
from lattice.core.hashing import compute_config_hash, compute_sha256
from lattice.core.models.config import ProjectConfig
from lattice.core.models.manifest import Manifest, ManifestEntry, RenderResult
from lattice.core.models.policy import Policy

if TYPE_CHECKING:
    from lattice.plugins.base import Plugin
    from lattice.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

GENERATOR_VERSION = __version__


def normalize_line_endings(content: bytes) -> bytes:
    """Rewrite every CRLF and lone CR as LF."""
    return content.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


class Renderer:
    """Runs registered plugins and produces a RenderResult.

    The registry is passed in by the caller; the renderer never keeps
    state between calls.
    """

    def __init__(self, registry: PluginRegistry):
        self._registry = registry

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    def render(
        self,
        config: ProjectConfig,
        policy: Policy,
        existing_files: Mapping[str, bytes] | None = None,
    ) -> RenderResult:
        """Generate files for ``config`` under ``policy``.

        Args:
            config: Validated project configuration.
            policy: Resolved policy.
            existing_files: Optional seed for files already present in
                the target repository. Seeded paths carry no writer.

        Returns:
            RenderResult with the sorted file map and manifest.

        Raises:
            UnregisteredPlugin, DependencyCycle, MissingDependency:
                Plugin order cannot be resolved.
            FileConflict: Several plugins wrote one path and at least one
                declares the ``error`` conflict policy.
            PluginValidationFailed: A plugin rejected the output.
            Exception: Whatever a plugin's ``apply`` raised, unchanged.
        """
        applicable = [p for p in self._registry.get_all() if p.applies_to(config)]
        logger.debug(
            "Applicable plugins for %s: %s",
            config.project_type,
            sorted(p.id for p in applicable),
        )

        ordered = resolve_plugin_order(applicable, self._registry)
        phases = group_plugins_by_phase(ordered)

        context = GenerationContext(config, policy, existing_files)
        executed: list[Plugin] = []
        for phase, plugins in phases.items():
            for plugin in plugins:
                logger.debug("[%s] applying %s", phase, plugin.id)
                with context._writing_as(plugin.id):
                    plugin.apply(context)
                executed.append(plugin)

        self._check_conflicts(context, {p.id: p for p in executed})
        self._validate(context, executed)

        files: dict[str, bytes] = {}
        entries: list[ManifestEntry] = []
        for path in sorted(context.files):
            content = normalize_line_endings(context.files[path])
            files[path] = content
            entries.append(ManifestEntry(path=path, sha256=compute_sha256(content)))

        manifest = Manifest(
            generator_version=GENERATOR_VERSION,
            policy_version=policy.version,
            config_hash=compute_config_hash(config),
            files=tuple(entries),
        )
        logger.debug("Rendered %d files", len(files))
        return RenderResult(files=MappingProxyType(files), manifest=manifest)

    @staticmethod
    def _check_conflicts(
        context: GenerationContext,
        plugins: Mapping[str, Plugin],
    ) -> None:
        for path in context.written_paths():
            writers = context.writers(path)
            if len(writers) < 2:
                continue
            if any(plugins[w].conflict_policy == "error" for w in writers):
                raise FileConflict(path, writers)
            logger.debug("last-wins overwrite of %s by %s", path, writers[-1])

    @staticmethod
    def _validate(context: GenerationContext, plugins: list[Plugin]) -> None:
        errors: list[tuple[str, str]] = []
        for plugin in plugins:
            result = plugin.validate(context)
            if result.valid:
                continue
            for message in result.errors or ["validation failed"]:
                errors.append((plugin.id, message))
        if errors:
            raise PluginValidationFailed(errors)
