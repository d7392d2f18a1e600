"""
Generation errors — every one of them is fatal to the current render.

A render either returns a complete RenderResult or raises one of these.
Exceptions raised by a plugin's ``apply`` are not wrapped: they reach
the caller as-is.
"""

from __future__ import annotations

from collections.abc import Sequence


class GenerationError(Exception):
    """Base class for pipeline failures."""


class DuplicatePluginId(GenerationError):
    """Two plugins registered under the same id."""

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        super().__init__(f"Plugin {plugin_id} is already registered")


class InvalidPlugin(GenerationError):
    """A plugin declares a phase or conflict policy that does not exist."""

    def __init__(self, plugin_id: str, reason: str):
        self.plugin_id = plugin_id
        self.reason = reason
        super().__init__(f"Invalid plugin {plugin_id}: {reason}")


class UnregisteredPlugin(GenerationError):
    """A candidate plugin handed to the resolver is not in the registry."""

    def __init__(self, plugin_ids: Sequence[str]):
        self.plugin_ids = list(plugin_ids)
        super().__init__(
            f"Plugins not found in registry: {', '.join(self.plugin_ids)}"
        )


class MissingDependency(GenerationError):
    """A plugin depends on an id that is not registered.

    ``missing`` holds ``(plugin_id, dependency_id)`` pairs.
    """

    def __init__(self, missing: Sequence[tuple[str, str]]):
        self.missing = list(missing)
        lines = [
            f"Plugin {plugin_id} depends on unknown plugin: {dep}"
            for plugin_id, dep in self.missing
        ]
        super().__init__("Missing plugin dependencies:\n" + "\n".join(lines))


class DependencyCycle(GenerationError):
    """One or more dependency cycles among the applicable plugins."""

    def __init__(self, cycles: Sequence[str]):
        self.cycles = list(cycles)
        super().__init__("Plugin dependency cycles:\n" + "\n".join(self.cycles))


class FileConflict(GenerationError):
    """A path was written by several plugins and one of them forbids it."""

    def __init__(self, path: str, writers: Sequence[str]):
        self.path = path
        self.writers = list(writers)
        super().__init__(
            f"File conflict: {path} is written by multiple plugins: "
            f"{', '.join(self.writers)}"
        )


class PluginValidationFailed(GenerationError):
    """One or more plugins rejected the generated output.

    ``errors`` holds ``(plugin_id, message)`` pairs.
    """

    def __init__(self, errors: Sequence[tuple[str, str]]):
        self.errors = list(errors)
        lines = [f"{plugin_id}: {message}" for plugin_id, message in self.errors]
        super().__init__("Plugin validation failed:\n" + "\n".join(lines))
