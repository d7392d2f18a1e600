"""
Plugin registry — lookup table from plugin id to plugin instance.

The registry is an explicit, owned collection handed to the Renderer.
There is no process-wide registry: callers build one, register the
plugins they want, and pass it along.
"""

from __future__ import annotations

import logging

from lattice.core.engine.errors import DuplicatePluginId, InvalidPlugin
from lattice.plugins.base import CONFLICT_POLICIES, PHASES, Plugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Registry of generation plugins keyed by id.

    Features:
        - Register plugins, rejecting duplicate ids
        - Look up a plugin by id
        - List all plugins (order not significant)
    """

    def __init__(self, plugins: list[Plugin] | None = None):
        self._plugins: dict[str, Plugin] = {}
        for plugin in plugins or []:
            self.register(plugin)

    def register(self, plugin: Plugin) -> None:
        """Register a plugin.

        Args:
            plugin: The plugin instance to register.

        Raises:
            DuplicatePluginId: If a plugin with the same id is registered.
            InvalidPlugin: If the plugin's phase or conflict policy is unknown.
        """
        plugin_id = plugin.id
        if plugin_id in self._plugins:
            raise DuplicatePluginId(plugin_id)
        if plugin.phase not in PHASES:
            raise InvalidPlugin(plugin_id, f"unknown phase '{plugin.phase}'")
        if plugin.conflict_policy not in CONFLICT_POLICIES:
            raise InvalidPlugin(
                plugin_id, f"unknown conflict policy '{plugin.conflict_policy}'"
            )
        self._plugins[plugin_id] = plugin
        logger.debug("Registered plugin: %s", plugin_id)

    def get(self, plugin_id: str) -> Plugin | None:
        """Look up a plugin by id."""
        return self._plugins.get(plugin_id)

    def get_all(self) -> list[Plugin]:
        """All registered plugins. Callers must not rely on the order."""
        return list(self._plugins.values())

    def list_plugins(self) -> list[str]:
        """Sorted ids of all registered plugins."""
        return sorted(self._plugins)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
