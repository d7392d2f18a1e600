"""Plugins — generation units and the registry that holds them.

Public re-exports for convenient access.
"""

from lattice.plugins.base import Plugin, ValidationResult
from lattice.plugins.registry import PluginRegistry

__all__ = [
    "Plugin",
    "PluginRegistry",
    "ValidationResult",
    "default_registry",
]


def default_registry() -> PluginRegistry:
    """Registry holding every built-in plugin."""
    from lattice.plugins.stack import builtin_plugins

    return PluginRegistry(builtin_plugins())
