"""
Stack plugins — one per supported project type.

Each plugin emits the base files of its stack: package manifest,
TypeScript and lint config, an entry screen and a smoke test.
"""

from lattice.plugins.base import Plugin
from lattice.plugins.stack.expo_eas import ExpoEasPlugin
from lattice.plugins.stack.nextjs import NextJsPlugin

__all__ = ["ExpoEasPlugin", "NextJsPlugin", "builtin_plugins"]


def builtin_plugins() -> list[Plugin]:
    """Fresh instances of all built-in stack plugins."""
    return [ExpoEasPlugin(), NextJsPlugin()]
