"""
Phase scheduler — group ordered plugins into the four execution phases.

Phases always run in the fixed order pre → render → post → ci.
Within a phase plugins run in id order, not dependency order: only a
dependency in an earlier phase is guaranteed to have run first.
"""

from __future__ import annotations

from collections.abc import Iterable

from lattice.plugins.base import PHASES, Plugin, PluginPhase


def group_plugins_by_phase(plugins: Iterable[Plugin]) -> dict[PluginPhase, list[Plugin]]:
    """Partition plugins by declared phase.

    Args:
        plugins: Plugins in resolved order.

    Returns:
        Mapping with all four phases as keys (in execution order), each
        holding its plugins sorted by id. Empty phases map to ``[]``.
    """
    grouped: dict[PluginPhase, list[Plugin]] = {phase: [] for phase in PHASES}
    for plugin in plugins:
        grouped[plugin.phase].append(plugin)
    for bucket in grouped.values():
        bucket.sort(key=lambda p: p.id)
    return grouped
