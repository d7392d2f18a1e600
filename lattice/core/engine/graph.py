"""
Dependency graph — plugin ordering and cycle detection (pure).

Functions for building the plugin dependency graph, reporting cycles,
and producing a deterministic topological order.
No I/O.

Every traversal walks ids in sorted order, so the same plugin set
always yields the same order and the same cycle text, whatever order
the plugins were registered or passed in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lattice.core.engine.errors import (
    DependencyCycle,
    MissingDependency,
    UnregisteredPlugin,
)

if TYPE_CHECKING:
    from lattice.plugins.base import Plugin
    from lattice.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """Directed graph: plugin id → ids it depends on.

    ``nodes`` includes ids that only appear as dependencies, so a
    dangling reference is still visible to the checks.
    """

    nodes: set[str] = field(default_factory=set)
    edges: dict[str, set[str]] = field(default_factory=dict)

    def dependencies_of(self, node: str) -> list[str]:
        """Sorted dependency ids of ``node``."""
        return sorted(self.edges.get(node, ()))


def build_dependency_graph(plugins: Iterable[Plugin]) -> DependencyGraph:
    """Build the dependency graph over the given plugins.

    Args:
        plugins: Candidate plugins.

    Returns:
        DependencyGraph with one node per plugin and per referenced id.
    """
    graph = DependencyGraph()
    for plugin in plugins:
        graph.nodes.add(plugin.id)
        if plugin.dependencies:
            graph.edges[plugin.id] = set(plugin.dependencies)
            graph.nodes.update(plugin.dependencies)
    return graph


def detect_cycles(graph: DependencyGraph) -> list[str]:
    """Find dependency cycles with a depth-first walk.

    Each cycle is reported as the path from where the repeated node
    first appeared back to itself, e.g.
    ``Dependency cycle detected: a -> b -> a``.

    Returns:
        List of cycle descriptions (empty = acyclic).
    """
    cycles: list[str] = []
    visited: set[str] = set()
    on_stack: set[str] = set()

    def visit(node: str, path: list[str]) -> None:
        if node in on_stack:
            start = path.index(node)
            cycle = " -> ".join([*path[start:], node])
            cycles.append(f"Dependency cycle detected: {cycle}")
            return
        if node in visited:
            return

        visited.add(node)
        on_stack.add(node)
        for dep in graph.dependencies_of(node):
            visit(dep, [*path, node])
        on_stack.discard(node)

    for node in sorted(graph.nodes):
        if node not in visited:
            visit(node, [])

    return cycles


def resolve_plugin_order(
    plugins: Iterable[Plugin],
    registry: PluginRegistry,
) -> list[Plugin]:
    """Order plugins so every plugin follows its dependencies.

    Steps:
        1. Every candidate must be registered.
        2. The candidate graph must be acyclic.
        3. Every declared dependency must be registered.
        4. Depth-first topological sort: candidates in ascending id,
           each plugin's dependencies in ascending id before it.

    A registered dependency that is not itself a candidate is pulled in
    through the registry and placed before its dependent.

    Args:
        plugins: Candidate plugins (any order).
        registry: Registry used to resolve dependency ids.

    Returns:
        Plugins in execution order, no duplicates.

    Raises:
        UnregisteredPlugin: A candidate is not in the registry.
        DependencyCycle: The candidate graph has one or more cycles, or a
            cycle runs through a pulled-in dependency.
        MissingDependency: A dependency id is not registered.
    """
    candidates = list(plugins)

    unregistered = sorted({p.id for p in candidates if registry.get(p.id) is None})
    if unregistered:
        raise UnregisteredPlugin(unregistered)

    graph = build_dependency_graph(candidates)
    cycles = detect_cycles(graph)
    if cycles:
        raise DependencyCycle(cycles)

    missing: list[tuple[str, str]] = []
    for plugin in sorted(candidates, key=lambda p: p.id):
        for dep in sorted(plugin.dependencies):
            if registry.get(dep) is None:
                missing.append((plugin.id, dep))
    if missing:
        raise MissingDependency(missing)

    ordered: list[Plugin] = []
    done: set[str] = set()

    def visit(plugin_id: str, path: list[str]) -> None:
        if plugin_id in done:
            return
        if plugin_id in path:
            # only reachable through a pulled-in dependency's own edges
            cycle = " -> ".join([*path[path.index(plugin_id):], plugin_id])
            raise DependencyCycle([f"Dependency cycle detected: {cycle}"])
        plugin = registry.get(plugin_id)
        if plugin is None:
            # only reachable through a pulled-in dependency
            raise MissingDependency([(path[-1], plugin_id)])

        for dep in sorted(plugin.dependencies):
            visit(dep, [*path, plugin_id])

        done.add(plugin_id)
        ordered.append(plugin)

    for plugin_id in sorted({p.id for p in candidates}):
        visit(plugin_id, [])

    logger.debug("Resolved plugin order: %s", [p.id for p in ordered])
    return ordered
