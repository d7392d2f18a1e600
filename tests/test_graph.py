"""
Tests for dependency graph — building, cycle detection, ordering.
"""

import itertools

import pytest

from lattice.core.engine.errors import (
    DependencyCycle,
    MissingDependency,
    UnregisteredPlugin,
)
from lattice.core.engine.graph import (
    build_dependency_graph,
    detect_cycles,
    resolve_plugin_order,
)
from lattice.plugins.registry import PluginRegistry


def _ids(plugins):
    return [p.id for p in plugins]


class TestBuildDependencyGraph:
    def test_nodes_and_edges(self, make_plugin):
        a = make_plugin("a")
        b = make_plugin("b", dependencies=("a",))
        graph = build_dependency_graph([a, b])
        assert graph.nodes == {"a", "b"}
        assert graph.edges == {"b": {"a"}}

    def test_dangling_dependency_is_a_node(self, make_plugin):
        graph = build_dependency_graph([make_plugin("a", dependencies=("ghost",))])
        assert "ghost" in graph.nodes
        assert graph.edges["a"] == {"ghost"}

    def test_no_edges_for_independent_plugins(self, make_plugin):
        graph = build_dependency_graph([make_plugin("a"), make_plugin("b")])
        assert graph.edges == {}


class TestDetectCycles:
    def test_acyclic(self, make_plugin):
        graph = build_dependency_graph([
            make_plugin("a"),
            make_plugin("b", dependencies=("a",)),
            make_plugin("c", dependencies=("a", "b")),
        ])
        assert detect_cycles(graph) == []

    def test_two_node_cycle(self, make_plugin):
        graph = build_dependency_graph([
            make_plugin("a", dependencies=("b",)),
            make_plugin("b", dependencies=("a",)),
        ])
        assert detect_cycles(graph) == ["Dependency cycle detected: a -> b -> a"]

    def test_self_cycle(self, make_plugin):
        graph = build_dependency_graph([make_plugin("a", dependencies=("a",))])
        assert detect_cycles(graph) == ["Dependency cycle detected: a -> a"]

    def test_cycle_path_starts_at_repeated_node(self, make_plugin):
        graph = build_dependency_graph([
            make_plugin("a", dependencies=("b",)),
            make_plugin("b", dependencies=("c",)),
            make_plugin("c", dependencies=("b",)),
        ])
        assert detect_cycles(graph) == ["Dependency cycle detected: b -> c -> b"]

    def test_reports_every_cycle(self, make_plugin):
        graph = build_dependency_graph([
            make_plugin("a", dependencies=("b",)),
            make_plugin("b", dependencies=("a",)),
            make_plugin("x", dependencies=("y",)),
            make_plugin("y", dependencies=("x",)),
        ])
        cycles = detect_cycles(graph)
        assert len(cycles) == 2
        assert "a -> b -> a" in cycles[0]
        assert "x -> y -> x" in cycles[1]

    def test_same_text_for_any_input_order(self, make_plugin):
        specs = [("a", ("c",)), ("b", ("a",)), ("c", ("b",))]
        results = set()
        for perm in itertools.permutations(specs):
            graph = build_dependency_graph(
                [make_plugin(pid, dependencies=deps) for pid, deps in perm]
            )
            results.add(tuple(detect_cycles(graph)))
        assert len(results) == 1


class TestResolvePluginOrder:
    def _registry(self, plugins):
        return PluginRegistry(list(plugins))

    def test_dependency_first(self, make_plugin):
        a = make_plugin("a")
        b = make_plugin("b", dependencies=("a",))
        for order in ([a, b], [b, a]):
            registry = self._registry(order)
            assert _ids(resolve_plugin_order(order, registry)) == ["a", "b"]

    def test_independent_plugins_sorted_by_id(self, make_plugin):
        plugins = [make_plugin("c"), make_plugin("b"), make_plugin("a")]
        registry = self._registry(plugins)
        assert _ids(resolve_plugin_order(plugins, registry)) == ["a", "b", "c"]

    def test_order_independent_of_input_permutation(self, make_plugin):
        plugins = [
            make_plugin("web"),
            make_plugin("lint", dependencies=("web",)),
            make_plugin("ci", dependencies=("lint", "test")),
            make_plugin("test", dependencies=("web",)),
            make_plugin("docs"),
        ]
        expected = None
        for perm in itertools.permutations(plugins):
            registry = self._registry(perm)
            order = _ids(resolve_plugin_order(list(perm), registry))
            if expected is None:
                expected = order
            assert order == expected
        assert expected == ["web", "lint", "test", "ci", "docs"]

    def test_dependency_visited_before_lower_id_dependent(self, make_plugin):
        plugins = [make_plugin("a", dependencies=("z",)), make_plugin("z")]
        registry = self._registry(plugins)
        assert _ids(resolve_plugin_order(plugins, registry)) == ["z", "a"]

    def test_no_duplicates(self, make_plugin):
        plugins = [
            make_plugin("base"),
            make_plugin("a", dependencies=("base",)),
            make_plugin("b", dependencies=("base",)),
        ]
        registry = self._registry(plugins)
        order = _ids(resolve_plugin_order(plugins, registry))
        assert order == ["base", "a", "b"]

    def test_cycle_raises(self, make_plugin):
        plugins = [
            make_plugin("a", dependencies=("b",)),
            make_plugin("b", dependencies=("a",)),
        ]
        registry = self._registry(plugins)
        with pytest.raises(DependencyCycle) as exc:
            resolve_plugin_order(plugins, registry)
        assert exc.value.cycles
        assert "a -> b -> a" in str(exc.value)

    def test_missing_dependency_raises(self, make_plugin):
        plugins = [make_plugin("a", dependencies=("ghost",))]
        registry = self._registry(plugins)
        with pytest.raises(MissingDependency) as exc:
            resolve_plugin_order(plugins, registry)
        assert exc.value.missing == [("a", "ghost")]
        assert "depends on unknown plugin: ghost" in str(exc.value)

    def test_unregistered_candidate_raises(self, make_plugin):
        registry = self._registry([make_plugin("a")])
        with pytest.raises(UnregisteredPlugin) as exc:
            resolve_plugin_order([make_plugin("a"), make_plugin("stray")], registry)
        assert exc.value.plugin_ids == ["stray"]

    def test_registered_dependency_pulled_in(self, make_plugin):
        base = make_plugin("base")
        app = make_plugin("app", dependencies=("base",))
        registry = self._registry([base, app])
        assert _ids(resolve_plugin_order([app], registry)) == ["base", "app"]

    def test_cycle_through_pulled_in_dependency(self, make_plugin):
        app = make_plugin("a", dependencies=("b",))
        hidden = make_plugin("b", dependencies=("a",), applies=False)
        registry = self._registry([app, hidden])
        with pytest.raises(DependencyCycle) as exc:
            resolve_plugin_order([app], registry)
        assert exc.value.cycles == ["Dependency cycle detected: a -> b -> a"]

    def test_missing_dependency_of_pulled_in_dependency(self, make_plugin):
        app = make_plugin("app", dependencies=("base",))
        base = make_plugin("base", dependencies=("ghost",), applies=False)
        registry = self._registry([app, base])
        with pytest.raises(MissingDependency) as exc:
            resolve_plugin_order([app], registry)
        assert exc.value.missing == [("base", "ghost")]

    def test_empty(self):
        assert resolve_plugin_order([], PluginRegistry()) == []
