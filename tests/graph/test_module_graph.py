"""Tests for module graph construction."""

from strata.architecture.models import (
    CrossLayer,
    External,
    InternalModule,
    Module,
    ReferenceKind,
    ResolvedReference,
    Unresolved,
)
from strata.graph import ModuleGraph, build_module_graph


def _ref(src, target, specifier="spec"):
    return ResolvedReference(Module(path=src), ReferenceKind.STATIC, specifier, target)


class TestBuildModuleGraph:
    def test_empty(self):
        graph = build_module_graph([])
        assert graph.all_nodes == set()
        assert graph.edge_count == 0
        assert graph.edges() == []

    def test_seed_nodes_without_edges(self):
        graph = build_module_graph([], nodes=["b.js", "a.js"])
        assert graph.all_nodes == {"a.js", "b.js"}
        assert graph.adjacency == {"a.js": [], "b.js": []}

    def test_edges_deduplicated_and_sorted(self):
        graph = build_module_graph(
            [
                _ref("a.js", InternalModule("c.js")),
                _ref("a.js", InternalModule("b.js")),
                _ref("a.js", InternalModule("c.js")),
            ]
        )
        assert graph.adjacency["a.js"] == ["b.js", "c.js"]
        assert graph.reverse["c.js"] == ["a.js"]
        assert graph.edge_count == 2
        assert graph.edges() == [("a.js", "b.js"), ("a.js", "c.js")]

    def test_self_loop_keeps_node_only(self):
        graph = build_module_graph([_ref("a.js", InternalModule("a.js"))])
        assert graph.all_nodes == {"a.js"}
        assert graph.edge_count == 0

    def test_only_internal_targets_become_edges(self):
        graph = build_module_graph(
            [
                _ref("a.js", External("vite")),
                _ref("a.js", CrossLayer("core")),
                _ref("a.js", Unresolved("./gone.js"), "./gone.js"),
            ]
        )
        assert graph.all_nodes == {"a.js"}
        assert graph.edges() == []
        assert graph.unresolved == {"a.js": ["./gone.js"]}


def test_module_graph_defaults():
    graph = ModuleGraph()
    assert graph.edges() == []
    assert graph.unresolved == {}
