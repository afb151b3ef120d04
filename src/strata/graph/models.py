"""Module dependency graph.

Edges are directed: adjacency[A] contains B means module A depends on B.
Only references that resolved to a module in the source set become edges.
"""

from dataclasses import dataclass, field


@dataclass
class ModuleGraph:
    """Adjacency-list graph keyed by canonical module path.

    Edge lists are deduplicated and sorted; self-references are never stored.
    """

    adjacency: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    all_nodes: set[str] = field(default_factory=set)
    edge_count: int = 0

    # module -> specifiers that looked internal but matched no module
    unresolved: dict[str, list[str]] = field(default_factory=dict)

    def edges(self) -> list[tuple[str, str]]:
        """All edges, sorted by (source, target)."""
        return [(src, dst) for src in sorted(self.adjacency) for dst in self.adjacency[src]]
