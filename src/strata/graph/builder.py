"""Module graph construction from resolved references."""

from collections.abc import Iterable, Sequence

from ..architecture.models import InternalModule, ResolvedReference, Unresolved
from .models import ModuleGraph


def build_module_graph(
    resolved: Sequence[ResolvedReference], nodes: Iterable[str] = ()
) -> ModuleGraph:
    """Build the internal-edge graph.

    Repeated references from one module to another collapse to one edge,
    and a module referencing itself adds nothing. ``nodes`` seeds modules
    that must appear even without edges.
    """
    all_nodes: set[str] = set(nodes)
    targets: dict[str, set[str]] = {}
    sources: dict[str, set[str]] = {}
    unresolved: dict[str, list[str]] = {}

    for ref in resolved:
        src = ref.source.path
        all_nodes.add(src)

        if isinstance(ref.target, Unresolved):
            unresolved.setdefault(src, []).append(ref.target.specifier)
            continue
        if not isinstance(ref.target, InternalModule):
            continue

        dst = ref.target.path
        all_nodes.add(dst)
        if dst == src:
            continue
        targets.setdefault(src, set()).add(dst)
        sources.setdefault(dst, set()).add(src)

    adjacency = {node: sorted(targets.get(node, ())) for node in sorted(all_nodes)}
    reverse = {node: sorted(sources.get(node, ())) for node in sorted(all_nodes)}

    return ModuleGraph(
        adjacency=adjacency,
        reverse=reverse,
        all_nodes=all_nodes,
        edge_count=sum(len(t) for t in targets.values()),
        unresolved=unresolved,
    )
