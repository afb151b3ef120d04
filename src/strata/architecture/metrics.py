"""Coupling metrics.

Per-module Martin coupling over internal edges only:
- Afferent Coupling (Ca): distinct modules that depend on this module
- Efferent Coupling (Ce): distinct modules this module depends on
- Instability (I): Ce / (Ca + Ce), 0 when the module has no edges

Repeated references to the same target count once and self-references are
ignored. Cycles are not detected: two modules importing each other simply
each get one afferent and one efferent edge from the other.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from ..graph.builder import build_module_graph
from ..graph.models import ModuleGraph
from .models import CouplingRecord, ResolvedReference


def compute_instability(ca: int, ce: int) -> float:
    """Compute instability I = Ce / (Ca + Ce).

    Args:
        ca: Afferent coupling (incoming edges)
        ce: Efferent coupling (outgoing edges)

    Returns:
        Instability in [0, 1]; an isolated module (Ca=Ce=0) is maximally stable
    """
    total = ca + ce
    if total == 0:
        return 0.0
    return ce / total


def coupling_from_graph(
    graph: ModuleGraph, afferent_available: bool = True
) -> dict[str, CouplingRecord]:
    """Derive a CouplingRecord for every node of the graph.

    With ``afferent_available=False`` incoming edges are treated as unknown:
    afferent is reported as 0 and instability uses efferent alone.
    """
    records: dict[str, CouplingRecord] = {}

    for node in sorted(graph.all_nodes):
        depends_on = tuple(graph.adjacency.get(node, ()))
        depended_on_by = tuple(graph.reverse.get(node, ())) if afferent_available else ()
        ca = len(depended_on_by)
        ce = len(depends_on)
        records[node] = CouplingRecord(
            module=node,
            afferent=ca,
            efferent=ce,
            instability=compute_instability(ca, ce),
            depends_on=depends_on,
            depended_on_by=depended_on_by,
            afferent_available=afferent_available,
        )

    return records


def compute_metrics(
    resolved: Sequence[ResolvedReference],
    modules: Optional[Iterable[str]] = None,
    afferent_available: bool = True,
) -> dict[str, CouplingRecord]:
    """Compute coupling records from resolved references.

    Args:
        resolved: Resolved references; only InternalModule targets count
        modules: Extra module paths to track even if they have no edges
        afferent_available: False when only part of the graph was scanned

    Returns:
        Module path -> CouplingRecord
    """
    graph = build_module_graph(resolved, modules or ())
    return coupling_from_graph(graph, afferent_available=afferent_available)
