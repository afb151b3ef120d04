"""Report assembly and graph serialization.

Ordering rules for the assembled report:
- violations grouped by rule, each group sorted by (module, reference)
- coupling records sorted by Ca + Ce descending, then path ascending
- platform usage and unresolved references sorted by module then specifier
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from ..config import LayerConfig
from .models import (
    AnalysisReport,
    CouplingRecord,
    PlatformUsage,
    ReportStatus,
    RuleId,
    Violation,
)

UNCLASSIFIED = "unclassified"

# Fill colors cycled over declared layers, in level order
_LAYER_COLORS = (
    "#cfe8ff",
    "#d7f5d0",
    "#fff2c2",
    "#ffd9c2",
    "#ead2ff",
    "#c9f2ef",
    "#f6d0e0",
)
_UNCLASSIFIED_COLOR = "#e6e6e6"


def sort_coupling(records: Iterable[CouplingRecord]) -> list[CouplingRecord]:
    return sorted(records, key=lambda r: (-r.total, r.module))


def group_violations(
    violations: Iterable[Violation],
) -> dict[RuleId, tuple[Violation, ...]]:
    grouped: dict[RuleId, list[Violation]] = {rule: [] for rule in RuleId}
    for violation in violations:
        grouped[violation.rule_id].append(violation)
    return {
        rule: tuple(sorted(items, key=lambda v: (v.module, v.reference, v.message)))
        for rule, items in grouped.items()
    }


def assemble_report(
    violations: Iterable[Violation],
    coupling: Mapping[str, CouplingRecord],
    files_analyzed: int,
    platform_usage: Iterable[PlatformUsage] = (),
    unresolved: Iterable[tuple[str, str]] = (),
    edges: Iterable[tuple[str, str]] = (),
    module_layers: Optional[Mapping[str, Optional[str]]] = None,
    config_warnings: Sequence[str] = (),
    skipped_files: Iterable[str] = (),
    target: Optional[str] = None,
) -> AnalysisReport:
    """Merge rule output and metrics into one deterministic report."""
    grouped = group_violations(violations)
    violation_count = sum(len(group) for group in grouped.values())

    return AnalysisReport(
        status=ReportStatus.VIOLATIONS_FOUND if violation_count else ReportStatus.CLEAN,
        files_analyzed=files_analyzed,
        violations=grouped,
        coupling=tuple(sort_coupling(coupling.values())),
        platform_usage=tuple(
            sorted(platform_usage, key=lambda u: (u.module, u.specifier, u.api))
        ),
        unresolved=tuple(sorted(unresolved)),
        edges=tuple(sorted(set(edges))),
        module_layers=dict(sorted((module_layers or {}).items())),
        config_warnings=tuple(config_warnings),
        skipped_files=tuple(sorted(skipped_files)),
        target=target,
    )


def _dot_id(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_dot(report: AnalysisReport, layers: Sequence[LayerConfig]) -> str:
    """Serialize the internal-edge subgraph as a Graphviz digraph.

    Nodes are clustered and colored by layer; edges that break the
    layer-order rule are drawn in red.
    """
    ordered = sorted(
        {layer.name: layer for layer in reversed(layers)}.values(),
        key=lambda layer: (layer.level, layer.name),
    )
    colors = {
        layer.name: _LAYER_COLORS[i % len(_LAYER_COLORS)] for i, layer in enumerate(ordered)
    }

    nodes: set[str] = set(report.module_layers)
    for src, dst in report.edges:
        nodes.update((src, dst))

    by_layer: dict[str, list[str]] = {}
    for node in sorted(nodes):
        layer_name = report.module_layers.get(node) or UNCLASSIFIED
        by_layer.setdefault(layer_name, []).append(node)

    violating: set[tuple[str, str]] = set()
    for violation in report.violations.get(RuleId.LAYER_ORDER, ()):
        for src, dst in report.edges:
            if src == violation.module and report.module_layers.get(dst) == violation.target_layer:
                violating.add((src, dst))

    lines = [
        "digraph modules {",
        "  rankdir=LR;",
        '  node [shape=box, style="rounded,filled", fontname="Helvetica"];',
    ]

    group_names = [layer.name for layer in ordered if layer.name in by_layer]
    if UNCLASSIFIED in by_layer and UNCLASSIFIED not in group_names:
        group_names.append(UNCLASSIFIED)

    for index, name in enumerate(group_names):
        color = colors.get(name, _UNCLASSIFIED_COLOR)
        layer = next((item for item in ordered if item.name == name), None)
        label = name if layer is None else f"{name} (level {layer.level})"
        lines.append(f"  subgraph cluster_{index} {{")
        lines.append(f"    label={_dot_id(label)};")
        lines.append('    style="dashed";')
        for node in by_layer[name]:
            lines.append(f'    {_dot_id(node)} [fillcolor="{color}"];')
        lines.append("  }")

    for src, dst in report.edges:
        attrs = ' [color="red", penwidth=2]' if (src, dst) in violating else ""
        lines.append(f"  {_dot_id(src)} -> {_dot_id(dst)}{attrs};")

    lines.append("}")
    return "\n".join(lines) + "\n"
