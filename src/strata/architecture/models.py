"""Architecture conformance models.

Defines the records that flow through the pipeline: modules and their raw
references, resolved targets, rule violations, coupling records, and the
aggregate report handed to formatters. Nothing here is mutated after the
stage that creates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ReferenceKind(Enum):
    """Syntactic form a dependency reference was written in."""

    STATIC = "static"  # import ... from 'x' / export ... from 'x'
    DYNAMIC = "dynamic"  # import('x'), evaluated at runtime
    PLATFORM_REQUIRE = "platform-require"  # require('x')


class RuleId(Enum):
    """Rule families evaluated over resolved references."""

    LAYER_ORDER = "layer-order"
    PLATFORM_ISOLATION = "platform-isolation"


class ReportStatus(Enum):
    CLEAN = "clean"
    VIOLATIONS_FOUND = "violations-found"


@dataclass(frozen=True)
class RawReference:
    """A dependency specifier as written in the source text."""

    specifier: str
    kind: ReferenceKind


@dataclass(frozen=True)
class Module:
    """One source file under analysis, identified by its canonical path."""

    path: str
    layer: Optional[str] = None
    raw_references: tuple[RawReference, ...] = ()


# ── Resolved targets ──────────────────────────────────────────────


@dataclass(frozen=True)
class InternalModule:
    """Reference to a module present in the source set."""

    path: str


@dataclass(frozen=True)
class CrossLayer:
    """Package-style reference naming a layer (``pkg/runtime/...``)."""

    layer: str


@dataclass(frozen=True)
class PlatformAPI:
    """Reference to a host capability such as ``fs``."""

    name: str


@dataclass(frozen=True)
class External:
    """Third-party or otherwise unrecognized specifier."""

    name: str


@dataclass(frozen=True)
class Unresolved:
    """Relative reference whose file is not in the source set."""

    specifier: str


ResolvedTarget = Union[InternalModule, CrossLayer, PlatformAPI, External, Unresolved]


@dataclass(frozen=True)
class ResolvedReference:
    """A raw reference paired with what it points at."""

    source: Module
    kind: ReferenceKind
    specifier: str
    target: ResolvedTarget


# ── Rule output ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Violation:
    """A reference that breaks a layering or isolation rule."""

    module: str
    reference: str
    rule_id: RuleId
    message: str
    target_layer: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "reference": self.reference,
            "rule": self.rule_id.value,
            "target_layer": self.target_layer,
            "message": self.message,
        }


@dataclass(frozen=True)
class PlatformUsage:
    """A platform-API reference, whether or not it breaks isolation."""

    module: str
    api: str
    specifier: str
    layer: Optional[str]
    violation: bool


# ── Metrics ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class CouplingRecord:
    """Martin coupling metrics for a single module.

    ``afferent_available`` is False in single-target runs, where only the
    target's outgoing edges are known; ``afferent`` is then reported as 0.
    """

    module: str
    afferent: int = 0  # Ca: distinct modules depending on this one
    efferent: int = 0  # Ce: distinct modules this one depends on
    instability: float = 0.0  # Ce / (Ca + Ce), 0 when isolated
    depends_on: tuple[str, ...] = ()
    depended_on_by: tuple[str, ...] = ()
    afferent_available: bool = True

    @property
    def total(self) -> int:
        return self.afferent + self.efferent

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "afferent": self.afferent if self.afferent_available else None,
            "efferent": self.efferent,
            "instability": round(self.instability, 4),
            "depends_on": list(self.depends_on),
            "depended_on_by": list(self.depended_on_by),
        }


# ── Aggregate ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class AnalysisReport:
    """Top-level result of a conformance run."""

    status: ReportStatus
    files_analyzed: int
    violations: dict[RuleId, tuple[Violation, ...]] = field(default_factory=dict)
    coupling: tuple[CouplingRecord, ...] = ()
    platform_usage: tuple[PlatformUsage, ...] = ()
    unresolved: tuple[tuple[str, str], ...] = ()  # (module, specifier)
    edges: tuple[tuple[str, str], ...] = ()  # internal dependency edges
    module_layers: dict[str, Optional[str]] = field(default_factory=dict)
    config_warnings: tuple[str, ...] = ()
    skipped_files: tuple[str, ...] = ()
    target: Optional[str] = None

    @property
    def violation_count(self) -> int:
        return sum(len(group) for group in self.violations.values())

    @property
    def all_violations(self) -> list[Violation]:
        return [v for rule in RuleId for v in self.violations.get(rule, ())]

    @property
    def tracked_modules(self) -> int:
        return len(self.coupling)

    def to_dict(self) -> dict:
        """Deterministic, JSON-ready representation."""
        return {
            "status": self.status.value,
            "target": self.target,
            "summary": {
                "files_analyzed": self.files_analyzed,
                "violations": self.violation_count,
                "tracked_modules": self.tracked_modules,
                "internal_edges": len(self.edges),
                "unresolved_references": len(self.unresolved),
            },
            "violations": {
                rule.value: [v.to_dict() for v in self.violations.get(rule, ())]
                for rule in RuleId
            },
            "platform_usage": [
                {
                    "module": u.module,
                    "api": u.api,
                    "specifier": u.specifier,
                    "layer": u.layer,
                    "violation": u.violation,
                }
                for u in self.platform_usage
            ],
            "coupling": [c.to_dict() for c in self.coupling],
            "unresolved": [{"module": m, "specifier": s} for m, s in self.unresolved],
            "config_warnings": list(self.config_warnings),
            "skipped_files": list(self.skipped_files),
        }
