"""Architecture conformance: extraction, layers, rules, coupling metrics."""

from .analyzer import ArchitectureAnalyzer
from .models import (
    AnalysisReport,
    CouplingRecord,
    Module,
    RawReference,
    ReferenceKind,
    ReportStatus,
    RuleId,
    Violation,
)

__all__ = [
    "AnalysisReport",
    "ArchitectureAnalyzer",
    "CouplingRecord",
    "Module",
    "RawReference",
    "ReferenceKind",
    "ReportStatus",
    "RuleId",
    "Violation",
]
