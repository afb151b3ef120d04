"""
Strata - layered architecture conformance for module graphs.

Scans a source tree, rebuilds the module dependency graph from import and
require references, checks it against a declared layer order and
platform-isolation rules, and reports afferent/efferent coupling.
"""

__version__ = "0.1.0"

from .api import analyze
from .architecture import AnalysisReport, ArchitectureAnalyzer
from .config import AnalysisConfig, LayerConfig, load_config

__all__ = [
    "analyze",  # Main entry point
    "ArchitectureAnalyzer",  # Run the pipeline on an in-memory source set
    "AnalysisReport",
    "AnalysisConfig",
    "LayerConfig",
    "load_config",
]
