"""ArchitectureAnalyzer: the conformance pipeline.

Orchestrates:
1. Reference extraction per module (optionally in worker threads)
2. Layer classification
3. Reference resolution
4. Violation detection
5. Coupling metrics over the internal-edge graph
6. Report assembly

The whole run is a pure function of the source set and configuration:
modules are processed in path order regardless of how extraction was
scheduled, so repeated runs produce identical reports.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import AnalysisError
from ..graph.builder import build_module_graph
from ..logging_config import get_logger
from ..paths import normalize_path
from ..scanning.models import SourceFile
from .extractor import extract
from .layers import classify, validate_layers
from .metrics import coupling_from_graph
from .models import AnalysisReport, Module, PlatformAPI, PlatformUsage, ResolvedReference
from .report import assemble_report
from .resolver import resolve
from .rules import detect_violations

logger = get_logger(__name__)

# Below this many files thread start-up costs more than it saves
_PARALLEL_MIN_FILES = 10


class ArchitectureAnalyzer:
    """Checks a source set against the configured layer table."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def analyze(
        self,
        sources: Iterable[SourceFile],
        target: Optional[str] = None,
        known_paths: Iterable[str] = (),
        skipped_files: Iterable[str] = (),
    ) -> AnalysisReport:
        """Run the full pipeline.

        Args:
            sources: Modules with their text
            target: Restrict rule evaluation and metrics to this module path
            known_paths: Paths that exist but were not read (single-target runs),
                used so relative references still resolve
            skipped_files: Files the provider could not read, echoed in the report

        Returns:
            Assembled AnalysisReport

        Raises:
            AnalysisError: If ``target`` is not among ``sources``
        """
        config = self.config
        layers = config.layers

        warnings = validate_layers(layers, config.platform_apis)
        for warning in warnings:
            logger.warning(warning)

        texts: dict[str, str] = {}
        for source in sources:
            texts[normalize_path(source.path)] = source.text
        paths = sorted(texts)

        target_path = normalize_path(target) if target is not None else None
        if target_path is not None and target_path not in texts:
            raise AnalysisError(
                f"Target module not in source set: {target}", details={"target": target_path}
            )

        all_modules = frozenset(paths) | frozenset(normalize_path(p) for p in known_paths)
        module_layers = {path: classify(path, layers) for path in sorted(all_modules)}

        modules = self._extract_modules(paths, texts, module_layers)
        logger.debug(f"Extracted references from {len(modules)} modules")

        analyzed = [m for m in modules if target_path is None or m.path == target_path]

        resolved: list[ResolvedReference] = []
        for module in analyzed:
            for ref in module.raw_references:
                resolved.append(
                    ResolvedReference(
                        source=module,
                        kind=ref.kind,
                        specifier=ref.specifier,
                        target=resolve(ref, module, all_modules, layers, config),
                    )
                )

        violations = detect_violations(resolved, module_layers, layers)
        logger.debug(f"Resolved {len(resolved)} references, {len(violations)} violations")

        isolated = {layer.name for layer in layers if layer.isolated}
        platform_usage = [
            PlatformUsage(
                module=ref.source.path,
                api=ref.target.name,
                specifier=ref.specifier,
                layer=ref.source.layer,
                violation=ref.source.layer in isolated,
            )
            for ref in resolved
            if isinstance(ref.target, PlatformAPI)
        ]

        graph = build_module_graph(resolved, (m.path for m in analyzed))
        coupling = coupling_from_graph(graph, afferent_available=target_path is None)
        unresolved = sorted(
            {(src, spec) for src, specs in graph.unresolved.items() for spec in specs}
        )

        return assemble_report(
            violations=violations,
            coupling=coupling,
            files_analyzed=len(analyzed),
            platform_usage=platform_usage,
            unresolved=unresolved,
            edges=graph.edges(),
            module_layers={node: module_layers.get(node) for node in graph.all_nodes},
            config_warnings=warnings,
            skipped_files=skipped_files,
            target=target_path,
        )

    def _extract_modules(
        self,
        paths: list[str],
        texts: dict[str, str],
        module_layers: dict[str, Optional[str]],
    ) -> list[Module]:
        workers = self.config.workers
        if workers and workers > 1 and len(paths) >= _PARALLEL_MIN_FILES:
            # map() yields in submission order, so path order is preserved
            with ThreadPoolExecutor(max_workers=workers) as executor:
                extracted = list(executor.map(extract, (texts[p] for p in paths)))
        else:
            extracted = [extract(texts[p]) for p in paths]

        return [
            Module(path=path, layer=module_layers.get(path), raw_references=tuple(refs))
            for path, refs in zip(paths, extracted)
        ]
