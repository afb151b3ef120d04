"""Programmatic entry point.

    >>> from strata import analyze
    >>> report = analyze("path/to/checkout")
    >>> report.status.value
    'clean'
"""

from pathlib import Path
from typing import Optional, Union

from .architecture.analyzer import ArchitectureAnalyzer
from .architecture.models import AnalysisReport
from .config import AnalysisConfig, load_config
from .exceptions import InvalidPathError
from .logging_config import get_logger
from .scanning.sources import collect_sources, list_source_paths, read_source, relative_module_path

logger = get_logger(__name__)


def analyze(
    root: Union[str, Path] = ".",
    target: Optional[Union[str, Path]] = None,
    config: Optional[AnalysisConfig] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisReport:
    """Scan a checkout and check it against the layer table.

    Args:
        root: Project root; layer prefixes are relative to it
        target: Optional single module (absolute, or relative to ``root``).
            Only its references are checked and afferent coupling is unavailable.
        config: Ready-made configuration (skips file discovery)
        config_file: Explicit TOML file merged over discovered ones
        **overrides: Field overrides passed to load_config()

    Returns:
        AnalysisReport

    Raises:
        InvalidPathError: If root is not a directory or target lies outside it
        FileAccessError: If the explicit target cannot be read
        StrataError: If configuration is invalid
    """
    root_path = Path(root)
    if config is None:
        config = load_config(config_file=config_file, root=root_path, **overrides)

    analyzer = ArchitectureAnalyzer(config)

    if target is None:
        source_set = collect_sources(root_path, config)
        return analyzer.analyze(source_set.files, skipped_files=source_set.skipped)

    target_path = Path(target)
    if not target_path.is_absolute():
        target_path = root_path / target_path
    try:
        relative_module_path(target_path, root_path)
    except ValueError:
        raise InvalidPathError(target_path, f"Target is outside the project root {root_path}")

    source = read_source(target_path, root_path, config)
    known = [relative_module_path(p, root_path) for p in list_source_paths(root_path, config)]
    logger.debug(f"Single-module run for {source.path} ({len(known)} known modules)")

    return analyzer.analyze([source], target=source.path, known_paths=known)
