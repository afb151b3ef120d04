"""Source set provider: turns a project checkout into ``SourceFile`` records.

Walks the configured source directories under a project root, keeps files
with a configured extension that no exclude pattern matches, and reads
them. Unreadable files are logged and reported as skipped; they never
abort a directory scan.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ..config import AnalysisConfig
from ..exceptions import FileAccessError, InvalidPathError
from ..file_ops import safe_read_file, should_skip_file
from ..logging_config import get_logger
from .models import SourceFile

logger = get_logger(__name__)


@dataclass
class SourceSet:
    """Everything the provider found under a root."""

    root: Path
    files: list[SourceFile] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def relative_module_path(path: Path, root: Path) -> str:
    """Canonical repo-relative POSIX path of ``path``."""
    return path.resolve().relative_to(root.resolve()).as_posix()


def list_source_paths(root: Path, config: AnalysisConfig) -> list[Path]:
    """All candidate source files under the configured directories, sorted.

    Raises:
        InvalidPathError: If ``root`` is not a directory
    """
    if not root.is_dir():
        raise InvalidPathError(root, "Project root is not a directory")

    extensions = set(config.extensions)
    found: set[Path] = set()

    for directory in config.scan_dirs:
        base = root / directory if directory else root
        if not base.is_dir():
            logger.debug(f"Source directory not found, skipping: {base}")
            continue
        for path in base.rglob("*"):
            if path.suffix not in extensions or not path.is_file():
                continue
            rel = Path(relative_module_path(path, root))
            if should_skip_file(rel, config.exclude_patterns):
                logger.debug(f"Excluded: {rel}")
                continue
            found.add(path)

    return sorted(found, key=lambda p: relative_module_path(p, root))


def read_source(path: Path, root: Path, config: AnalysisConfig) -> SourceFile:
    """Read a single module.

    Raises:
        FileAccessError: If the file cannot be read
    """
    text = safe_read_file(path, max_bytes=config.max_file_size_bytes)
    return SourceFile(path=relative_module_path(path, root), text=text)


def collect_sources(root: Path, config: AnalysisConfig) -> SourceSet:
    """Read every module under ``root``; unreadable files are skipped."""
    source_set = SourceSet(root=root)

    for path in list_source_paths(root, config):
        try:
            source_set.files.append(read_source(path, root, config))
        except FileAccessError as e:
            logger.warning(f"Skipping unreadable file: {e}")
            source_set.skipped.append(relative_module_path(path, root))

    logger.debug(
        f"Collected {len(source_set.files)} modules ({len(source_set.skipped)} skipped)"
    )
    return source_set
