"""Source set provider: file discovery and reading."""

from .models import SourceFile
from .sources import SourceSet, collect_sources, list_source_paths, read_source

__all__ = ["SourceFile", "SourceSet", "collect_sources", "list_source_paths", "read_source"]
