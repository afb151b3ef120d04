"""
Safe file operations for Strata.

Size-limited, encoding-tolerant reads of source files.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from .exceptions import FileAccessError


def safe_read_file(
    filepath: Path,
    max_bytes: Optional[int] = None,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> str:
    """
    Read a source file, refusing oversized or unreadable files.

    Args:
        filepath: File to read
        max_bytes: Size limit (None = unlimited)
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If the file is missing, too large or cannot be read
    """
    try:
        if not filepath.is_file():
            raise FileAccessError(filepath, "Not a file or does not exist")
        if max_bytes is not None:
            size = filepath.stat().st_size
            if size > max_bytes:
                raise FileAccessError(
                    filepath, f"File size ({size} bytes) exceeds limit ({max_bytes} bytes)"
                )
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except FileAccessError:
        raise
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def should_skip_file(filepath: Path, exclude_patterns: Iterable[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    ``dir/*`` patterns exclude the directory at any depth; other patterns
    are matched against the path from the right (``Path.match``).
    """
    parents = filepath.parts[:-1]
    for pattern in exclude_patterns:
        if pattern.endswith("/*") and "/" not in pattern[:-2] and pattern[:-2] in parents:
            return True
        if filepath.match(pattern):
            return True
    return False
