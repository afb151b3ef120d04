"""Canonical repo-relative path helpers shared by config, scanning and analysis."""

import posixpath


def normalize_path(path: str) -> str:
    """Return the canonical POSIX form of a repo-relative path.

    Backslashes become slashes, ``.``/``..`` segments are collapsed and
    leading ``./`` or ``/`` and trailing slashes are dropped. The empty
    path (and ``.``) normalizes to ``""``.
    """
    path = path.replace("\\", "/").strip()
    if not path:
        return ""
    normalized = posixpath.normpath(path).lstrip("/")
    return "" if normalized == "." else normalized


def path_segments(path: str) -> tuple[str, ...]:
    """Split a normalized path into its segments."""
    normalized = normalize_path(path)
    return tuple(normalized.split("/")) if normalized else ()


def has_segment_prefix(path: str, prefix: str) -> bool:
    """True if ``prefix`` matches whole leading segments of ``path``.

    ``core`` matches ``core/a.js`` and ``core`` itself but not ``corex/a.js``.
    An empty prefix matches every path.
    """
    prefix_parts = path_segments(prefix)
    path_parts = path_segments(path)
    return path_parts[: len(prefix_parts)] == prefix_parts
