"""Dependency reference extraction.

Textual scan of a module's source for the three reference forms:

    import { h } from '../runtime/dom.js'     -> static
    export * from './router.js'               -> static
    import './polyfills.js'                   -> static
    const m = await import('./lazy.js')       -> dynamic
    const fs = require('fs')                  -> platform-require

Lines whose stripped text starts with ``//``, ``/*`` or ``*`` are skipped
so documentation examples inside comments never reach the graph. There is
no tokenizer: contrived syntax (an import keyword inside a string, a
specifier split across lines) can be over- or under-matched.
"""

import re
from typing import Any

from .models import RawReference, ReferenceKind

_COMMENT_MARKERS = ("//", "/*", "*")

# Compiled patterns are only ever used through finditer(), which hands out a
# fresh iterator per call, so no match cursor is shared between scans.
_STATIC_FROM = re.compile(r"""\bfrom\s*(['"])([^'"\n]+)\1""")
_STATIC_BARE = re.compile(r"""\bimport\s*(['"])([^'"\n]+)\1""")
_DYNAMIC = re.compile(r"""\bimport\s*\(\s*(['"`])([^'"`\n]+)\1\s*\)""")
_REQUIRE = re.compile(r"""\brequire\s*\(\s*(['"`])([^'"`\n]+)\1\s*\)""")

_PATTERNS = (
    (_STATIC_FROM, ReferenceKind.STATIC),
    (_STATIC_BARE, ReferenceKind.STATIC),
    (_DYNAMIC, ReferenceKind.DYNAMIC),
    (_REQUIRE, ReferenceKind.PLATFORM_REQUIRE),
)


def is_comment_line(line: str) -> bool:
    """True if the line is a line comment or part of a block comment."""
    return line.lstrip().startswith(_COMMENT_MARKERS)


def extract(text: Any) -> list[RawReference]:
    """Extract raw dependency references from module text.

    References are returned in order of first occurrence (line, then
    column). Repeated references are kept. Input that is not text yields
    an empty list.
    """
    if not isinstance(text, str) or not text:
        return []

    references: list[RawReference] = []
    for line in text.splitlines():
        if is_comment_line(line):
            continue
        if "import" not in line and "from" not in line and "require" not in line:
            continue

        found: list[tuple[int, RawReference]] = []
        for pattern, kind in _PATTERNS:
            for match in pattern.finditer(line):
                specifier = match.group(2).strip()
                # Template literals with substitutions cannot be resolved
                if not specifier or "${" in specifier:
                    continue
                found.append((match.start(), RawReference(specifier, kind)))

        found.sort(key=lambda item: item[0])
        references.extend(ref for _, ref in found)

    return references
