"""Source set records handed to the analyzer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceFile:
    """One module's canonical repo-relative path and full text."""

    path: str
    text: str
