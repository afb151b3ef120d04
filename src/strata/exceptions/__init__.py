"""Exception hierarchy for Strata."""

from .analysis import AnalysisError, FileAccessError
from .base import StrataError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "StrataError",
    "AnalysisError",
    "FileAccessError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
