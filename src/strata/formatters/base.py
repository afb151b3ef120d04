"""Base formatter interface for Strata output rendering."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..architecture.models import AnalysisReport
from ..config import AnalysisConfig


@dataclass
class FormatContext:
    """Rendering options that are not part of the report itself."""

    config: AnalysisConfig = field(default_factory=AnalysisConfig)
    show_graph: bool = False

    @property
    def top_n(self) -> int:
        return self.config.top_n


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: AnalysisReport, context: FormatContext) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, report: AnalysisReport, context: FormatContext) -> str:
        """Return formatted string representation of the report."""
