"""JSON formatter for Strata."""

import json

from ..architecture.models import AnalysisReport
from ..architecture.report import render_dot
from .base import BaseFormatter, FormatContext


class JsonFormatter(BaseFormatter):
    """Render the report as JSON (stable key and list order)."""

    def render(self, report: AnalysisReport, context: FormatContext) -> None:
        print(self.format(report, context))

    def format(self, report: AnalysisReport, context: FormatContext) -> str:
        data = report.to_dict()
        if context.show_graph:
            data["graph"] = render_dot(report, context.config.layers)
        return json.dumps(data, indent=2)
