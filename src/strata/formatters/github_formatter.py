"""GitHub Actions formatter, one ``::error`` annotation per violation."""

from ..architecture.models import AnalysisReport
from .base import BaseFormatter, FormatContext


def _escape(value: str) -> str:
    # Workflow-command data escaping
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output workflow-command annotations plus a one-line summary."""

    def render(self, report: AnalysisReport, context: FormatContext) -> None:
        print(self.format(report, context))

    def format(self, report: AnalysisReport, context: FormatContext) -> str:
        lines: list[str] = []
        for v in report.all_violations:
            lines.append(
                f"::error file={v.module},title={v.rule_id.value}::"
                f"{_escape(v.message)} (reference '{_escape(v.reference)}')"
            )
        for warning in report.config_warnings:
            lines.append(f"::warning title=strata config::{_escape(warning)}")
        lines.append(
            f"strata: {report.files_analyzed} files analyzed, "
            f"{report.violation_count} violations, {report.tracked_modules} modules tracked"
        )
        return "\n".join(lines)
