"""Rich terminal formatter for Strata."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..architecture.models import AnalysisReport, CouplingRecord, RuleId
from ..architecture.report import render_dot
from .base import BaseFormatter, FormatContext


def _instability_label(record: CouplingRecord) -> str:
    value = f"{record.instability:.2f}"
    if record.total == 0:
        return f"[dim]{value}[/dim]"
    if record.instability >= 0.8:
        return f"[yellow]{value}[/yellow]"
    if record.instability <= 0.2:
        return f"[cyan]{value}[/cyan]"
    return value


class RichFormatter(BaseFormatter):
    """Sectioned terminal report: violations, platform usage, coupling, summary."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: AnalysisReport, context: FormatContext) -> None:
        self._render_to(self.console, report, context)

    def format(self, report: AnalysisReport, context: FormatContext) -> str:
        buffer = Console(file=io.StringIO(), record=True, width=120, color_system=None)
        self._render_to(buffer, report, context)
        return buffer.export_text()

    # -- sections --

    def _render_to(self, console: Console, report: AnalysisReport, context: FormatContext) -> None:
        if report.config_warnings:
            for warning in report.config_warnings:
                console.print(f"[yellow]config:[/yellow] {escape(warning)}", highlight=False)
            console.print()

        self._print_layer_violations(console, report)
        self._print_platform_usage(console, report)
        self._print_coupling(console, report, context.top_n)

        if context.show_graph:
            console.print()
            console.print(
                render_dot(report, context.config.layers),
                markup=False,
                highlight=False,
                soft_wrap=True,
                end="",
            )

        console.print()
        console.print(self._summary_line(report), highlight=False)

    def _print_layer_violations(self, console: Console, report: AnalysisReport) -> None:
        violations = report.violations.get(RuleId.LAYER_ORDER, ())
        console.print("[bold cyan]LAYER VIOLATIONS[/bold cyan]")
        if not violations:
            console.print("  [green]No layer violations[/green]")
            console.print()
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Module", style="red")
        table.add_column("Reference")
        table.add_column("Target layer")
        table.add_column("Detail", style="dim")
        for v in violations:
            table.add_row(
                escape(v.module), escape(v.reference), v.target_layer or "-", escape(v.message)
            )
        console.print(table)
        console.print()

    def _print_platform_usage(self, console: Console, report: AnalysisReport) -> None:
        console.print("[bold cyan]PLATFORM API USAGE[/bold cyan]")
        if not report.platform_usage:
            console.print("  [green]No platform API references[/green]")
            console.print()
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Module")
        table.add_column("API")
        table.add_column("Layer")
        table.add_column("Status")
        for usage in report.platform_usage:
            status = "[red]isolation violation[/red]" if usage.violation else "[dim]allowed[/dim]"
            table.add_row(escape(usage.module), usage.api, usage.layer or "-", status)
        console.print(table)
        console.print()

    def _print_coupling(self, console: Console, report: AnalysisReport, top_n: int) -> None:
        console.print(f"[bold cyan]COUPLING[/bold cyan] [dim](top {top_n})[/dim]")
        records = report.coupling[:top_n]
        if not records:
            console.print("  [dim]No modules tracked[/dim]")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Module")
        table.add_column("Layer", style="dim")
        table.add_column("Ca", justify="right")
        table.add_column("Ce", justify="right")
        table.add_column("Instability", justify="right")
        for record in records:
            afferent = str(record.afferent) if record.afferent_available else "[dim]n/a[/dim]"
            table.add_row(
                escape(record.module),
                report.module_layers.get(record.module) or "-",
                afferent,
                str(record.efferent),
                _instability_label(record),
            )
        console.print(table)

    @staticmethod
    def _summary_line(report: AnalysisReport) -> str:
        color = "green" if report.violation_count == 0 else "red"
        line = (
            f"[{color}]{report.files_analyzed} files analyzed, "
            f"{report.violation_count} violations, "
            f"{report.tracked_modules} modules tracked[/{color}]"
        )
        if report.unresolved:
            line += f" [dim]({len(report.unresolved)} unresolved references)[/dim]"
        if report.skipped_files:
            line += f" [yellow]({len(report.skipped_files)} files skipped)[/yellow]"
        return line
