"""Rich terminal reporter — colour and severity pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from docscan.findings.models import ScanReport

_SEVERITY_STYLE = {
    "high": "bold white on red",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
    "informational": "bold white on grey37",
}

_SEVERITY_ORDER = ("high", "medium", "low", "informational")


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity.lower(), "")
    return Text(f" {severity.upper()} ", style=style)


def render(report: ScanReport, *, console: Optional[Console] = None, show_summary: bool = True) -> None:
    """Print a scan report to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not report.findings:
        console.print()
        console.print(f"[bold green]No findings in {report.file_id}.[/bold green]")
        if show_summary:
            _print_summary(console, report)
        return

    console.print()
    table = Table(
        title=f"Findings for {report.file_id}",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=16)
    table.add_column("Rule", style="cyan", min_width=12)
    table.add_column("Line", justify="right", style="green")
    table.add_column("Context", overflow="fold")
    table.add_column("Description", style="dim")

    for finding in report.findings:
        table.add_row(
            _severity_pill(finding.severity),
            finding.rule_id,
            str(finding.line),
            Text(finding.context),
            finding.description,
        )

    console.print(table)

    if show_summary:
        _print_summary(console, report)


def _print_summary(console: Console, report: ScanReport) -> None:
    counts = report.severity_counts
    console.print()
    console.print(f"[dim]Rules evaluated:[/dim] {report.rules_evaluated}")
    console.print(f"[dim]Findings:[/dim]        {report.total_findings}")
    for sev in _SEVERITY_ORDER:
        if counts.get(sev):
            console.print(f"[dim]  {sev}:[/dim] {counts[sev]}")
    console.print(f"[dim]Duration:[/dim]        {report.scan_duration_ms:.0f}ms")
