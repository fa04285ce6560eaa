"""Render analysis results as rich console reports."""

import math

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from people_analytics.utils.types import AnalysisResult, AnalysisStatus

console = Console()

MAX_ROWS = 40


def _status_color(status: AnalysisStatus) -> str:
    match status:
        case AnalysisStatus.OK:
            return "green"
        case AnalysisStatus.SKIPPED:
            return "yellow"
        case AnalysisStatus.FAILED:
            return "red"
        case _:
            return "white"


def _format_cell(value: object) -> str:
    match value:
        case bool():
            return "yes" if value else "no"
        case float() if math.isnan(value):
            return "-"
        case float() if value != 0 and (abs(value) < 0.001 or abs(value) >= 1e6):
            return f"{value:.3e}"
        case float():
            return f"{value:.4f}"
        case None:
            return "-"
        case _ if pd.isna(value) is True:
            return "-"
        case _:
            return str(value)


def frame_to_table(frame: pd.DataFrame, title: str | None = None) -> Table:
    table = Table(title=title, show_lines=False)
    for col in frame.columns:
        numeric = pd.api.types.is_numeric_dtype(frame[col]) and not pd.api.types.is_bool_dtype(frame[col])
        table.add_column(str(col), justify="right" if numeric else "left")

    for row in frame.head(MAX_ROWS).itertuples(index=False):
        table.add_row(*(_format_cell(value) for value in row))

    if len(frame) > MAX_ROWS:
        table.caption = f"{len(frame) - MAX_ROWS} more row(s) not shown"
    return table


def render_result(result: AnalysisResult, out: Console | None = None) -> None:
    """Print one self-contained report: headline, result tables and interpretation."""
    out = out or console
    color = _status_color(result.status)
    out.print(Panel(f"[bold]{result.headline}[/bold]", title=result.name, border_style=color))

    match result.status:
        case AnalysisStatus.SKIPPED:
            out.print(f"  [yellow]Skipped: {result.reason}[/yellow]")
            return
        case AnalysisStatus.FAILED:
            out.print(f"  [red]Failed: {result.reason}[/red]")
            return

    if result.table is not None and not result.table.empty:
        out.print(frame_to_table(result.table))
    for title, extra in result.extra_tables.items():
        if extra.empty:
            out.print(f"  [dim]{title}: none[/dim]")
        else:
            out.print(frame_to_table(extra, title=title))

    details = {k: v for k, v in result.statistics.items() if k != "interpretation"}
    if details:
        out.print("  " + "  ".join(f"{key}={_format_cell(value)}" for key, value in details.items()))
    if "interpretation" in result.statistics:
        out.print(f"  [bold]{result.statistics['interpretation']}[/bold]")
    for note in result.notes:
        out.print(f"  [yellow]Note:[/yellow] {note}")


def render_summary(results: dict[str, list[AnalysisResult]], out: Console | None = None) -> None:
    """One line per analysis with its status, grouped by domain."""
    out = out or console
    table = Table(title="Analysis Summary")
    table.add_column("Domain")
    table.add_column("Analysis")
    table.add_column("Status")
    table.add_column("Details")

    for domain, domain_results in results.items():
        for result in domain_results:
            color = _status_color(result.status)
            detail = result.reason or f"p_value={_format_cell(result.statistics.get('p_value'))}"
            table.add_row(domain, result.name, f"[{color}]{result.status}[/{color}]", detail)

    out.print(table)
