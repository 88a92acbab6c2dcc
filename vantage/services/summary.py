from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vantage.models.bundle import BudgetResult, BundleAnalysis, BundleDiff
from vantage.models.enums import ThresholdStatus
from vantage.models.runtime import MetricCheck
from vantage.services.formatting import format_bytes, format_metric, format_signed_bytes

_STATUS_STYLE: dict[ThresholdStatus, str] = {
    ThresholdStatus.PASS: "[green]PASS[/green]",
    ThresholdStatus.WARN: "[yellow]WARN[/yellow]",
    ThresholdStatus.FAIL: "[bold red]FAIL[/bold red]",
}


def _stats_panel(analysis: BundleAnalysis) -> Panel:
    body = (
        f"Total Size: [bold]{format_bytes(analysis.total_size)}[/bold]\n"
        f"Chunks: [bold]{analysis.chunk_count}[/bold]\n"
        f"Modules: [bold]{analysis.total_modules}[/bold]\n"
        f"Duplicate Modules: [bold]{analysis.duplicate_modules}[/bold]\n"
        f"Dead Code Modules: [bold]{analysis.dead_code_modules}[/bold]"
    )
    return Panel(body, title="Bundle Summary", border_style="blue")


def _largest_modules_table(analysis: BundleAnalysis) -> Table:
    table = Table(title="Largest Modules", header_style="bold cyan")
    table.add_column("Module")
    table.add_column("Chunk")
    table.add_column("Size", justify="right")
    table.add_column("Duplicate", justify="center")
    for module in analysis.largest_modules:
        table.add_row(
            escape(module.name),
            escape(module.path),
            format_bytes(module.size),
            "yes" if module.is_duplicate else "",
        )
    return table


def render_bundle_summary(console: Console, analysis: BundleAnalysis) -> None:
    console.print(_stats_panel(analysis))
    if analysis.largest_modules:
        console.print(_largest_modules_table(analysis))


def render_bundle_diff(console: Console, diff: BundleDiff) -> None:
    table = Table(title="Bundle Size Changes", header_style="bold magenta")
    table.add_column("Chunk")
    table.add_column("Change", justify="center")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    table.add_column("Delta", justify="right")

    for item in diff.modified_chunks:
        style = "red" if item.size_delta > 0 else "green"
        table.add_row(
            escape(item.chunk.name),
            "modified",
            format_bytes(item.old_size),
            format_bytes(item.new_size),
            f"[{style}]{format_signed_bytes(item.size_delta)}[/{style}]",
        )
    for chunk in diff.added_chunks:
        table.add_row(escape(chunk.name), "added", "-", format_bytes(chunk.size), format_signed_bytes(chunk.size))
    for chunk in diff.removed_chunks:
        table.add_row(escape(chunk.name), "removed", format_bytes(chunk.size), "-", format_signed_bytes(-chunk.size))

    if diff.has_changes:
        console.print(table)
    console.print(f"Total Change: [bold]{format_signed_bytes(diff.total_size_change)}[/bold]")


def render_budgets(console: Console, results: Sequence[BudgetResult]) -> None:
    table = Table(title="Budget Check", header_style="bold yellow")
    table.add_column("Pattern")
    table.add_column("Current", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Status", justify="center")
    for result in results:
        status = ThresholdStatus.FAIL if result.exceeds else ThresholdStatus.PASS
        table.add_row(
            escape(result.path),
            format_bytes(result.current_size),
            format_bytes(result.max_size),
            _STATUS_STYLE[status],
        )
    console.print(table)


def render_metric_checks(console: Console, checks: Sequence[MetricCheck]) -> None:
    table = Table(title="Performance Metrics", header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Route")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")
    for check in checks:
        table.add_row(
            check.metric.label,
            escape(check.route),
            format_metric(check.value, check.metric),
            _STATUS_STYLE[check.result.status],
        )
    console.print(table)
    for check in checks:
        if check.result.message:
            console.print(f"  [red]{escape(check.result.message)}[/red]")
