from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from people_cache.load.report import LoadTestReport


def _format_mb(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    return f"{value / (1024 * 1024):.2f}"


def build_summary_table(report: LoadTestReport) -> Table:
    """
    Build the one-row summary table of a load-test run.
    """
    table = Table(
        title=f"Load Test Results\n[dim]{report.url}[/dim]",
        box=box.ROUNDED,
        caption="Latency over successful requests",
    )

    table.add_column("Clients", justify="right", style="cyan")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Requests", justify="right", style="magenta")
    table.add_column("Succeeded", justify="right", style="bold green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Req/s", justify="right", style="bold green")
    table.add_column("p50 (ms)", justify="right", style="yellow")
    table.add_column("p95 (ms)", justify="right", style="yellow")
    table.add_column("p99 (ms)", justify="right", style="yellow")
    table.add_column("Peak Memory (MB)", justify="right", style="blue")

    latency = report.latency_summary()

    def _latency(key: str) -> str:
        return f"{latency[key]:,.1f}" if key in latency else "N/A"

    table.add_row(
        str(report.clients),
        f"{report.elapsed_seconds:.1f}",
        f"{report.total:,}",
        f"{report.succeeded:,}",
        f"{report.failed:,}",
        f"{report.requests_per_second:,.2f}",
        _latency("p50"),
        _latency("p95"),
        _latency("p99"),
        _format_mb(report.profile.peak_rss_bytes if report.profile else None),
    )
    return table


def build_errors_table(report: LoadTestReport, limit: int = 10) -> Optional[Table]:
    """
    Build a table of the most frequent failure details, or None without failures.
    """
    errors = report.errors()
    if not errors:
        return None

    table = Table(title="Failures", box=box.ROUNDED)
    table.add_column("Error", style="red")
    table.add_column("Count", justify="right", style="magenta")
    for detail, count in list(errors.items())[:limit]:
        table.add_row(detail or "unknown", f"{count:,}")
    return table


def print_report(report: LoadTestReport, console: Optional[Console] = None) -> None:
    """
    Render a load-test report as rich tables.
    """
    console = console or Console()

    if not report.outcomes:
        console.print("[yellow]No requests completed before the deadline.[/yellow]")
        return

    console.print(build_summary_table(report))
    errors_table = build_errors_table(report)
    if errors_table is not None:
        console.print(errors_table)


__all__ = ["build_errors_table", "build_summary_table", "print_report"]
