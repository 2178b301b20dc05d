"""Rich terminal renderer for benchmark series.

Turns query results into Rich renderables.  The renderer only receives
plain data (points, names, snapshots); it never calls back into the store.

Change column color scheme
--------------------------
- green : faster than the previous point
- red   : slower than the previous point
- dim   : first point or unchanged
"""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from benchledger.models.ledger import Ledger
from benchledger.models.series import SeriesPoint


def _format_date(epoch_ms: int) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def _format_change(previous: SeriesPoint | None, point: SeriesPoint) -> str:
    if previous is None or previous.value == 0:
        return "[dim]-[/dim]"
    change = (point.value - previous.value) / previous.value * 100
    if change < 0:
        return f"[green]{change:+.2f}%[/green]"
    if change > 0:
        return f"[red]{change:+.2f}%[/red]"
    return "[dim]0.00%[/dim]"


class SeriesRenderer:
    """Renders benchmark query results as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_series(
        self, bench_name: str, tool: str, points: tuple[SeriesPoint, ...]
    ) -> Panel:
        """Render one series as a Panel with a row per point."""
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("#", style="dim", width=3, justify="right")
        table.add_column("Date", min_width=23, no_wrap=True)
        table.add_column("Commit", style="yellow", width=8)
        table.add_column("Value", justify="right", no_wrap=True)
        table.add_column("Unit")
        table.add_column("Change", justify="right")

        previous: SeriesPoint | None = None
        for index, point in enumerate(points):
            table.add_row(
                str(index),
                _format_date(point.date),
                point.commit_id[:8],
                f"{point.value:,.2f}",
                point.unit,
                _format_change(previous, point),
            )
            previous = point

        if not points:
            body: Table | Group = Group(table, Text.from_markup("[dim]No data yet.[/dim]"))
        else:
            body = table

        return Panel(
            body,
            title=f"[bold]{bench_name}[/bold]",
            subtitle=f"tool: {tool}  |  points: {len(points)}",
            border_style="blue",
        )

    def render_names(self, group: str, tool: str, names: tuple[str, ...]) -> Table:
        table = Table(title=f"Benchmarks in {group} ({tool})", header_style="bold cyan")
        table.add_column("Name", style="cyan")
        for name in names:
            table.add_row(name)
        return table

    def render_latest(self, bench_name: str, point: SeriesPoint) -> Panel:
        lines = [
            f"[bold]Value:[/bold] {point.value:,.2f} {point.unit}",
            f"[bold]Date:[/bold] {_format_date(point.date)}",
            f"[bold]Commit:[/bold] {point.commit_id}",
        ]
        if point.extra:
            lines.append("")
            lines.append(f"[dim]{point.extra}[/dim]")
        return Panel(
            Text.from_markup("\n".join(lines)),
            title=f"[bold]Latest: {bench_name}[/bold]",
            border_style="green",
        )

    def render_summary(self, ledger: Ledger) -> Panel:
        """Groups, entry counts and tools of a ledger snapshot."""
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Group", style="cyan")
        table.add_column("Entries", justify="right")
        table.add_column("Tools")
        table.add_column("Latest commit", style="yellow")

        for group, entries in ledger.entries.items():
            tools = sorted({entry.tool for entry in entries})
            latest = max(entries, key=lambda entry: entry.date) if entries else None
            table.add_row(
                group,
                str(len(entries)),
                ", ".join(tools) or "[dim]-[/dim]",
                latest.commit.id[:8] if latest else "[dim]-[/dim]",
            )

        subtitle = (
            f"Last updated: {_format_date(ledger.last_update)}"
            if ledger.last_update
            else "Never updated"
        )
        return Panel(
            table,
            title=f"[bold]{ledger.repo_url or 'Benchmark ledger'}[/bold]",
            subtitle=subtitle,
            border_style="blue",
        )

    # ------------------------------------------------------------------
    # Standalone print
    # ------------------------------------------------------------------

    def print_series(self, bench_name: str, tool: str, points: tuple[SeriesPoint, ...]) -> None:
        self.console.print(self.render_series(bench_name, tool, points))

    def print_names(self, group: str, tool: str, names: tuple[str, ...]) -> None:
        if not names:
            self.console.print(f"[dim]No benchmarks recorded for {tool} in {group}.[/dim]")
            return
        self.console.print(self.render_names(group, tool, names))

    def print_latest(self, bench_name: str, point: SeriesPoint) -> None:
        self.console.print(self.render_latest(bench_name, point))

    def print_summary(self, ledger: Ledger) -> None:
        self.console.print(self.render_summary(ledger))
