"""Query commands: ``series``, ``names``, ``latest`` and ``show``.

All of them are read-only: they open the ledger, take one snapshot and
render it.
"""

from __future__ import annotations

from pathlib import Path

import typer

from benchledger.cli._common import console, fail, get_settings, open_store
from benchledger.core.errors import NotFoundError
from benchledger.core.series import SeriesProjection
from benchledger.monitor.renderer import SeriesRenderer

_LEDGER_HELP = "Path to the ledger file."


def series_cmd(
    name: str = typer.Argument(..., help="Benchmark name."),
    tool: str = typer.Option(None, "--tool", "-t", help="Harness name."),
    group: str = typer.Option(None, "--group", "-g", help="Group to query."),
    distinct_only: bool = typer.Option(
        False, "--distinct-only", help="Skip non-distinct commits."
    ),
    ledger_path: Path = typer.Option(None, "--ledger", "-l", help=_LEDGER_HELP),
) -> None:
    """Show the time series of one benchmark, oldest first."""
    settings = get_settings()
    tool = tool or settings.default_tool
    projection = SeriesProjection(open_store(ledger_path))
    points = projection.series(
        group or settings.default_group, tool, name, distinct_only=distinct_only
    )
    SeriesRenderer(console=console).print_series(name, tool, points)


def names_cmd(
    tool: str = typer.Option(None, "--tool", "-t", help="Harness name."),
    group: str = typer.Option(None, "--group", "-g", help="Group to query."),
    ledger_path: Path = typer.Option(None, "--ledger", "-l", help=_LEDGER_HELP),
) -> None:
    """List the benchmark names recorded for a tool."""
    settings = get_settings()
    tool = tool or settings.default_tool
    group = group or settings.default_group
    projection = SeriesProjection(open_store(ledger_path))
    SeriesRenderer(console=console).print_names(
        group, tool, projection.benchmark_names(group, tool)
    )


def latest_cmd(
    name: str = typer.Argument(..., help="Benchmark name."),
    tool: str = typer.Option(None, "--tool", "-t", help="Harness name."),
    group: str = typer.Option(None, "--group", "-g", help="Group to query."),
    ledger_path: Path = typer.Option(None, "--ledger", "-l", help=_LEDGER_HELP),
) -> None:
    """Show the most recent measurement of one benchmark."""
    settings = get_settings()
    projection = SeriesProjection(open_store(ledger_path))
    try:
        point = projection.latest(
            group or settings.default_group, tool or settings.default_tool, name
        )
    except NotFoundError as exc:
        raise fail(str(exc))
    SeriesRenderer(console=console).print_latest(name, point)


def show_cmd(
    ledger_path: Path = typer.Option(None, "--ledger", "-l", help=_LEDGER_HELP),
) -> None:
    """Summarize the ledger: groups, entry counts, tools, last update."""
    store = open_store(ledger_path)
    SeriesRenderer(console=console).print_summary(store.snapshot())
