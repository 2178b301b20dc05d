"""Main Typer application: imports and registers all CLI commands.

Entry point: ``benchledger`` (configured via pyproject.toml scripts).

Commands: init, append, import-gbench, series, names, latest, show.
"""

from __future__ import annotations

import logging

import typer

from benchledger.cli._common import get_settings
from benchledger.cli.commands.append import append_cmd, import_gbench_cmd
from benchledger.cli.commands.init import init_cmd
from benchledger.cli.commands.query import latest_cmd, names_cmd, series_cmd, show_cmd

app = typer.Typer(
    name="benchledger",
    help="benchledger: append-only benchmark history and per-benchmark trends.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging from the environment before any command runs."""
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="init", help="Create an empty ledger file.")(init_cmd)
app.command(name="append", help="Append one Entry from a JSON file.")(append_cmd)
app.command(name="import-gbench", help="Append Google Benchmark output as an Entry.")(
    import_gbench_cmd
)
app.command(name="series", help="Show the time series of one benchmark.")(series_cmd)
app.command(name="names", help="List benchmark names for a tool.")(names_cmd)
app.command(name="latest", help="Show the latest point of one benchmark.")(latest_cmd)
app.command(name="show", help="Summarize the ledger.")(show_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
