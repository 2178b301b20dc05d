"""``benchledger append`` and ``benchledger import-gbench``: record CI runs.

Both commands append exactly one Entry per invocation.  Re-running for a
commit/tool pair already in the group fails with exit code 1.
"""

from __future__ import annotations

import time
from pathlib import Path

import typer

from benchledger.cli._common import console, fail, get_settings, open_store, read_json
from benchledger.core.errors import LedgerError
from benchledger.core.harness import build_entry, measurements_from_googlecpp
from benchledger.core.ledger_store import LedgerStore
from benchledger.models.ledger import Entry


def _append(store: LedgerStore, group: str, entry: Entry | dict) -> Entry:
    try:
        ledger = store.append(group, entry, now_ms=int(time.time() * 1000))
    except LedgerError as exc:
        raise fail(str(exc))
    except OSError as exc:
        raise fail(f"Cannot write ledger: {exc}")
    return ledger.group(group)[-1]


def _report(group: str, entry: Entry) -> None:
    console.print(
        f"[green]Appended[/green] {len(entry.benches)} measurement(s) "
        f"for commit [yellow]{entry.commit.id[:8]}[/yellow] "
        f"({entry.tool}) to [cyan]{group}[/cyan]"
    )


def append_cmd(
    entry_file: Path = typer.Argument(
        ..., help="JSON file holding one Entry in persisted shape."
    ),
    group: str = typer.Option(None, "--group", "-g", help="Group to append to."),
    ledger_path: Path = typer.Option(
        None, "--ledger", "-l", help="Path to the ledger file."
    ),
) -> None:
    """Append one Entry to the ledger."""
    settings = get_settings()
    group = group or settings.default_group
    store = open_store(ledger_path)
    entry = _append(store, group, read_json(entry_file))
    _report(group, entry)


def import_gbench_cmd(
    gbench_file: Path = typer.Argument(
        ..., help="Google Benchmark JSON output (--benchmark_format=json)."
    ),
    commit_file: Path = typer.Option(
        ..., "--commit", "-c", help="JSON file describing the commit."
    ),
    date: int = typer.Option(
        None, "--date", help="Measurement time in epoch millis (default: now)."
    ),
    tool: str = typer.Option(None, "--tool", "-t", help="Harness name."),
    group: str = typer.Option(None, "--group", "-g", help="Group to append to."),
    ledger_path: Path = typer.Option(
        None, "--ledger", "-l", help="Path to the ledger file."
    ),
) -> None:
    """Convert Google Benchmark output and append it as one Entry."""
    settings = get_settings()
    group = group or settings.default_group
    store = open_store(ledger_path)
    try:
        benches = measurements_from_googlecpp(read_json(gbench_file))
        entry = build_entry(
            read_json(commit_file), tool or settings.default_tool, benches, date
        )
    except LedgerError as exc:
        raise fail(str(exc))
    _report(group, _append(store, group, entry))
