"""``benchledger init``: create an empty ledger file."""

from __future__ import annotations

from pathlib import Path

import typer

from benchledger.cli._common import console, fail, get_settings
from benchledger.core.backends import FileBackend
from benchledger.core.ledger_store import LedgerStore
from benchledger.models.ledger import Ledger


def init_cmd(
    ledger_path: Path = typer.Option(
        None, "--ledger", "-l", help="Path to the ledger file."
    ),
    repo_url: str = typer.Option(
        None, "--repo-url", help="Source repository recorded in the ledger."
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing ledger."
    ),
) -> None:
    """Create an empty benchmark ledger."""
    settings = get_settings()
    path = Path(ledger_path) if ledger_path else settings.ledger_path
    if path.exists() and not force:
        console.print(f"[bold red]Ledger already exists:[/bold red] {path}")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        raise typer.Exit(code=1)

    store = LedgerStore(
        Ledger(repo_url=repo_url or settings.repo_url),
        backend=FileBackend(path),
        script=settings.script_output,
    )
    try:
        store.save()
    except OSError as exc:
        raise fail(f"Cannot write ledger: {exc}")
    console.print(f"[green]Created empty ledger at {path}[/green]")
