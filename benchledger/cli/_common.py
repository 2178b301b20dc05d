"""Helpers shared by the CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from benchledger.config import LedgerSettings
from benchledger.core.backends import FileBackend
from benchledger.core.errors import LedgerError
from benchledger.core.ledger_store import LedgerStore

console = Console()


def get_settings() -> LedgerSettings:
    return LedgerSettings()


def fail(message: str) -> typer.Exit:
    """Print *message* in red and return an Exit to raise."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    return typer.Exit(code=1)


def open_store(ledger_path: Path | None, *, must_exist: bool = True) -> LedgerStore:
    """Open the ledger file, falling back to the configured path."""
    settings = get_settings()
    path = Path(ledger_path) if ledger_path else settings.ledger_path
    if must_exist and not path.exists():
        console.print(f"[bold red]Ledger not found:[/bold red] {path}")
        console.print("[dim]Create one first with: benchledger init[/dim]")
        raise typer.Exit(code=1)
    try:
        return LedgerStore.open(
            FileBackend(path),
            repo_url=settings.repo_url,
            script=settings.script_output,
        )
    except (LedgerError, OSError) as exc:
        raise fail(f"Cannot load {path}: {exc}")


def read_json(path: Path) -> Any:
    """Read a JSON input file, exiting with a message on failure."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise fail(f"File not found: {path}")
    except json.JSONDecodeError as exc:
        raise fail(f"{path} is not valid JSON: {exc}")
