"""benchledger CLI: Typer-based command-line interface.

Provides the ``benchledger`` command with subcommands for creating a
ledger, recording CI runs and querying benchmark trends.

All output uses Rich for formatted terminal display.
"""
