"""Subcommands of the ``benchledger`` CLI."""
