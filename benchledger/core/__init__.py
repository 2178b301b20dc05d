"""Ledger store, series queries and harness converters."""

from benchledger.core.errors import (
    DuplicateCommitError,
    LedgerError,
    MalformedLedgerError,
    NotFoundError,
    ValidationError,
)
from benchledger.core.ledger_store import LedgerStore, load_ledger, serialize_ledger
from benchledger.core.series import (
    SeriesProjection,
    latest_point,
    list_benchmark_names,
    list_tools,
    query_series,
)

__all__ = [
    # errors
    "LedgerError",
    "ValidationError",
    "DuplicateCommitError",
    "MalformedLedgerError",
    "NotFoundError",
    # store
    "LedgerStore",
    "load_ledger",
    "serialize_ledger",
    # queries
    "SeriesProjection",
    "query_series",
    "list_benchmark_names",
    "list_tools",
    "latest_point",
]
