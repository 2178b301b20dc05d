"""benchledger data models: all Pydantic v2, all frozen (immutable)."""

from benchledger.models.ledger import CommitInfo, Entry, Ledger, Measurement, Person
from benchledger.models.series import SeriesPoint

__all__ = [
    # ledger
    "Person",
    "CommitInfo",
    "Measurement",
    "Entry",
    "Ledger",
    # series
    "SeriesPoint",
]
