"""benchledger: append-only benchmark history for a project website.

Records one Entry per CI run (one commit, N timing measurements) and
answers per-benchmark trend queries for charting:
  - Append-only ledger with snapshot swaps (single writer, many readers)
  - Idempotent on (commit id, tool) within a group
  - JSON / ``window.BENCHMARK_DATA`` persisted form, lossless round-trip
  - Series, benchmark-name and latest-point queries sorted by run date
  - Google Benchmark JSON import
"""

__version__ = "0.1.0"
__description__ = "Append-only benchmark history ledger with trend queries"

from benchledger.core.ledger_store import LedgerStore
from benchledger.core.series import SeriesProjection

__all__ = ["LedgerStore", "SeriesProjection", "__version__"]
