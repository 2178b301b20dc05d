"""Series queries: pure read-only projections over a ledger snapshot.

A series is the time-ordered sequence of values for one ``(tool, name)``
pair within a group.  Storage order is append order, which can differ
from ``date`` order when CI clocks skew, so every query sorts by ``date``
itself.  Ties keep append order.

No unit conversion is performed.  Mixing units for one ``(tool, name)``
pair across the ledger is not detected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from benchledger.core.errors import NotFoundError
from benchledger.models.ledger import Ledger
from benchledger.models.series import SeriesPoint

if TYPE_CHECKING:
    from benchledger.core.ledger_store import LedgerStore


def query_series(
    ledger: Ledger,
    group: str,
    tool: str,
    bench_name: str,
    *,
    distinct_only: bool = False,
) -> tuple[SeriesPoint, ...]:
    """Return the trend for *bench_name* under *tool*, oldest first.

    Parameters
    ----------
    ledger:
        The snapshot to read.
    group:
        Stream key, e.g. ``"Benchmark"``.  An unknown group yields an
        empty series.
    tool, bench_name:
        The compound series key.
    distinct_only:
        Skip entries whose commit is not ``distinct`` (merge fan-in).

    Returns
    -------
    tuple[SeriesPoint, ...]
        Sorted ascending by ``date``; empty when nothing matches.
    """
    points: list[SeriesPoint] = []
    for entry in ledger.group(group):
        if entry.tool != tool:
            continue
        if distinct_only and not entry.commit.distinct:
            continue
        measurement = entry.bench(bench_name)
        if measurement is None:
            continue
        points.append(
            SeriesPoint(
                date=entry.date,
                value=measurement.value,
                unit=measurement.unit,
                commit_id=entry.commit.id,
                extra=measurement.extra,
            )
        )
    # list.sort is stable: equal dates keep append order
    points.sort(key=lambda point: point.date)
    return tuple(points)


def list_benchmark_names(ledger: Ledger, group: str, tool: str) -> tuple[str, ...]:
    """Distinct measurement names for *group*/*tool*, in first-seen order."""
    names: dict[str, None] = {}
    for entry in ledger.group(group):
        if entry.tool != tool:
            continue
        for measurement in entry.benches:
            names.setdefault(measurement.name, None)
    return tuple(names)


def list_tools(ledger: Ledger, group: str) -> tuple[str, ...]:
    """Distinct tools recorded in *group*, in first-seen order."""
    tools: dict[str, None] = {}
    for entry in ledger.group(group):
        tools.setdefault(entry.tool, None)
    return tuple(tools)


def latest_point(ledger: Ledger, group: str, tool: str, bench_name: str) -> SeriesPoint:
    """The most recent point by ``date``; the last appended wins a tie.

    Raises ``NotFoundError`` if the series is empty.
    """
    series = query_series(ledger, group, tool, bench_name)
    if not series:
        raise NotFoundError(
            f"No data for benchmark {bench_name!r} (tool {tool!r}) in group {group!r}"
        )
    return series[-1]


class SeriesProjection:
    """Read-only query facade over a ``LedgerStore``.

    This class NEVER stores ledger state.  Every method takes the store's
    current snapshot, so results reflect either the pre- or post-append
    ledger, never a mixture.
    """

    def __init__(self, store: LedgerStore) -> None:
        self._store = store

    def series(
        self, group: str, tool: str, bench_name: str, *, distinct_only: bool = False
    ) -> tuple[SeriesPoint, ...]:
        return query_series(
            self._store.snapshot(), group, tool, bench_name, distinct_only=distinct_only
        )

    def benchmark_names(self, group: str, tool: str) -> tuple[str, ...]:
        return list_benchmark_names(self._store.snapshot(), group, tool)

    def tools(self, group: str) -> tuple[str, ...]:
        return list_tools(self._store.snapshot(), group)

    def latest(self, group: str, tool: str, bench_name: str) -> SeriesPoint:
        return latest_point(self._store.snapshot(), group, tool, bench_name)

    def all_series(self, group: str, tool: str) -> dict[str, tuple[SeriesPoint, ...]]:
        """Every series for *group*/*tool*, keyed by benchmark name.

        Reads one snapshot so all series are mutually consistent.
        """
        ledger = self._store.snapshot()
        return {
            name: query_series(ledger, group, tool, name)
            for name in list_benchmark_names(ledger, group, tool)
        }
