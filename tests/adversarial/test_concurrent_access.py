"""Adversarial tests: one writer, many readers.

Readers must only ever observe whole snapshots: every entry they see is
complete and ``lastUpdate`` covers every visible entry.
"""

from __future__ import annotations

import threading

import pytest

from benchledger.core.errors import DuplicateCommitError
from benchledger.core.ledger_store import LedgerStore
from benchledger.core.series import SeriesProjection


class TestConcurrentAccess:
    def test_readers_see_consistent_snapshots(self, store: LedgerStore, make_entry):
        projection = SeriesProjection(store)
        stop = threading.Event()
        problems: list[str] = []

        def reader() -> None:
            while not stop.is_set():
                snapshot = store.snapshot()
                entries = snapshot.group("g")
                for entry in entries:
                    if len(entry.benches) != 2:
                        problems.append(f"partial entry {entry.commit.id}")
                    if entry.date > snapshot.last_update:
                        problems.append("lastUpdate behind entry date")
                points = projection.series("g", "googlecpp", "a")
                dates = [p.date for p in points]
                if dates != sorted(dates):
                    problems.append("unsorted series")

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for thread in readers:
            thread.start()
        try:
            for i in range(200):
                store.append(
                    "g",
                    make_entry(f"c{i}", (i * 7919) % 1000 + 1, benches=[("a", 1.0), ("b", 2.0)]),
                )
        finally:
            stop.set()
            for thread in readers:
                thread.join()

        assert problems == []
        assert len(store.entries("g")) == 200

    def test_racing_duplicate_appends(self, store: LedgerStore, make_entry):
        """Exactly one of many concurrent appends of the same commit wins."""
        barrier = threading.Barrier(8)
        outcomes: list[str] = []
        lock = threading.Lock()

        def writer() -> None:
            barrier.wait()
            try:
                store.append("g", make_entry("same", 1000))
                result = "ok"
            except DuplicateCommitError:
                result = "dup"
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=writer) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("dup") == 7
        assert len(store.entries("g")) == 1

    @pytest.mark.parametrize("count", [50])
    def test_last_update_monotonic_under_threads(self, store: LedgerStore, make_entry, count):
        def writer(offset: int) -> None:
            for i in range(count):
                store.append("g", make_entry(f"w{offset}-{i}", (i * 31 + offset) % 500))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.last_update == max(entry.date for entry in store.entries("g"))
