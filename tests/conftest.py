"""Shared test fixtures for benchledger."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from benchledger.core.backends import FileBackend, MemoryBackend
from benchledger.core.ledger_store import LedgerStore
from benchledger.models.ledger import CommitInfo, Entry, Measurement, Person


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for ledger files."""
    return tmp_path


@pytest.fixture
def store() -> LedgerStore:
    """Provide a fresh in-memory LedgerStore with no backend."""
    return LedgerStore()


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def file_backend(tmp_dir: Path) -> FileBackend:
    """Provide a FileBackend pointing at a not-yet-created data.js."""
    return FileBackend(tmp_dir / "dev" / "bench" / "data.js")


@pytest.fixture
def group() -> str:
    return "Benchmark"


# ---------------------------------------------------------------------------
# Entry factories: shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_commit() -> Callable[..., CommitInfo]:
    """Factory fixture: build a CommitInfo with sensible defaults."""

    def _factory(commit_id: str = "c1", **overrides: Any) -> CommitInfo:
        person = Person(name="sam20908", email="sam@example.com", username="sam20908")
        defaults: dict[str, Any] = {
            "id": commit_id,
            "author": person,
            "committer": person,
            "distinct": True,
            "message": f"Commit {commit_id}",
            "timestamp": "2020-12-06T19:13:47-08:00",
            "tree_id": f"tree-{commit_id}",
            "url": f"https://github.com/sam20908/matrixpp/commit/{commit_id}",
        }
        defaults.update(overrides)
        return CommitInfo(**defaults)

    return _factory


@pytest.fixture
def make_entry(make_commit: Callable[..., CommitInfo]) -> Callable[..., Entry]:
    """Factory fixture: build an Entry.

    ``benches`` is a list of ``(name, value)`` pairs or Measurements.
    """

    def _factory(
        commit_id: str = "c1",
        date: int = 1000,
        tool: str = "googlecpp",
        benches: list[Any] | None = None,
        **commit_overrides: Any,
    ) -> Entry:
        measurements = []
        for bench in benches if benches is not None else [("det_5x5", 1080.17)]:
            if isinstance(bench, Measurement):
                measurements.append(bench)
            else:
                name, value = bench
                measurements.append(
                    Measurement(
                        name=name,
                        value=value,
                        unit="ns/iter",
                        extra="iterations: 643476\ncpu: 1080.09 ns\nthreads: 1",
                    )
                )
        return Entry(
            commit=make_commit(commit_id, **commit_overrides),
            date=date,
            tool=tool,
            benches=tuple(measurements),
        )

    return _factory


@pytest.fixture
def entry_dict() -> dict[str, Any]:
    """An Entry in persisted shape, as CI would send it."""
    return {
        "commit": {
            "author": {"email": "sam@example.com", "name": "sam20908", "username": "sam20908"},
            "committer": {"email": "sam@example.com", "name": "sam20908", "username": "sam20908"},
            "distinct": True,
            "id": "97185dca5fd49a784f5a10dce5406ee219d56c43",
            "message": "Fix bench push",
            "timestamp": "2020-12-06T19:13:47-08:00",
            "tree_id": "1ba438a939199dfe3d5299d3af92495962112e7b",
            "url": "https://github.com/sam20908/matrixpp/commit/97185dca",
        },
        "date": 1607310931046,
        "tool": "googlecpp",
        "benches": [
            {
                "name": "determinant_5x5",
                "value": 1080.174335950404,
                "unit": "ns/iter",
                "extra": "iterations: 643476\ncpu: 1080.0893832870227 ns\nthreads: 1",
            }
        ],
    }


@pytest.fixture
def scenario_store(
    store: LedgerStore, group: str, make_entry: Callable[..., Entry]
) -> LedgerStore:
    """Store seeded with entries A (c1) and B (c2)."""
    store.append(group, make_entry("c1", 1000, benches=[("det_5x5", 1080.17)]))
    store.append(
        group,
        make_entry(
            "c2", 2000, benches=[("det_5x5", 991.90), ("det_10x10", 28552861.76)]
        ),
    )
    return store
