"""Benchmark ledger models (append-only, one Entry per CI run).

The ledger is the source of truth for the benchmark history feed:
- Append-only (entries never change once written)
- Grouped (entries live under a stream key such as "Benchmark")
- Commit-keyed (each entry is attributed to one source revision)

Python attributes are snake_case; the persisted camelCase names are kept
as aliases so ``model_dump(by_alias=True)`` reproduces the published shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Person(BaseModel):
    """Author or committer of a revision. Display-only."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    email: str = ""
    name: str = ""
    username: str = ""


class CommitInfo(BaseModel):
    """The source revision an Entry is attributed to."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    author: Person = Person()
    committer: Person = Person()
    distinct: bool = True  # False for merge fan-in duplicates
    id: str
    message: str = ""
    timestamp: str = ""  # ISO-8601 author time, not used for ordering
    tree_id: str = ""
    url: str = ""


class Measurement(BaseModel):
    """A single named timing result within an Entry."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    value: float = Field(strict=True)  # JSON true must not become 1.0
    unit: str = ""
    extra: str = ""


class Entry(BaseModel):
    """One recorded CI run: one commit, N benchmark results.

    ``date`` is the measurement time in epoch millis.  It is independent
    of ``commit.timestamp`` and is the only field series ordering uses.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    commit: CommitInfo
    date: int = Field(strict=True)
    tool: str
    benches: tuple[Measurement, ...] = ()

    def bench(self, name: str) -> Measurement | None:
        """Return the measurement called *name*, or None."""
        for measurement in self.benches:
            if measurement.name == name:
                return measurement
        return None


class Ledger(BaseModel):
    """Top-level persisted object: metadata plus grouped entry streams.

    Instances are snapshots.  The store replaces the whole value on
    append.  ``entries`` is a read-only mapping of tuples, so a snapshot
    handed to a reader cannot be edited in place.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    last_update: int = Field(default=0, alias="lastUpdate")
    repo_url: str = Field(default="", alias="repoUrl")
    entries: Mapping[str, tuple[Entry, ...]] = Field(
        default_factory=lambda: MappingProxyType({})
    )

    @field_validator("entries", mode="after")
    @classmethod
    def freeze_entries(
        cls, value: Mapping[str, tuple[Entry, ...]]
    ) -> Mapping[str, tuple[Entry, ...]]:
        return MappingProxyType(dict(value))

    @field_serializer("entries", mode="wrap")
    def dump_entries(self, value: Mapping[str, tuple[Entry, ...]], handler: Any) -> Any:
        return handler(dict(value))

    def group(self, name: str) -> tuple[Entry, ...]:
        """Entries of *name* in append order; empty for an unknown group."""
        return self.entries.get(name, ())
