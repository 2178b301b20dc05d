"""Append-only benchmark ledger store.

The ledger is the source of truth for the benchmark history feed.  The
series queries are projections of it; they never write.

Design:
- Append-only: only ``append()`` writes; no update, no delete.
- Snapshots: every append builds a new frozen ``Ledger`` and swaps it in
  under the writer lock.  Readers take the current snapshot without
  locking and never observe a partially written entry.
- Idempotency: ``(commit.id, tool)`` is unique within a group; CI re-runs
  are rejected with ``DuplicateCommitError``.
- Persistence goes through a ``LedgerBackend``; the persisted form is the
  JSON document published as ``window.BENCHMARK_DATA`` on the site.
"""

from __future__ import annotations

import json
import logging
import math
import re
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from benchledger.core.backends import LedgerBackend
from benchledger.core.errors import (
    DuplicateCommitError,
    MalformedLedgerError,
    ValidationError,
)
from benchledger.models.ledger import Entry, Ledger

logger = logging.getLogger(__name__)

SCRIPT_PREFIX = "window.BENCHMARK_DATA = "

# Largest epoch-millis date the published feed can hold exactly (JS safe integer).
MAX_DATE_MS = 2**53 - 1

_SCRIPT_WRAPPER = re.compile(
    r"^\s*window\.BENCHMARK_DATA\s*=\s*(?P<body>.*?)\s*;?\s*$", re.DOTALL
)


# ---------------------------------------------------------------------------
# Persisted form
# ---------------------------------------------------------------------------


def load_ledger(source: bytes | str) -> Ledger:
    """Parse a persisted ledger.

    Accepts bare JSON or the ``window.BENCHMARK_DATA = {...}`` script form.
    Unknown fields are ignored.  Raises ``MalformedLedgerError`` if the
    document is not JSON or its top-level shape is violated.
    """
    if isinstance(source, bytes):
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedLedgerError(f"Ledger is not valid UTF-8: {exc}") from exc
    else:
        text = source

    match = _SCRIPT_WRAPPER.match(text)
    if match:
        text = match.group("body")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedLedgerError(f"Ledger is not valid JSON: {exc}") from exc

    _check_shape(data)
    if not _is_utf8_encodable(data):
        raise MalformedLedgerError("Ledger contains text that cannot be encoded as UTF-8")

    try:
        ledger = Ledger.model_validate(data)
    except PydanticValidationError as exc:
        raise MalformedLedgerError(f"Ledger does not match schema: {exc}") from exc

    logger.debug(
        "Loaded ledger with %d group(s), lastUpdate=%d",
        len(ledger.entries),
        ledger.last_update,
    )
    return ledger


def _check_shape(data: Any) -> None:
    """Check the top-level layout before handing off to the models."""
    if not isinstance(data, dict):
        raise MalformedLedgerError(
            f"Ledger root must be an object, got {type(data).__name__}"
        )
    entries = data.get("entries")
    if not isinstance(entries, dict):
        raise MalformedLedgerError("Ledger is missing the 'entries' mapping")
    for group, items in entries.items():
        if not isinstance(items, list):
            raise MalformedLedgerError(
                f"Group {group!r} must be an array, got {type(items).__name__}"
            )
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise MalformedLedgerError(
                    f"Entry {index} of group {group!r} must be an object"
                )


def _is_utf8_encodable(data: Any) -> bool:
    """Whether *data* can be written out as UTF-8 JSON (no lone surrogates)."""
    try:
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def serialize_ledger(ledger: Ledger, *, script: bool = False) -> bytes:
    """Produce the persisted form of *ledger* as UTF-8 bytes.

    Floats are written with their shortest round-trip representation, so
    ``load_ledger(serialize_ledger(x)) == x`` for every ledger.
    """
    data = ledger.model_dump(mode="json", by_alias=True)
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if script:
        text = SCRIPT_PREFIX + text
    return (text + "\n").encode("utf-8")


# ---------------------------------------------------------------------------
# Entry validation
# ---------------------------------------------------------------------------


def coerce_entry(entry: Entry | Mapping[str, Any]) -> Entry:
    """Return *entry* as an ``Entry``, parsing mappings in persisted shape."""
    if isinstance(entry, Entry):
        return entry
    try:
        return Entry.model_validate(entry)
    except PydanticValidationError as exc:
        raise ValidationError(f"Malformed entry: {exc}") from exc


def validate_entry(entry: Entry) -> None:
    """Check the content rules an Entry must satisfy to be appended.

    Raises
    ------
    ValidationError
        Empty commit id, date outside ``0..MAX_DATE_MS``, non-finite value,
        a measurement name repeated within ``benches``, or text that
        cannot be encoded as UTF-8.
    """
    if not entry.commit.id or not entry.commit.id.strip():
        raise ValidationError("Entry commit id must be non-empty")

    if not 0 <= entry.date <= MAX_DATE_MS:
        raise ValidationError(
            f"Entry date must be between 0 and {MAX_DATE_MS} epoch millis, "
            f"got {entry.date!r}"
        )

    seen: set[str] = set()
    for measurement in entry.benches:
        if measurement.name in seen:
            raise ValidationError(
                f"Duplicate measurement name {measurement.name!r} "
                f"in entry for commit {entry.commit.id!r}"
            )
        seen.add(measurement.name)
        if not math.isfinite(measurement.value):
            raise ValidationError(
                f"Measurement {measurement.name!r} has non-finite value "
                f"{measurement.value!r}"
            )

    if not _is_utf8_encodable(entry.model_dump()):
        raise ValidationError(
            f"Entry for commit {entry.commit.id!r} contains text that cannot be "
            "encoded as UTF-8"
        )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class LedgerStore:
    """Single-writer, multi-reader owner of a benchmark ledger.

    Parameters
    ----------
    ledger:
        Initial snapshot.  An empty ledger is created if not provided.
    backend:
        Optional persistence primitive.  When set, every successful
        append is written through it before the new snapshot is published.
    script:
        Persist in ``window.BENCHMARK_DATA = ...`` script form.
    """

    def __init__(
        self,
        ledger: Ledger | None = None,
        *,
        backend: LedgerBackend | None = None,
        script: bool = False,
    ) -> None:
        self._ledger = ledger if ledger is not None else Ledger()
        self._backend = backend
        self._script = script
        self._write_lock = threading.Lock()

    @classmethod
    def load(cls, source: bytes | str, **kwargs: Any) -> LedgerStore:
        """Create a store from a persisted ledger."""
        return cls(load_ledger(source), **kwargs)

    @classmethod
    def open(
        cls,
        backend: LedgerBackend,
        *,
        repo_url: str = "",
        script: bool = False,
    ) -> LedgerStore:
        """Load the ledger held by *backend*, or start an empty one."""
        data = backend.read_bytes()
        if data is None:
            logger.info("No ledger at %s; starting empty", backend.backend_name)
            ledger = Ledger(repo_url=repo_url)
        else:
            ledger = load_ledger(data)
        return cls(ledger, backend=backend, script=script)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def snapshot(self) -> Ledger:
        """Return the current immutable ledger snapshot."""
        return self._ledger

    @property
    def last_update(self) -> int:
        return self._ledger.last_update

    @property
    def repo_url(self) -> str:
        return self._ledger.repo_url

    def groups(self) -> tuple[str, ...]:
        """Group keys in first-created order."""
        return tuple(self._ledger.entries)

    def entries(self, group: str) -> tuple[Entry, ...]:
        """Entries of *group* in append order."""
        return self._ledger.group(group)

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(
        self,
        group: str,
        entry: Entry | Mapping[str, Any],
        *,
        now_ms: int | None = None,
    ) -> Ledger:
        """Append *entry* to *group* and return the new snapshot.

        ``lastUpdate`` becomes ``max(lastUpdate, entry.date, now_ms)``.
        This is the ONLY write method.  On any error the current snapshot
        is left untouched.
        """
        try:
            if not _is_utf8_encodable(group):
                raise ValidationError("Group key cannot be encoded as UTF-8")
            entry = coerce_entry(entry)
            validate_entry(entry)
        except ValidationError as exc:
            logger.warning("Rejected entry for group %r: %s", group, exc)
            raise

        with self._write_lock:
            current = self._ledger
            existing = current.group(group)
            for recorded in existing:
                if recorded.commit.id == entry.commit.id and recorded.tool == entry.tool:
                    logger.warning(
                        "Rejected duplicate entry: group=%r commit=%s tool=%s",
                        group,
                        entry.commit.id,
                        entry.tool,
                    )
                    raise DuplicateCommitError(group, entry.commit.id, entry.tool)

            entries = dict(current.entries)
            entries[group] = existing + (entry,)
            entries = MappingProxyType(entries)
            last_update = max(current.last_update, entry.date, now_ms or 0)
            updated = current.model_copy(
                update={"entries": entries, "last_update": last_update}
            )

            if self._backend is not None:
                self._backend.write_bytes(
                    serialize_ledger(updated, script=self._script)
                )

            self._ledger = updated

        logger.info(
            "Appended entry: group=%r commit=%s tool=%s benches=%d",
            group,
            entry.commit.id,
            entry.tool,
            len(entry.benches),
        )
        return updated

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def serialize(self, *, script: bool | None = None) -> bytes:
        """Persisted form of the current snapshot."""
        return serialize_ledger(
            self._ledger, script=self._script if script is None else script
        )

    def save(self) -> None:
        """Write the current snapshot through the backend."""
        if self._backend is None:
            raise RuntimeError("LedgerStore has no backend to save to")
        with self._write_lock:
            self._backend.write_bytes(self.serialize())
        logger.debug("Saved ledger to %s", self._backend.backend_name)
