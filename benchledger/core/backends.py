"""Byte-level storage backends for the ledger store.

All backends implement the ``LedgerBackend`` protocol: a ``backend_name``
property, ``read_bytes()`` returning ``None`` when nothing has been
written yet, and ``write_bytes(data)``.  The store never opens files
itself; it only talks to a backend.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class LedgerBackend(Protocol):
    """Protocol that every ledger backend must implement."""

    @property
    def backend_name(self) -> str:
        """Return a human-readable identifier for this backend."""
        ...

    def read_bytes(self) -> bytes | None:
        """Return the persisted ledger, or None if none exists yet."""
        ...

    def write_bytes(self, data: bytes) -> None:
        """Replace the persisted ledger with *data*."""
        ...


class FileBackend:
    """Stores the ledger in a single file.

    Writes go to a sibling temp file which then replaces the target, so a
    reader of the file never sees a half-written ledger.

    Parameters
    ----------
    path:
        Target file, e.g. ``dev/bench/data.js``.  Parent directories are
        created on first write.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def backend_name(self) -> str:
        return f"file:{self._path}"

    @property
    def path(self) -> Path:
        return self._path

    def read_bytes(self) -> bytes | None:
        if not self._path.exists():
            return None
        return self._path.read_bytes()

    def write_bytes(self, data: bytes) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(f".{self._path.name}.tmp")
        tmp.write_bytes(data)
        os.replace(tmp, self._path)
        logger.debug("FileBackend: wrote %d bytes to %s", len(data), self._path)


class MemoryBackend:
    """Volatile in-memory backend, suitable for tests."""

    def __init__(self, data: bytes | None = None) -> None:
        self._data = data
        self.write_count = 0

    @property
    def backend_name(self) -> str:
        return "memory"

    def read_bytes(self) -> bytes | None:
        return self._data

    def write_bytes(self, data: bytes) -> None:
        self._data = bytes(data)
        self.write_count += 1
