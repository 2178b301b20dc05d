"""Error taxonomy for the benchmark ledger.

- ``ValidationError``: malformed Entry content; the caller must fix input.
- ``DuplicateCommitError``: ``(commit.id, tool)`` already recorded in a group.
- ``MalformedLedgerError``: corrupt or incompatible persisted form.
- ``NotFoundError``: a query that needs at least one point found none.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all benchledger errors."""


class ValidationError(LedgerError, ValueError):
    """Raised when an Entry is rejected by ``LedgerStore.append``."""


class DuplicateCommitError(LedgerError):
    """Raised when an Entry for the same commit and tool already exists.

    Re-runs of CI for the same commit/tool pair are rejected, not merged.
    """

    def __init__(self, group: str, commit_id: str, tool: str) -> None:
        self.group = group
        self.commit_id = commit_id
        self.tool = tool
        super().__init__(
            f"Group {group!r} already has an entry for commit {commit_id!r} "
            f"with tool {tool!r}"
        )


class MalformedLedgerError(LedgerError):
    """Raised when a persisted ledger cannot be loaded.

    No partial ledger is ever returned alongside this error.
    """


class NotFoundError(LedgerError, LookupError):
    """Raised when a series has no points."""
