"""Bounded linear undo/redo log of full document snapshots.

Each commit stores an independent deep copy of the document; undo and
redo hand back fresh copies, so neither the live document nor anything a
caller does with a restored copy can reach a stored entry.  Memory is
bounded by ``capacity x layers x size**2`` cells.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pixel_studio.config import MAX_HISTORY
from pixel_studio.errors import InvalidArgument
from pixel_studio.models.document import Document


log = structlog.get_logger()


@dataclass(frozen=True)
class HistoryEntry:
    """One committed point in time."""

    document: Document
    label: str = ""

    def restore(self) -> Document:
        return self.document.copy()


class HistoryStack:
    """Linear undo/redo with a fixed capacity.

    Committing after an undo discards the redo branch.  When the log is
    full the oldest entry is evicted and the cursor shifts down with it.
    """

    def __init__(self, capacity: int = MAX_HISTORY) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidArgument(f"History capacity must be >= 1, got {capacity!r}")
        self.capacity = capacity
        self._entries: list[HistoryEntry] = []
        self._cursor = -1

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def init(self, doc: Document) -> None:
        """Reset to a single entry holding *doc*."""
        self._entries = [HistoryEntry(doc.copy(), "init")]
        self._cursor = 0

    def commit(self, doc: Document, label: str = "") -> None:
        if not self._entries:
            self.init(doc)
            return

        del self._entries[self._cursor + 1:]
        self._entries.append(HistoryEntry(doc.copy(), label))
        evicted = 0
        while len(self._entries) > self.capacity:
            self._entries.pop(0)
            evicted += 1
        self._cursor = len(self._entries) - 1

        log.debug(
            "history_commit",
            label=label,
            cursor=self._cursor,
            entries=len(self._entries),
            evicted=evicted,
        )

    def undo(self) -> Document | None:
        """Step back one entry; ``None`` if already at the oldest."""
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor].restore()

    def redo(self) -> Document | None:
        """Step forward one entry; ``None`` if already at the newest."""
        if self._cursor < 0 or self._cursor >= len(self._entries) - 1:
            return None
        self._cursor += 1
        return self._entries[self._cursor].restore()

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    def current(self) -> Document | None:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor].restore()

    def labels(self) -> list[str]:
        return [entry.label for entry in self._entries]

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def get_stats(self) -> dict:
        return {
            "entries": len(self._entries),
            "cursor": self._cursor,
            "capacity": self.capacity,
            "full": len(self._entries) >= self.capacity,
        }

    def __len__(self) -> int:
        return len(self._entries)
