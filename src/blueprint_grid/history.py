"""Bounded undo history for destructive block edits.

Only the block list is snapshotted. Structural phase/column changes are
not recorded and cannot be undone.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from blueprint_grid.model.types import Block

UNDO_LIMIT = 5


@dataclass(frozen=True)
class UndoEntry:
    label: str
    blocks: tuple[Block, ...]


class UndoHistory:
    """Last-in first-out stack of block snapshots, oldest dropped past limit."""

    def __init__(self, limit: int = UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError("Undo limit must be at least 1")
        self._entries: deque[UndoEntry] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._entries.maxlen

    def record(self, label: str, blocks: list[Block]) -> None:
        """Push the pre-operation block list under label."""
        self._entries.append(UndoEntry(label, tuple(blocks)))

    def undo(self) -> UndoEntry | None:
        """Pop the most recent entry, or None if there is nothing to undo."""
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> UndoEntry | None:
        return self._entries[-1] if self._entries else None

    @property
    def can_undo(self) -> bool:
        return bool(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def labels(self) -> list[str]:
        """Entry labels, most recent first."""
        return [e.label for e in reversed(self._entries)]
