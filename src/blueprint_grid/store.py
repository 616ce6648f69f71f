"""Last-committed board with change notification.

The store is the host end of the two commit contracts: the engine hands
it a whole new block list or phase list, the store swaps it in and tells
its watchers. Watchers are called as callback(store, key, old, new) with
key "blocks", "phases" or "board" (whole-board replacement); "*" watchers
see every change.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from blueprint_grid.model.types import Block, Board, Phase

Callback = Callable[["BoardStore", str, Any, Any], None]


class BoardStore:
    def __init__(self, board: Board | None = None) -> None:
        self._board = board if board is not None else Board()
        self._watchers: dict[str, list[Callback]] = {}
        self.version = 0

    @property
    def board(self) -> Board:
        return self._board

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        """Watch a key for changes. Returns an unwatch callable."""
        self._watchers.setdefault(key, []).append(callback)
        return lambda: self._watchers.get(key, []) and self._watchers[key].remove(callback)

    def _emit(self, key: str, old: Any, new: Any) -> None:
        self.version += 1
        for cb in list(self._watchers.get(key, ())):
            cb(self, key, old, new)
        for cb in list(self._watchers.get("*", ())):
            cb(self, key, old, new)

    def commit_blocks(self, blocks: list[Block]) -> None:
        """Replace the block collection."""
        old = self._board.blocks
        self._board = replace(self._board, blocks=list(blocks))
        self._emit("blocks", old, self._board.blocks)

    def commit_phases(self, phases: list[Phase]) -> None:
        """Replace the phase/column collection."""
        old = self._board.phases
        self._board = replace(self._board, phases=list(phases))
        self._emit("phases", old, self._board.phases)

    def replace(self, board: Board) -> None:
        """Swap in a whole board, e.g. a freshly fetched remote snapshot."""
        old = self._board
        self._board = board
        self._emit("board", old, board)
