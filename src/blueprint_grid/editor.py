"""One-call-per-action editing shell around the engine.

BoardEditor reads the current board, runs a pure engine operation and
hands the results to the host's two sinks: commit_phases first, then
commit_blocks. Single deletes, bulk deletes and emoji clearing are
recorded in a bounded undo history first.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable

import yaml

from blueprint_grid.drag import DragEvent, DragResult, DragRouter
from blueprint_grid.history import UNDO_LIMIT, UndoEntry, UndoHistory
from blueprint_grid.model import block as block_ops
from blueprint_grid.model import reindex
from blueprint_grid.model.types import Block, BlockFilter, Board, Coordinate, Phase, check_board, has_coordinate

logger = logging.getLogger(__name__)


@dataclass
class EditorConfig:
    undo_limit: int = UNDO_LIMIT
    # Seconds the host waits after a drop before calling settle().
    settle_delay: float = 0.1
    poll_interval: float = 30.0
    check_invariants: bool = True


CONFIG_FILE = "blueprint-grid.yml"


def load_config(path: str | Path) -> EditorConfig:
    """Read EditorConfig overrides from a YAML file.

    A missing or unparseable file gives the defaults. Unknown keys are
    logged and skipped. A value that does not convert to the field's type,
    or is out of range (undo_limit below 1, a negative delay), is logged
    and the field keeps its default.
    """
    path = Path(path)
    if not path.exists():
        return EditorConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        logger.warning("cannot parse %s: %s", path, e)
        return EditorConfig()
    if not isinstance(data, dict):
        logger.warning("%s: expected a mapping, got %s", path, type(data).__name__)
        return EditorConfig()
    defaults = EditorConfig()
    known = {f.name for f in fields(EditorConfig)}
    for key in sorted(set(data) - known):
        logger.warning("%s: unknown key %r", path, key)
    values = {}
    for key in known & set(data):
        value = _coerce(getattr(defaults, key), data[key])
        if value is None:
            logger.warning("%s: bad value for %s: %r, using %r", path, key, data[key], getattr(defaults, key))
        else:
            values[key] = value
    return EditorConfig(**values)


_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _coerce(default, value):
    """Convert value to the type of default, or None if it will not fit."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        return None
    if isinstance(value, bool):
        return None
    try:
        number = type(default)(value)
    except (TypeError, ValueError):
        return None
    if isinstance(value, float) and isinstance(default, int) and not value.is_integer():
        return None
    # Every numeric setting is a count or a duration.
    minimum = 1 if isinstance(default, int) else 0
    return number if number >= minimum else None


class BoardEditor:
    def __init__(
        self,
        get_board: Callable[[], Board],
        commit_blocks: Callable[[list[Block]], None],
        commit_phases: Callable[[list[Phase]], None],
        config: EditorConfig | None = None,
        block_filter: BlockFilter | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self._get_board = get_board
        self._commit_blocks = commit_blocks
        self._commit_phases = commit_phases
        self.history = UndoHistory(self.config.undo_limit)
        self.router = DragRouter(block_filter)

    @classmethod
    def for_store(cls, store, config: EditorConfig | None = None, block_filter: BlockFilter | None = None):
        """Build an editor wired to a BoardStore."""
        return cls(lambda: store.board, store.commit_blocks, store.commit_phases, config, block_filter)

    @property
    def board(self) -> Board:
        return self._get_board()

    @property
    def block_filter(self) -> BlockFilter | None:
        return self.router.block_filter

    @block_filter.setter
    def block_filter(self, value: BlockFilter | None) -> None:
        self.router.block_filter = value

    def _commit(self, phases: list[Phase] | None = None, blocks: list[Block] | None = None) -> None:
        if self.config.check_invariants:
            current = self.board
            check_board(
                Board(
                    phases=phases if phases is not None else current.phases,
                    blocks=blocks if blocks is not None else current.blocks,
                )
            )
        if phases is not None:
            self._commit_phases(phases)
        if blocks is not None:
            self._commit_blocks(blocks)

    def _check_coord(self, coord: Coordinate) -> None:
        if not has_coordinate(self.board.phases, coord):
            raise IndexError(f"No column at {coord}")

    # --- drags ---

    def drag_start(self) -> None:
        self.router.begin()

    def drag_end(self, event: DragEvent) -> DragResult:
        """Apply a completed drag. Cancelled drops commit nothing."""
        result = self.router.end(self.board, event)
        if result.changed:
            logger.info("drop: %s %s", result.action, event.dragged_id)
            self._commit(result.phases, result.blocks)
        return result

    def settle(self) -> None:
        """Call once the drop animation is over."""
        self.router.settle()

    async def settle_later(self) -> None:
        """Settle once config.settle_delay seconds have passed."""
        await asyncio.sleep(self.config.settle_delay)
        self.settle()

    # --- phases ---

    def add_phase(self, name: str | None = None) -> Phase:
        phases = reindex.add_phase(self.board.phases, name)
        self._commit(phases=phases)
        logger.info("added phase %s", phases[-1].name)
        return phases[-1]

    def delete_phase(self, phase: int) -> None:
        board = self.board
        phases, blocks = reindex.delete_phase(board.phases, board.blocks, phase)
        logger.info(
            "deleted phase %d (%s), dropped %d blocks",
            phase,
            board.phases[phase].name,
            len(board.blocks) - len(blocks),
        )
        self._commit(phases, blocks)

    def move_phase_left(self, phase: int) -> None:
        board = self.board
        phases, blocks = reindex.move_phase_left(board.phases, board.blocks, phase)
        if phases is not board.phases:
            logger.info("moved phase %d left", phase)
            self._commit(phases, blocks)

    def move_phase_right(self, phase: int) -> None:
        board = self.board
        phases, blocks = reindex.move_phase_right(board.phases, board.blocks, phase)
        if phases is not board.phases:
            logger.info("moved phase %d right", phase)
            self._commit(phases, blocks)

    def rename_phase(self, phase: int, name: str) -> None:
        phases = reindex.rename_phase(self.board.phases, phase, name)
        logger.info("renamed phase %d to %r", phase, name)
        self._commit(phases=phases)

    def toggle_phase(self, phase: int) -> None:
        phases = reindex.toggle_phase(self.board.phases, phase)
        logger.info("%s phase %d", "collapsed" if phases[phase].collapsed else "expanded", phase)
        self._commit(phases=phases)

    # --- columns ---

    def add_column(self, phase: int, name: str | None = None) -> None:
        phases = reindex.add_column(self.board.phases, phase, name)
        logger.info("added column %s to phase %d", phases[phase].columns[-1].name, phase)
        self._commit(phases=phases)

    def delete_column(self, phase: int, col: int) -> None:
        board = self.board
        phases, blocks = reindex.delete_column(board.phases, board.blocks, phase, col)
        logger.info("deleted column %d-%d, dropped %d blocks", phase, col, len(board.blocks) - len(blocks))
        self._commit(phases, blocks)

    def move_column(self, from_phase: int, from_col: int, to_phase: int, to_col: int) -> None:
        board = self.board
        phases, blocks = reindex.move_column(board.phases, board.blocks, from_phase, from_col, to_phase, to_col)
        logger.info("moved column %d-%d to %d-%d", from_phase, from_col, to_phase, to_col)
        self._commit(phases, blocks)

    def rename_column(self, phase: int, col: int, name: str) -> None:
        phases = reindex.rename_column(self.board.phases, phase, col, name)
        logger.info("renamed column %d-%d to %r", phase, col, name)
        self._commit(phases=phases)

    def set_column_image(self, phase: int, col: int, image: str | None) -> None:
        phases = reindex.set_column_image(self.board.phases, phase, col, image)
        logger.info("%s image of column %d-%d", "set" if image else "cleared", phase, col)
        self._commit(phases=phases)

    # --- blocks ---

    def add_block(self, block_type: str, coord: Coordinate, display_index: int = 0) -> Block:
        self._check_coord(coord)
        blocks, block = block_ops.create_block(
            self.board.blocks, block_type, coord, display_index, self.block_filter
        )
        self._commit(blocks=blocks)
        return block

    def move_block(self, block_id: str, coord: Coordinate, display_index: int) -> None:
        self._check_coord(coord)
        self._commit(
            blocks=block_ops.move_block(self.board.blocks, block_id, coord, display_index, self.block_filter)
        )

    def duplicate_block(self, block_id: str, coord: Coordinate, display_index: int) -> Block:
        self._check_coord(coord)
        blocks, clone = block_ops.duplicate_block(
            self.board.blocks, block_id, coord, display_index, self.block_filter
        )
        self._commit(blocks=blocks)
        return clone

    def update_block(self, block_id: str, **fields) -> None:
        self._commit(blocks=block_ops.update_block(self.board.blocks, block_id, **fields))

    def bulk_update(self, block_ids, **fields) -> None:
        self._commit(blocks=block_ops.update_blocks(self.board.blocks, block_ids, **fields))

    # --- undoable edits ---

    def _commit_undoable(self, label: str, blocks: list[Block]) -> bool:
        before = self.board.blocks
        if len(blocks) == len(before) and all(a is b for a, b in zip(blocks, before)):
            return False
        self.history.record(label, before)
        self._commit(blocks=blocks)
        logger.info("%s (undo depth %d)", label, len(self.history))
        return True

    def delete_block(self, block_id: str) -> bool:
        """Delete one block. Returns False if there was no such block."""
        return self._commit_undoable("Delete block", block_ops.delete_block(self.board.blocks, block_id))

    def bulk_delete(self, block_ids) -> bool:
        before = self.board.blocks
        blocks = block_ops.delete_blocks(before, block_ids)
        removed = len(before) - len(blocks)
        label = "Delete block" if removed == 1 else f"Delete {removed} blocks"
        return self._commit_undoable(label, blocks)

    def clear_all_emoji(self) -> bool:
        return self._commit_undoable("Clear all emoji", block_ops.clear_emoji(self.board.blocks))

    def undo(self) -> UndoEntry | None:
        """Restore the block list from the latest undo entry.

        Phases are not restored. Blocks whose coordinate no longer exists
        after a structural change in between are dropped. Blocks whose
        coordinate still exists keep it as recorded, so after a column or
        phase move they land in whatever column now holds that position.
        """
        entry = self.history.undo()
        if entry is None:
            return None
        phases = self.board.phases
        blocks = [b for b in entry.blocks if has_coordinate(phases, b.coord)]
        if len(blocks) != len(entry.blocks):
            logger.warning("undo %s: dropped %d blocks with stale coordinates", entry.label, len(entry.blocks) - len(blocks))
        self._commit(blocks=blocks)
        logger.info("undid %s", entry.label)
        return entry
