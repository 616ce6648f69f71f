"""Drag-completion routing for blueprint boards.

A finished drag gesture arrives as a DragEvent naming where it started,
where it landed and what was dragged. route_drag classifies it and runs
the matching engine operation:

- column strip -> column strip (COLUMN): move the column
- palette -> column: create a block
- block -> palette/trash: delete the block
- block -> column with modifier held: duplicate the block
- block -> column: move the block

Anything that does not resolve against the current board is a cancelled
drop and yields an empty DragResult.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from blueprint_grid.model.block import create_block, delete_block, duplicate_block, find_block, move_block
from blueprint_grid.model.reindex import move_column
from blueprint_grid.model.types import BLOCK_TYPES, Block, BlockFilter, Board, Coordinate, Phase, has_coordinate

logger = logging.getLogger(__name__)

COLUMN = "COLUMN"
BLOCK = "BLOCK"

PALETTE = "palette"
TRASH = "trash"

PALETTE_DRAGGABLE_PREFIX = "drawer-"
COLUMN_DRAGGABLE_PREFIX = "column-"

_PALETTE_IDS = {"drawer", "palette"}
_BLOCK_LIST_RE = re.compile(r"^(\d+)-(\d+)$")
_PHASE_STRIP_RE = re.compile(r"^phase-(\d+)$")


def parse_droppable(droppable_id: str | None) -> Coordinate | int | str | None:
    """Decode a droppable id.

    "2-0" -> Coordinate(2, 0), "phase-3" -> 3, "drawer"/"palette" ->
    PALETTE, "trash" -> TRASH, anything else -> None.
    """
    if not droppable_id:
        return None
    if droppable_id in _PALETTE_IDS:
        return PALETTE
    if droppable_id == TRASH:
        return TRASH
    m = _BLOCK_LIST_RE.match(droppable_id)
    if m:
        return Coordinate(int(m.group(1)), int(m.group(2)))
    m = _PHASE_STRIP_RE.match(droppable_id)
    if m:
        return int(m.group(1))
    return None


@dataclass
class DragEvent:
    """A completed drag gesture. destination_id is None for a cancelled drop."""

    source_id: str
    destination_id: str | None
    dragged_id: str
    kind: str = BLOCK
    source_index: int = 0
    destination_index: int = 0
    modifier: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> DragEvent:
        """Build an event from its camelCase wire form."""
        return cls(
            source_id=data["sourceId"],
            destination_id=data.get("destinationId"),
            dragged_id=data["draggedId"],
            kind=data.get("kind", BLOCK),
            source_index=int(data.get("sourceIndex", 0)),
            destination_index=int(data.get("destinationIndex", 0)),
            modifier=bool(data.get("modifier", False)),
        )


@dataclass
class DragResult:
    """New collections produced by a drop. None means "unchanged"."""

    phases: list[Phase] | None = None
    blocks: list[Block] | None = None
    action: str | None = None
    block: Block | None = None

    @property
    def changed(self) -> bool:
        return self.phases is not None or self.blocks is not None


def _cancel(reason: str, event: DragEvent) -> DragResult:
    logger.debug("drop cancelled (%s): %s", reason, event)
    return DragResult()


def _route_column(board: Board, event: DragEvent) -> DragResult:
    from_phase = parse_droppable(event.source_id)
    to_phase = parse_droppable(event.destination_id)
    if not isinstance(from_phase, int) or not isinstance(to_phase, int):
        return _cancel("not a column strip", event)
    phases = board.phases
    if not (0 <= from_phase < len(phases) and 0 <= to_phase < len(phases)):
        return _cancel("phase gone", event)
    source_columns = phases[from_phase].columns
    if not 0 <= event.source_index < len(source_columns):
        return _cancel("column gone", event)
    column = source_columns[event.source_index]
    if event.dragged_id not in (column.id, COLUMN_DRAGGABLE_PREFIX + column.id):
        return _cancel("column shifted", event)
    slots = len(phases[to_phase].columns) - (1 if from_phase == to_phase else 0)
    if not 0 <= event.destination_index <= slots:
        return _cancel("slot gone", event)
    if from_phase == to_phase and event.source_index == event.destination_index:
        return _cancel("dropped in place", event)
    new_phases, new_blocks = move_column(
        phases,
        board.blocks,
        from_phase,
        event.source_index,
        to_phase,
        event.destination_index,
    )
    return DragResult(phases=new_phases, blocks=new_blocks, action="move-column")


def _route_block(board: Board, event: DragEvent, block_filter: BlockFilter | None) -> DragResult:
    source = parse_droppable(event.source_id)
    dest = parse_droppable(event.destination_id)

    if dest in (PALETTE, TRASH):
        if source == PALETTE:
            return _cancel("palette to palette", event)
        if find_block(board.blocks, event.dragged_id) is None:
            return _cancel("block gone", event)
        return DragResult(blocks=delete_block(board.blocks, event.dragged_id), action="delete")

    if not isinstance(dest, Coordinate) or not has_coordinate(board.phases, dest):
        return _cancel("destination gone", event)

    if source == PALETTE:
        block_type = event.dragged_id.removeprefix(PALETTE_DRAGGABLE_PREFIX)
        if block_type not in BLOCK_TYPES:
            return _cancel("unknown palette entry", event)
        blocks, block = create_block(board.blocks, block_type, dest, event.destination_index, block_filter)
        return DragResult(blocks=blocks, action="create", block=block)

    if find_block(board.blocks, event.dragged_id) is None:
        return _cancel("block gone", event)

    if event.modifier:
        blocks, clone = duplicate_block(
            board.blocks, event.dragged_id, dest, event.destination_index, block_filter
        )
        return DragResult(blocks=blocks, action="duplicate", block=clone)

    blocks = move_block(board.blocks, event.dragged_id, dest, event.destination_index, block_filter)
    return DragResult(blocks=blocks, action="move", block=find_block(blocks, event.dragged_id))


def route_drag(board: Board, event: DragEvent, block_filter: BlockFilter | None = None) -> DragResult:
    """Classify a drag-completion event and compute the resulting collections.

    block_filter is the filter active on screen when the drop happened;
    the destination index is relative to the blocks it lets through.
    """
    if event.destination_id is None:
        return _cancel("no destination", event)
    if event.kind == COLUMN:
        return _route_column(board, event)
    if event.kind == BLOCK:
        return _route_block(board, event, block_filter)
    return _cancel("unknown kind", event)


IDLE = "idle"
DRAGGING = "dragging"
SETTLING = "settling"


class DragRouter:
    """Routes drops and owns the drag-active token.

    The token is set by begin() and stays set after end() until the host
    calls settle(), typically once the drop animation has finished. A
    second end() while settling is ignored. Host updates that arrive
    while the token is set are queued with defer() and run by settle().
    """

    def __init__(self, block_filter: BlockFilter | None = None) -> None:
        self.block_filter = block_filter
        self.state = IDLE
        self._pending: list[Callable[[], None]] = []

    @property
    def active(self) -> bool:
        return self.state != IDLE

    def begin(self) -> None:
        self.state = DRAGGING

    def end(self, board: Board, event: DragEvent) -> DragResult:
        """Route one completed drag and enter the settling state."""
        if self.state == SETTLING:
            return _cancel("previous drop still settling", event)
        self.state = SETTLING
        return route_drag(board, event, self.block_filter)

    def defer(self, update: Callable[[], None]) -> None:
        """Run update now, or once the current drag settles."""
        if self.active:
            self._pending.append(update)
        else:
            update()

    def settle(self) -> None:
        """Clear the token and flush queued updates in arrival order."""
        self.state = IDLE
        pending, self._pending = self._pending, []
        for update in pending:
            try:
                update()
            except Exception:
                logger.exception("deferred update failed")

    @property
    def pending(self) -> int:
        return len(self._pending)
