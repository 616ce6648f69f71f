"""Translate a display-relative drop index into a flat-list splice index.

A column's blocks are interleaved with every other column's blocks in the
board's single block list, and the visible list for a column may be
filtered. The drop index reported by the UI counts only visible blocks of
the target column.
"""

from __future__ import annotations

from blueprint_grid.model.types import Block, BlockFilter, Coordinate


def column_blocks(blocks: list[Block], coord: Coordinate, block_filter: BlockFilter | None = None) -> list[Block]:
    """Blocks displayed in the column at coord, in within-column order."""
    return [
        b for b in blocks if b.at(coord) and (block_filter is None or block_filter.matches(b))
    ]


def _position(blocks: list[Block], block_id: str) -> int | None:
    for i, b in enumerate(blocks):
        if b.id == block_id:
            return i
    return None


def insertion_point(
    blocks: list[Block],
    coord: Coordinate,
    display_index: int,
    block_filter: BlockFilter | None = None,
) -> int:
    """Absolute index in blocks at which a drop at display_index lands.

    Index 0 lands just before the column's first block (any block at coord,
    visible or not). Index K lands just after the K-th visible block. When nothing
    resolves (empty column, stale index), the drop goes to the end of the
    list.
    """
    if display_index <= 0:
        for i, b in enumerate(blocks):
            if b.at(coord):
                return i
        return len(blocks)

    visible = column_blocks(blocks, coord, block_filter)
    if display_index > len(visible):
        return len(blocks)
    pos = _position(blocks, visible[display_index - 1].id)
    if pos is None:
        return len(blocks)
    return pos + 1
