"""Block mutation operations for blueprint boards.

All functions take the flat block list and return a new one. Placement
always goes through insertion_point so existing within-column order is
never disturbed.
"""

from __future__ import annotations

import copy
from dataclasses import replace

from blueprint_grid.model.ids import unique_id
from blueprint_grid.model.locate import insertion_point
from blueprint_grid.model.types import (
    BLOCK_TYPES,
    DEPARTMENTS,
    DIVIDER_TYPES,
    Block,
    BlockFilter,
    Coordinate,
    default_content,
)

EDITABLE_FIELDS = frozenset({"content", "notes", "emoji", "department", "custom_department", "flagged"})


def find_block(blocks: list[Block], block_id: str) -> Block | None:
    """Find a block by id."""
    for block in blocks:
        if block.id == block_id:
            return block
    return None


def _index_of(blocks: list[Block], block_id: str) -> int:
    for i, block in enumerate(blocks):
        if block.id == block_id:
            return i
    raise KeyError(block_id)


def _place(
    blocks: list[Block],
    block: Block,
    coord: Coordinate,
    display_index: int,
    block_filter: BlockFilter | None,
) -> list[Block]:
    pos = insertion_point(blocks, coord, display_index, block_filter)
    return blocks[:pos] + [block] + blocks[pos:]


def create_block(
    blocks: list[Block],
    block_type: str,
    coord: Coordinate,
    display_index: int = 0,
    block_filter: BlockFilter | None = None,
) -> tuple[list[Block], Block]:
    """Mint a block of block_type at coord.

    Returns (new_blocks, block).
    """
    if block_type not in BLOCK_TYPES:
        raise ValueError(f"Unknown block type: {block_type!r}")
    block = Block(
        id=unique_id(b.id for b in blocks),
        type=block_type,
        content=default_content(block_type),
        phase_index=coord.phase,
        column_index=coord.column,
        is_divider=block_type in DIVIDER_TYPES,
    )
    return _place(blocks, block, coord, display_index, block_filter), block


def move_block(
    blocks: list[Block],
    block_id: str,
    coord: Coordinate,
    display_index: int,
    block_filter: BlockFilter | None = None,
) -> list[Block]:
    """Move a block to display_index of the column at coord.

    The block is lifted out first, so display_index counts the target
    column without it. This is what makes same-column reorders work.
    """
    idx = _index_of(blocks, block_id)
    moved = blocks[idx]
    remaining = blocks[:idx] + blocks[idx + 1 :]
    if not moved.at(coord):
        moved = replace(moved, phase_index=coord.phase, column_index=coord.column)
    return _place(remaining, moved, coord, display_index, block_filter)


def duplicate_block(
    blocks: list[Block],
    block_id: str,
    coord: Coordinate,
    display_index: int,
    block_filter: BlockFilter | None = None,
) -> tuple[list[Block], Block]:
    """Clone a block into coord under a fresh id. The original is untouched.

    Returns (new_blocks, clone).
    """
    original = blocks[_index_of(blocks, block_id)]
    clone = replace(
        copy.deepcopy(original),
        id=unique_id(b.id for b in blocks),
        phase_index=coord.phase,
        column_index=coord.column,
    )
    return _place(blocks, clone, coord, display_index, block_filter), clone


def delete_block(blocks: list[Block], block_id: str) -> list[Block]:
    """Remove one block by id. Unknown ids leave the list as is."""
    return [b for b in blocks if b.id != block_id]


def delete_blocks(blocks: list[Block], block_ids) -> list[Block]:
    """Remove every block whose id is in block_ids."""
    doomed = set(block_ids)
    return [b for b in blocks if b.id not in doomed]


def clear_emoji(blocks: list[Block]) -> list[Block]:
    """Strip the emoji from every block that has one."""
    return [replace(b, emoji=None) if b.emoji else b for b in blocks]


def _check_fields(fields: dict) -> None:
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot edit block fields: {', '.join(sorted(unknown))}")
    department = fields.get("department")
    if department is not None and department not in DEPARTMENTS:
        raise ValueError(f"Unknown department: {department!r}")


def update_block(blocks: list[Block], block_id: str, **fields) -> list[Block]:
    """Edit one block's non-coordinate fields."""
    _check_fields(fields)
    idx = _index_of(blocks, block_id)
    new_blocks = list(blocks)
    new_blocks[idx] = replace(blocks[idx], **fields)
    return new_blocks


def update_blocks(blocks: list[Block], block_ids, **fields) -> list[Block]:
    """Apply the same non-coordinate edit to every block in block_ids."""
    _check_fields(fields)
    targets = set(block_ids)
    return [replace(b, **fields) if b.id in targets else b for b in blocks]
