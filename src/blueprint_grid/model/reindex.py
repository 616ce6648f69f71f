"""Structural phase/column operations that keep block coordinates consistent.

This is the only module that rewrites a block's coordinate in response to
a structural change. Every function is pure: it returns new phase and
block lists and leaves its inputs untouched. Index arguments always come
from the current board, so an out-of-range index is a caller bug and
raises IndexError.
"""

from __future__ import annotations

from dataclasses import replace

from blueprint_grid.model.ids import unique_id
from blueprint_grid.model.types import Block, Column, Phase


def _check_phase(phases: list[Phase], phase: int) -> None:
    if not 0 <= phase < len(phases):
        raise IndexError(f"Phase index {phase} out of range (0..{len(phases) - 1})")


def _check_column(phases: list[Phase], phase: int, col: int) -> None:
    _check_phase(phases, phase)
    count = len(phases[phase].columns)
    if not 0 <= col < count:
        raise IndexError(f"Column index {col} out of range in phase {phase} (0..{count - 1})")


def _all_ids(phases: list[Phase]) -> set[str]:
    ids = {p.id for p in phases}
    for p in phases:
        ids.update(c.id for c in p.columns)
    return ids


def _with_columns(phase: Phase, columns: list[Column]) -> Phase:
    return replace(phase, columns=columns)


# --- phases ---


def add_phase(phases: list[Phase], name: str | None = None) -> list[Phase]:
    """Append a new phase seeded with a single column."""
    taken = _all_ids(phases)
    phase_id = unique_id(taken)
    column = Column(id=unique_id(taken | {phase_id}), name="Step 1")
    phase = Phase(
        id=phase_id,
        name=name or f"Phase {len(phases) + 1}",
        columns=[column],
    )
    return [*phases, phase]


def delete_phase(phases: list[Phase], blocks: list[Block], phase: int) -> tuple[list[Phase], list[Block]]:
    """Remove a phase and every block in it; shift later phases down by one."""
    _check_phase(phases, phase)
    new_phases = phases[:phase] + phases[phase + 1 :]
    new_blocks = []
    for block in blocks:
        if block.phase_index == phase:
            continue
        if block.phase_index > phase:
            block = replace(block, phase_index=block.phase_index - 1)
        new_blocks.append(block)
    return new_phases, new_blocks


def move_phase(phases: list[Phase], blocks: list[Block], a: int, b: int) -> tuple[list[Phase], list[Block]]:
    """Swap two adjacent phases and transpose their blocks' phase indices."""
    _check_phase(phases, a)
    _check_phase(phases, b)
    if abs(a - b) != 1:
        raise ValueError(f"Phases {a} and {b} are not adjacent")
    new_phases = list(phases)
    new_phases[a], new_phases[b] = phases[b], phases[a]
    new_blocks = []
    for block in blocks:
        if block.phase_index == a:
            block = replace(block, phase_index=b)
        elif block.phase_index == b:
            block = replace(block, phase_index=a)
        new_blocks.append(block)
    return new_phases, new_blocks


def move_phase_left(phases: list[Phase], blocks: list[Block], phase: int) -> tuple[list[Phase], list[Block]]:
    """Swap a phase with its left neighbour. The first phase stays put."""
    _check_phase(phases, phase)
    if phase == 0:
        return phases, blocks
    return move_phase(phases, blocks, phase, phase - 1)


def move_phase_right(phases: list[Phase], blocks: list[Block], phase: int) -> tuple[list[Phase], list[Block]]:
    """Swap a phase with its right neighbour. The last phase stays put."""
    _check_phase(phases, phase)
    if phase == len(phases) - 1:
        return phases, blocks
    return move_phase(phases, blocks, phase, phase + 1)


def rename_phase(phases: list[Phase], phase: int, name: str) -> list[Phase]:
    _check_phase(phases, phase)
    new_phases = list(phases)
    new_phases[phase] = replace(phases[phase], name=name)
    return new_phases


def toggle_phase(phases: list[Phase], phase: int) -> list[Phase]:
    """Flip a phase's collapsed flag."""
    _check_phase(phases, phase)
    new_phases = list(phases)
    new_phases[phase] = replace(phases[phase], collapsed=not phases[phase].collapsed)
    return new_phases


# --- columns ---


def add_column(phases: list[Phase], phase: int, name: str | None = None) -> list[Phase]:
    """Append a column to a phase, named "Step N" unless name is given."""
    _check_phase(phases, phase)
    target = phases[phase]
    column = Column(
        id=unique_id(_all_ids(phases)),
        name=name or f"Step {len(target.columns) + 1}",
    )
    new_phases = list(phases)
    new_phases[phase] = _with_columns(target, [*target.columns, column])
    return new_phases


def delete_column(
    phases: list[Phase], blocks: list[Block], phase: int, col: int
) -> tuple[list[Phase], list[Block]]:
    """Remove a column and its blocks; shift later columns in the phase left."""
    _check_column(phases, phase, col)
    target = phases[phase]
    new_phases = list(phases)
    new_phases[phase] = _with_columns(target, target.columns[:col] + target.columns[col + 1 :])
    new_blocks = []
    for block in blocks:
        if block.phase_index == phase:
            if block.column_index == col:
                continue
            if block.column_index > col:
                block = replace(block, column_index=block.column_index - 1)
        new_blocks.append(block)
    return new_phases, new_blocks


def move_column(
    phases: list[Phase],
    blocks: list[Block],
    from_phase: int,
    from_col: int,
    to_phase: int,
    to_col: int,
) -> tuple[list[Phase], list[Block]]:
    """Move a column, possibly into another phase, carrying its blocks along.

    Blocks in the moved column take the destination coordinate. Others are
    first closed up behind the removed slot (judged on their original
    index) and then opened up around the inserted slot.
    """
    _check_column(phases, from_phase, from_col)
    _check_phase(phases, to_phase)
    source_columns = list(phases[from_phase].columns)
    moved = source_columns.pop(from_col)
    if from_phase == to_phase:
        dest_columns = source_columns
    else:
        dest_columns = list(phases[to_phase].columns)
    if not 0 <= to_col <= len(dest_columns):
        raise IndexError(f"Column slot {to_col} out of range in phase {to_phase} (0..{len(dest_columns)})")
    dest_columns.insert(to_col, moved)

    new_phases = list(phases)
    new_phases[from_phase] = _with_columns(phases[from_phase], source_columns)
    new_phases[to_phase] = _with_columns(phases[to_phase], dest_columns)

    new_blocks = []
    for block in blocks:
        p, c = block.phase_index, block.column_index
        if p == from_phase and c == from_col:
            p, c = to_phase, to_col
        else:
            if p == from_phase and c > from_col:
                c -= 1
            if p == to_phase and c >= to_col:
                c += 1
        if (p, c) != (block.phase_index, block.column_index):
            block = replace(block, phase_index=p, column_index=c)
        new_blocks.append(block)
    return new_phases, new_blocks


def rename_column(phases: list[Phase], phase: int, col: int, name: str) -> list[Phase]:
    _check_column(phases, phase, col)
    columns = list(phases[phase].columns)
    columns[col] = replace(columns[col], name=name)
    new_phases = list(phases)
    new_phases[phase] = _with_columns(phases[phase], columns)
    return new_phases


def set_column_image(phases: list[Phase], phase: int, col: int, image: str | None) -> list[Phase]:
    """Attach or clear a column's image reference."""
    _check_column(phases, phase, col)
    columns = list(phases[phase].columns)
    columns[col] = replace(columns[col], image=image or None)
    new_phases = list(phases)
    new_phases[phase] = _with_columns(phases[phase], columns)
    return new_phases
