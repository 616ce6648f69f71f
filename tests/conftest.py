"""Shared builders for board tests."""

import pytest

from blueprint_grid.model.types import Block, Board, Column, Phase


def _make_block(block_id, phase=0, column=0, type="note", content=None, **kwargs):
    """Build a block; content defaults to the id so order is easy to read."""
    return Block(
        id=block_id,
        type=type,
        content=block_id if content is None else content,
        phase_index=phase,
        column_index=column,
        **kwargs,
    )


def _make_phase(index, columns=1, name=None):
    return Phase(
        id=f"p{index}",
        name=name or f"Phase {index + 1}",
        columns=[Column(id=f"p{index}c{j}", name=f"Step {j + 1}") for j in range(columns)],
    )


def _make_board(columns=(1,), blocks=(), name="Test Blueprint"):
    """Build a board with len(columns) phases; columns[i] is phase i's column count."""
    return Board(
        id="board-1",
        name=name,
        phases=[_make_phase(i, n) for i, n in enumerate(columns)],
        blocks=list(blocks),
    )


def _ids(blocks):
    return [b.id for b in blocks]


def _where(blocks):
    """Map block id -> (phase_index, column_index)."""
    return {b.id: (b.phase_index, b.column_index) for b in blocks}


def _column_ids(phases):
    return [[c.id for c in p.columns] for p in phases]


@pytest.fixture
def sample_board():
    """Two phases: phase 0 has two columns, phase 1 has one.

    Flat order interleaves columns: A(0,0) X(0,1) B(0,0) Y(0,1) Z(1,0) C(0,0)
    """
    return _make_board(
        columns=(2, 1),
        blocks=[
            _make_block("A", 0, 0),
            _make_block("X", 0, 1),
            _make_block("B", 0, 0),
            _make_block("Y", 0, 1),
            _make_block("Z", 1, 0),
            _make_block("C", 0, 0),
        ],
    )
