"""Shared fixtures for CLI tests."""

import pytest

from blueprint_grid.model.serialize import save_board
from tests.conftest import _make_block, _make_board


@pytest.fixture
def board_file(tmp_path):
    """A saved board: phase 1 has two columns, phase 2 has one; five blocks."""
    board = _make_board(
        columns=(2, 1),
        blocks=[
            _make_block("A", 0, 0, content="Open app"),
            _make_block("X", 0, 1, type="friction", content="Slow login", emoji="🐢"),
            _make_block("B", 0, 0, content="Sign in", department="Product"),
            _make_block("Z", 1, 0, type="question", content="Why?"),
            _make_block("C", 0, 0, content="Browse"),
        ],
    )
    path = tmp_path / "blueprint.json"
    save_board(board, path)
    return path
