"""Tests for 'blueprint-grid block' commands."""

import json
from argparse import Namespace

import pytest

from blueprint_grid.cli._common import open_editor
from blueprint_grid.cli.block import (
    block_add,
    block_clear_emoji,
    block_copy,
    block_delete,
    block_list,
    block_move,
)
from blueprint_grid.model.locate import column_blocks
from blueprint_grid.model.serialize import load_board
from blueprint_grid.model.types import Coordinate


def _args(board_file, **kwargs):
    kwargs.setdefault("json", False)
    kwargs.setdefault("department", None)
    kwargs.setdefault("type", None)
    return Namespace(board=str(board_file), **kwargs)


def _target(board_file, phase, column, position=None, **kwargs):
    return _args(board_file, phase=phase, column=column, position=position, **kwargs)


def _column(board_file, phase, column):
    board = load_board(board_file)
    return [b.id for b in column_blocks(board.blocks, Coordinate(phase, column))]


def test_block_list(board_file, capsys):
    assert block_list(_args(board_file, phase=None, column=None)) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("A  1.1")
    assert "Slow login" in lines[1]


def test_block_list_one_column_json(board_file, capsys):
    assert block_list(_args(board_file, phase=1, column=1, json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert [b["id"] for b in data] == ["A", "B", "C"]
    assert data[0]["phaseIndex"] == 0


def test_block_list_filtered(board_file, capsys):
    assert block_list(_args(board_file, phase=None, column=None, department=["Product"], json=True)) == 0
    assert [b["id"] for b in json.loads(capsys.readouterr().out)] == ["B"]


def test_block_add_defaults_to_end(board_file, capsys):
    assert block_add(_target(board_file, 1, 1, block_type="note")) == 0

    assert "Created note block" in capsys.readouterr().out
    ids = _column(board_file, 0, 0)
    assert ids[:3] == ["A", "B", "C"]
    assert len(ids) == 4


def test_block_add_at_top(board_file, capsys):
    assert block_add(_target(board_file, 1, 1, 1, block_type="question", json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["type"] == "question"
    board = load_board(board_file)
    assert board.blocks[0].id == data["id"]


def test_block_add_under_filter(board_file, capsys):
    """Position counts only the blocks the filter lets through."""
    args = _target(board_file, 1, 1, 2, block_type="note", department=["Product"], json=True)
    assert block_add(args) == 0

    new_id = json.loads(capsys.readouterr().out)["id"]
    assert _column(board_file, 0, 0) == ["A", "B", new_id, "C"]


def test_block_add_divider(board_file, capsys):
    assert block_add(_target(board_file, 2, 1, block_type="back-stage", json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["isDivider"] is True
    assert data["content"] == "Back Stage"


def test_block_add_missing_column(board_file, capsys):
    with pytest.raises(SystemExit):
        block_add(_target(board_file, 3, 1, block_type="note"))
    assert "No column 3.1" in capsys.readouterr().err


def test_block_move_to_other_phase(board_file, capsys):
    assert block_move(_target(board_file, 2, 1, id="A")) == 0

    assert "Moved block A to 2.1" in capsys.readouterr().out
    assert _column(board_file, 1, 0) == ["Z", "A"]
    assert _column(board_file, 0, 0) == ["B", "C"]


def test_block_move_within_column(board_file):
    assert block_move(_target(board_file, 1, 1, 1, id="C")) == 0
    assert _column(board_file, 0, 0) == ["C", "A", "B"]


def test_block_move_unknown(board_file, capsys):
    with pytest.raises(SystemExit):
        block_move(_target(board_file, 1, 1, 1, id="ghost"))
    assert "Block ghost not found" in capsys.readouterr().err


def test_block_copy(board_file, capsys):
    assert block_copy(_target(board_file, 1, 1, 2, id="X", json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["id"] != "X"
    assert data["type"] == "friction"
    assert data["emoji"] == "🐢"
    assert _column(board_file, 0, 0) == ["A", data["id"], "B", "C"]
    assert _column(board_file, 0, 1) == ["X"]


def test_block_delete_one(board_file, capsys):
    assert block_delete(_args(board_file, ids=["B"])) == 0

    assert "Deleted 1 block" in capsys.readouterr().out
    assert _column(board_file, 0, 0) == ["A", "C"]


def test_block_delete_many(board_file, capsys):
    assert block_delete(_args(board_file, ids=["A", "Z", "ghost"], json=True)) == 0

    assert json.loads(capsys.readouterr().out) == {"deleted": 2}
    assert [b.id for b in load_board(board_file).blocks] == ["X", "B", "C"]


def test_block_delete_nothing_matched(board_file, capsys):
    with pytest.raises(SystemExit):
        block_delete(_args(board_file, ids=["ghost"]))
    assert "No matching blocks" in capsys.readouterr().err
    assert len(load_board(board_file).blocks) == 5


def test_block_clear_emoji(board_file, capsys):
    assert block_clear_emoji(_args(board_file)) == 0

    assert "Cleared emoji from 1 block" in capsys.readouterr().out
    assert all(b.emoji is None for b in load_board(board_file).blocks)


def test_editor_reads_config_beside_board(board_file):
    (board_file.parent / "blueprint-grid.yml").write_text("undo_limit: 2\n")
    _, editor = open_editor(_args(board_file))
    assert editor.config.undo_limit == 2
    assert editor.history.limit == 2


def test_bad_config_falls_back_to_defaults(board_file, capsys):
    (board_file.parent / "blueprint-grid.yml").write_text("undo_limit: 0\n")
    assert block_clear_emoji(_args(board_file)) == 0
    assert "Cleared emoji from 1 block" in capsys.readouterr().out
