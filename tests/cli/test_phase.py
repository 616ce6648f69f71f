"""Tests for 'blueprint-grid phase' commands."""

import json
from argparse import Namespace

import pytest

from blueprint_grid.cli.phase import phase_add, phase_delete, phase_list, phase_move, phase_rename, phase_toggle
from blueprint_grid.model.serialize import load_board


def _args(board_file, **kwargs):
    return Namespace(board=str(board_file), json=kwargs.pop("json", False), **kwargs)


def test_phase_list(board_file, capsys):
    assert phase_list(_args(board_file)) == 0

    out = capsys.readouterr().out
    assert "Phase 1" in out
    assert "2 columns, 4 blocks" in out
    assert "1 column, 1 block" in out


def test_phase_list_json(board_file, capsys):
    assert phase_list(_args(board_file, json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert [p["position"] for p in data] == [1, 2]
    assert data[0]["blocks"] == 4
    assert data[1]["columns"] == 1
    assert data[1]["collapsed"] is False


def test_phase_add(board_file, capsys):
    assert phase_add(_args(board_file, name="Support")) == 0

    assert 'Added phase "Support" at position 3' in capsys.readouterr().out
    board = load_board(board_file)
    assert [p.name for p in board.phases] == ["Phase 1", "Phase 2", "Support"]
    assert len(board.phases[2].columns) == 1


def test_phase_add_default_name(board_file):
    phase_add(_args(board_file, name=None))
    assert load_board(board_file).phases[-1].name == "Phase 3"


def test_phase_delete(board_file, capsys):
    assert phase_delete(_args(board_file, position=1)) == 0

    assert 'Deleted phase "Phase 1" and 4 blocks' in capsys.readouterr().out
    board = load_board(board_file)
    assert [p.name for p in board.phases] == ["Phase 2"]
    assert [(b.id, b.phase_index) for b in board.blocks] == [("Z", 0)]


def test_phase_delete_out_of_range(board_file, capsys):
    with pytest.raises(SystemExit):
        phase_delete(_args(board_file, position=5))
    assert "out of range" in capsys.readouterr().err
    assert len(load_board(board_file).phases) == 2


def test_phase_move_right(board_file, capsys):
    assert phase_move(_args(board_file, position=1, direction="right")) == 0

    assert "Phases: Phase 2, Phase 1" in capsys.readouterr().out
    board = load_board(board_file)
    coords = {b.id: (b.phase_index, b.column_index) for b in board.blocks}
    assert coords == {"A": (1, 0), "X": (1, 1), "B": (1, 0), "Z": (0, 0), "C": (1, 0)}


def test_phase_move_left_at_edge(board_file, capsys):
    assert phase_move(_args(board_file, position=1, direction="left")) == 0
    assert "Phases: Phase 1, Phase 2" in capsys.readouterr().out


def test_phase_rename(board_file, capsys):
    assert phase_rename(_args(board_file, position=2, name="Checkout")) == 0
    assert load_board(board_file).phases[1].name == "Checkout"


def test_phase_toggle(board_file, capsys):
    assert phase_toggle(_args(board_file, position=2)) == 0
    assert "Phase 2 collapsed" in capsys.readouterr().out
    assert load_board(board_file).phases[1].collapsed

    phase_toggle(_args(board_file, position=2))
    assert "Phase 2 expanded" in capsys.readouterr().out
