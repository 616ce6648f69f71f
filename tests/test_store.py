"""Tests for the committed-board store."""

from blueprint_grid.model.types import Board
from blueprint_grid.store import BoardStore
from tests.conftest import _make_block, _make_board


def test_commit_blocks_fires_watchers(sample_board):
    store = BoardStore(sample_board)
    seen = []
    store.watch("blocks", lambda s, key, old, new: seen.append((key, len(old), len(new))))
    store.commit_blocks(sample_board.blocks[:2])
    assert seen == [("blocks", 6, 2)]
    assert store.board.phases is sample_board.phases
    assert len(sample_board.blocks) == 6


def test_commit_phases_fires_watchers(sample_board):
    store = BoardStore(sample_board)
    seen = []
    store.watch("phases", lambda s, key, old, new: seen.append(key))
    store.watch("blocks", lambda s, key, old, new: seen.append("wrong"))
    store.commit_phases(sample_board.phases[:1])
    assert seen == ["phases"]
    assert len(store.board.phases) == 1


def test_star_watcher_sees_everything(sample_board):
    store = BoardStore(sample_board)
    seen = []
    store.watch("*", lambda s, key, old, new: seen.append(key))
    store.commit_blocks([])
    store.commit_phases([])
    store.replace(Board(name="remote"))
    assert seen == ["blocks", "phases", "board"]
    assert store.version == 3


def test_unwatch(sample_board):
    store = BoardStore(sample_board)
    seen = []
    unwatch = store.watch("blocks", lambda *a: seen.append(1))
    unwatch()
    store.commit_blocks([])
    assert seen == []


def test_replace_is_wholesale():
    store = BoardStore(_make_board(blocks=[_make_block("local")]))
    remote = _make_board(columns=(1, 1), blocks=[_make_block("remote", 1)])
    store.replace(remote)
    assert store.board is remote


def test_default_board_is_empty():
    store = BoardStore()
    assert store.board.phases == []
    assert store.board.blocks == []
