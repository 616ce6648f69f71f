"""Handlers for 'blueprint-grid init' and 'blueprint-grid show'."""

from pathlib import Path

from rich.console import Console

from blueprint_grid.cli._common import build_filter, error, load_board_or_die, output_json, output_result
from blueprint_grid.model.ids import new_id
from blueprint_grid.model.reindex import add_phase
from blueprint_grid.model.serialize import board_to_dict, save_board
from blueprint_grid.model.types import Board
from blueprint_grid.render import build_board_table


def init_board(args) -> int:
    """Write a new board with one phase holding one column."""
    path = Path(args.board)
    if path.exists():
        error(f"{path} already exists.", args.json)
    board = Board(id=new_id(), name=args.name, phases=add_phase([]))
    save_board(board, path)
    output_result(
        {"id": board.id, "name": board.name, "path": str(path)},
        f'Created blueprint "{board.name}" at {path}',
        args.json,
    )
    return 0


def show_board(args) -> int:
    """Print the board grid."""
    board = load_board_or_die(args.board, args.json)
    block_filter = build_filter(args)
    if args.json:
        output_json(board_to_dict(board))
        return 0
    Console().print(build_board_table(board, block_filter))
    return 0
