"""Board data model and pure engine operations."""

from blueprint_grid.model.block import (
    clear_emoji,
    create_block,
    delete_block,
    delete_blocks,
    duplicate_block,
    find_block,
    move_block,
    update_block,
    update_blocks,
)
from blueprint_grid.model.locate import column_blocks, insertion_point
from blueprint_grid.model.reindex import (
    add_column,
    add_phase,
    delete_column,
    delete_phase,
    move_column,
    move_phase,
    move_phase_left,
    move_phase_right,
    rename_column,
    rename_phase,
    set_column_image,
    toggle_phase,
)
from blueprint_grid.model.serialize import board_from_dict, board_to_dict, load_board, save_board
from blueprint_grid.model.types import Block, BlockFilter, Board, Column, Coordinate, Phase, check_board

__all__ = [
    "Block",
    "BlockFilter",
    "Board",
    "Column",
    "Coordinate",
    "Phase",
    "add_column",
    "add_phase",
    "board_from_dict",
    "board_to_dict",
    "check_board",
    "clear_emoji",
    "column_blocks",
    "create_block",
    "delete_block",
    "delete_blocks",
    "delete_column",
    "delete_phase",
    "duplicate_block",
    "find_block",
    "insertion_point",
    "load_board",
    "move_block",
    "move_column",
    "move_phase",
    "move_phase_left",
    "move_phase_right",
    "rename_column",
    "rename_phase",
    "save_board",
    "set_column_image",
    "toggle_phase",
    "update_block",
    "update_blocks",
]
