"""CLI argument parser and dispatch for blueprint-grid."""

import argparse

from blueprint_grid.cli.block import (
    block_add,
    block_clear_emoji,
    block_copy,
    block_delete,
    block_list,
    block_move,
)
from blueprint_grid.cli.board import init_board, show_board
from blueprint_grid.cli.column import column_add, column_delete, column_list, column_move, column_rename
from blueprint_grid.cli.drag import drag_apply
from blueprint_grid.cli.phase import phase_add, phase_delete, phase_list, phase_move, phase_rename, phase_toggle
from blueprint_grid.model.types import BLOCK_TYPES


def _add_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--department", action="append", help="Only blocks of this department (repeatable)")
    parser.add_argument("--type", action="append", help="Only blocks of this type (repeatable)")


def _add_target(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--phase", type=int, required=True, help="Target phase (1-indexed)")
    parser.add_argument("--column", type=int, required=True, help="Target column within the phase (1-indexed)")
    parser.add_argument("--position", type=int, help="Position among visible blocks (1-indexed, default: end)")
    _add_filters(parser)


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--board", default="blueprint.json", help="Path to board file (default: blueprint.json)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("--config", help="Editor settings YAML (default: blueprint-grid.yml beside the board)")
    common.add_argument("-v", "--verbose", action="store_true", help="Log engine activity to stderr")

    parser = argparse.ArgumentParser(
        prog="blueprint-grid",
        description="Phase/column/block blueprint editor",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Create a new board file", parents=[common])
    init_p.add_argument("--name", default="Untitled Blueprint", help="Board name")
    init_p.set_defaults(func=init_board)

    # --- show ---
    show_p = nouns.add_parser("show", help="Print the board grid", parents=[common])
    _add_filters(show_p)
    show_p.set_defaults(func=show_board)

    # --- phase ---
    phase_p = nouns.add_parser("phase", help="Phase operations", parents=[common])
    phase_verbs = phase_p.add_subparsers(dest="verb")

    phase_list_p = phase_verbs.add_parser("list", help="List phases", parents=[common])
    phase_list_p.set_defaults(func=phase_list)

    phase_add_p = phase_verbs.add_parser("add", help="Append a phase", parents=[common])
    phase_add_p.add_argument("--name", help="Phase name (default: Phase N)")
    phase_add_p.set_defaults(func=phase_add)

    phase_delete_p = phase_verbs.add_parser("delete", help="Delete a phase and its blocks", parents=[common])
    phase_delete_p.add_argument("position", type=int, help="Phase position (1-indexed)")
    phase_delete_p.set_defaults(func=phase_delete)

    phase_move_p = phase_verbs.add_parser("move", help="Swap a phase with a neighbour", parents=[common])
    phase_move_p.add_argument("position", type=int, help="Phase position (1-indexed)")
    phase_move_p.add_argument("direction", choices=["left", "right"], help="Direction to move")
    phase_move_p.set_defaults(func=phase_move)

    phase_rename_p = phase_verbs.add_parser("rename", help="Rename a phase", parents=[common])
    phase_rename_p.add_argument("position", type=int, help="Phase position (1-indexed)")
    phase_rename_p.add_argument("name", help="New phase name")
    phase_rename_p.set_defaults(func=phase_rename)

    phase_toggle_p = phase_verbs.add_parser("toggle", help="Collapse or expand a phase", parents=[common])
    phase_toggle_p.add_argument("position", type=int, help="Phase position (1-indexed)")
    phase_toggle_p.set_defaults(func=phase_toggle)

    # phase with no verb = list
    phase_p.set_defaults(func=phase_list)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.add_argument("--phase", type=int, help="Only this phase (1-indexed)")
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Append a column to a phase", parents=[common])
    col_add_p.add_argument("phase", type=int, help="Phase position (1-indexed)")
    col_add_p.add_argument("--name", help="Column name (default: Step N)")
    col_add_p.set_defaults(func=column_add)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its blocks", parents=[common])
    col_delete_p.add_argument("phase", type=int, help="Phase position (1-indexed)")
    col_delete_p.add_argument("position", type=int, help="Column position (1-indexed)")
    col_delete_p.set_defaults(func=column_delete)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("phase", type=int, help="Phase position (1-indexed)")
    col_move_p.add_argument("position", type=int, help="Column position (1-indexed)")
    col_move_p.add_argument("--to", type=int, required=True, help="New column position (1-indexed)")
    col_move_p.add_argument("--to-phase", type=int, help="Destination phase (default: same phase)")
    col_move_p.set_defaults(func=column_move)

    col_rename_p = col_verbs.add_parser("rename", help="Rename a column", parents=[common])
    col_rename_p.add_argument("phase", type=int, help="Phase position (1-indexed)")
    col_rename_p.add_argument("position", type=int, help="Column position (1-indexed)")
    col_rename_p.add_argument("name", help="New column name")
    col_rename_p.set_defaults(func=column_rename)

    # column with no verb = list
    col_p.set_defaults(func=column_list, phase=None)

    # --- block ---
    block_p = nouns.add_parser("block", help="Block operations", parents=[common])
    block_verbs = block_p.add_subparsers(dest="verb")

    block_list_p = block_verbs.add_parser("list", help="List blocks", parents=[common])
    block_list_p.add_argument("--phase", type=int, help="Only this phase (1-indexed)")
    block_list_p.add_argument("--column", type=int, help="Only this column (1-indexed)")
    _add_filters(block_list_p)
    block_list_p.set_defaults(func=block_list)

    block_add_p = block_verbs.add_parser("add", help="Create a block", parents=[common])
    block_add_p.add_argument("block_type", choices=BLOCK_TYPES, help="Block type")
    _add_target(block_add_p)
    block_add_p.set_defaults(func=block_add)

    block_move_p = block_verbs.add_parser("move", help="Move a block", parents=[common])
    block_move_p.add_argument("id", help="Block ID")
    _add_target(block_move_p)
    block_move_p.set_defaults(func=block_move)

    block_copy_p = block_verbs.add_parser("copy", help="Duplicate a block", parents=[common])
    block_copy_p.add_argument("id", help="Block ID")
    _add_target(block_copy_p)
    block_copy_p.set_defaults(func=block_copy)

    block_delete_p = block_verbs.add_parser("delete", help="Delete blocks", parents=[common])
    block_delete_p.add_argument("ids", nargs="+", help="Block IDs")
    block_delete_p.set_defaults(func=block_delete)

    block_clear_p = block_verbs.add_parser("clear-emoji", help="Remove emoji from every block", parents=[common])
    block_clear_p.set_defaults(func=block_clear_emoji)

    # block with no verb = list
    block_p.set_defaults(func=block_list, phase=None, column=None, department=None, type=None)

    # --- drag ---
    drag_p = nouns.add_parser("drag", help="Apply a drag event read from stdin", parents=[common])
    drag_p.set_defaults(func=drag_apply)

    return parser
