"""Handlers for 'blueprint-grid block' commands."""

from blueprint_grid.cli._common import (
    apply_or_die,
    build_filter,
    error,
    load_board_or_die,
    open_editor,
    output_json,
    output_result,
    plural,
    save,
    to_index,
)
from blueprint_grid.model.locate import column_blocks
from blueprint_grid.model.serialize import block_to_dict
from blueprint_grid.model.types import Coordinate, has_coordinate


def _target(args, store) -> tuple[Coordinate, int]:
    """Destination coordinate and display index from --phase/--column/--position."""
    coord = Coordinate(to_index(args.phase), to_index(args.column))
    if not has_coordinate(store.board.phases, coord):
        error(f"No column {args.phase}.{args.column}.", args.json)
    if args.position is None:
        return coord, len(column_blocks(store.board.blocks, coord, build_filter(args)))
    return coord, to_index(args.position)


def block_list(args) -> int:
    """List blocks in flat order, optionally for one column and filtered."""
    board = load_board_or_die(args.board, args.json)
    block_filter = build_filter(args)

    items = []
    for block in board.blocks:
        if args.phase is not None and block.phase_index != to_index(args.phase):
            continue
        if args.column is not None and block.column_index != to_index(args.column):
            continue
        if block_filter is not None and not block_filter.matches(block):
            continue
        items.append(block_to_dict(block))

    if args.json:
        output_json(items)
    else:
        for b in items:
            where = f"{b['phaseIndex'] + 1}.{b['columnIndex'] + 1}"
            print(f"{b['id']}  {where:<6} {b['type']:<12} {b['content']}")
    return 0


def block_add(args) -> int:
    """Create a block, as if dropped from the palette."""
    store, editor = open_editor(args)
    coord, display_index = _target(args, store)
    block = apply_or_die(editor.add_block, args.json, args.block_type, coord, display_index)
    save(store, args.board)
    output_result(
        block_to_dict(block),
        f"Created {block.type} block {block.id} in {args.phase}.{args.column}",
        args.json,
    )
    return 0


def block_move(args) -> int:
    store, editor = open_editor(args)
    coord, display_index = _target(args, store)
    apply_or_die(editor.move_block, args.json, args.id, coord, display_index)
    save(store, args.board)
    output_result(
        {"id": args.id, "phase": args.phase, "column": args.column},
        f"Moved block {args.id} to {args.phase}.{args.column}",
        args.json,
    )
    return 0


def block_copy(args) -> int:
    store, editor = open_editor(args)
    coord, display_index = _target(args, store)
    clone = apply_or_die(editor.duplicate_block, args.json, args.id, coord, display_index)
    save(store, args.board)
    output_result(
        block_to_dict(clone),
        f"Copied block {args.id} to {clone.id} in {args.phase}.{args.column}",
        args.json,
    )
    return 0


def block_delete(args) -> int:
    """Delete one or more blocks."""
    store, editor = open_editor(args)
    before = len(store.board.blocks)
    if len(args.ids) == 1:
        changed = editor.delete_block(args.ids[0])
    else:
        changed = editor.bulk_delete(args.ids)
    if not changed:
        error(f"No matching blocks: {', '.join(args.ids)}", args.json)
    save(store, args.board)
    removed = before - len(store.board.blocks)
    output_result(
        {"deleted": removed},
        f"Deleted {plural(removed, 'block')}",
        args.json,
    )
    return 0


def block_clear_emoji(args) -> int:
    store, editor = open_editor(args)
    cleared = sum(1 for b in store.board.blocks if b.emoji)
    if editor.clear_all_emoji():
        save(store, args.board)
    output_result(
        {"cleared": cleared},
        f"Cleared emoji from {plural(cleared, 'block')}",
        args.json,
    )
    return 0
