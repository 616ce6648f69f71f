"""Handlers for 'blueprint-grid column' commands."""

from blueprint_grid.cli._common import (
    apply_or_die,
    error,
    load_board_or_die,
    open_editor,
    output_json,
    output_result,
    plural,
    save,
    to_index,
)


def column_list(args) -> int:
    """List columns, optionally for a single phase."""
    board = load_board_or_die(args.board, args.json)
    if args.phase is not None and not 1 <= args.phase <= len(board.phases):
        error(f"Phase {args.phase} not found.", args.json)

    items = []
    for p, phase in enumerate(board.phases):
        if args.phase is not None and p != to_index(args.phase):
            continue
        for c, column in enumerate(phase.columns):
            items.append(
                {
                    "phase": p + 1,
                    "position": c + 1,
                    "id": column.id,
                    "name": column.name,
                    "blocks": sum(1 for b in board.blocks if b.phase_index == p and b.column_index == c),
                }
            )

    if args.json:
        output_json(items)
    else:
        for c in items:
            print(f"{c['phase']}.{c['position']}  {c['name']:<16} {plural(c['blocks'], 'block')}")
    return 0


def column_add(args) -> int:
    store, editor = open_editor(args)
    phase = to_index(args.phase)
    apply_or_die(editor.add_column, args.json, phase, args.name)
    save(store, args.board)
    column = store.board.phases[phase].columns[-1]
    position = len(store.board.phases[phase].columns)
    output_result(
        {"phase": args.phase, "position": position, "id": column.id, "name": column.name},
        f'Added column "{column.name}" to phase {args.phase}',
        args.json,
    )
    return 0


def column_delete(args) -> int:
    store, editor = open_editor(args)
    before = len(store.board.blocks)
    apply_or_die(editor.delete_column, args.json, to_index(args.phase), to_index(args.position))
    save(store, args.board)
    removed = before - len(store.board.blocks)
    output_result(
        {"phase": args.phase, "position": args.position, "blocks_removed": removed},
        f"Deleted column {args.phase}.{args.position} and {plural(removed, 'block')}",
        args.json,
    )
    return 0


def column_move(args) -> int:
    store, editor = open_editor(args)
    to_phase = args.to_phase if args.to_phase is not None else args.phase
    apply_or_die(
        editor.move_column,
        args.json,
        to_index(args.phase),
        to_index(args.position),
        to_index(to_phase),
        to_index(args.to),
    )
    save(store, args.board)
    output_result(
        {"phase": to_phase, "position": args.to},
        f"Moved column {args.phase}.{args.position} to {to_phase}.{args.to}",
        args.json,
    )
    return 0


def column_rename(args) -> int:
    store, editor = open_editor(args)
    apply_or_die(editor.rename_column, args.json, to_index(args.phase), to_index(args.position), args.name)
    save(store, args.board)
    output_result(
        {"phase": args.phase, "position": args.position, "name": args.name},
        f'Renamed column {args.phase}.{args.position} to "{args.name}"',
        args.json,
    )
    return 0
