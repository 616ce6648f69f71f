"""Handlers for 'blueprint-grid phase' commands."""

from blueprint_grid.cli._common import (
    apply_or_die,
    load_board_or_die,
    open_editor,
    output_json,
    output_result,
    plural,
    save,
    to_index,
)


def phase_list(args) -> int:
    """List all phases."""
    board = load_board_or_die(args.board, args.json)

    items = []
    for i, phase in enumerate(board.phases):
        items.append(
            {
                "position": i + 1,
                "id": phase.id,
                "name": phase.name,
                "columns": len(phase.columns),
                "blocks": sum(1 for b in board.blocks if b.phase_index == i),
                "collapsed": phase.collapsed,
            }
        )

    if args.json:
        output_json(items)
    else:
        for p in items:
            collapsed = "  (collapsed)" if p["collapsed"] else ""
            print(
                f"{p['position']}  {p['name']:<16} {plural(p['columns'], 'column')}, "
                f"{plural(p['blocks'], 'block')}{collapsed}"
            )
    return 0


def phase_add(args) -> int:
    store, editor = open_editor(args)
    phase = editor.add_phase(args.name)
    save(store, args.board)
    position = len(store.board.phases)
    output_result(
        {"position": position, "id": phase.id, "name": phase.name},
        f'Added phase "{phase.name}" at position {position}',
        args.json,
    )
    return 0


def phase_delete(args) -> int:
    store, editor = open_editor(args)
    index = to_index(args.position)
    before = len(store.board.blocks)
    name = store.board.phases[index].name if 0 <= index < len(store.board.phases) else None
    apply_or_die(editor.delete_phase, args.json, index)
    save(store, args.board)
    removed = before - len(store.board.blocks)
    output_result(
        {"position": args.position, "name": name, "blocks_removed": removed},
        f'Deleted phase "{name}" and {plural(removed, "block")}',
        args.json,
    )
    return 0


def phase_move(args) -> int:
    store, editor = open_editor(args)
    index = to_index(args.position)
    move = editor.move_phase_left if args.direction == "left" else editor.move_phase_right
    apply_or_die(move, args.json, index)
    save(store, args.board)
    names = [p.name for p in store.board.phases]
    output_result(
        {"phases": names},
        "Phases: " + ", ".join(names),
        args.json,
    )
    return 0


def phase_rename(args) -> int:
    store, editor = open_editor(args)
    apply_or_die(editor.rename_phase, args.json, to_index(args.position), args.name)
    save(store, args.board)
    output_result(
        {"position": args.position, "name": args.name},
        f'Renamed phase {args.position} to "{args.name}"',
        args.json,
    )
    return 0


def phase_toggle(args) -> int:
    store, editor = open_editor(args)
    index = to_index(args.position)
    apply_or_die(editor.toggle_phase, args.json, index)
    save(store, args.board)
    collapsed = store.board.phases[index].collapsed
    output_result(
        {"position": args.position, "collapsed": collapsed},
        f"Phase {args.position} {'collapsed' if collapsed else 'expanded'}",
        args.json,
    )
    return 0
