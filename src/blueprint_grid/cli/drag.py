"""Handler for 'blueprint-grid drag': apply a drag-completion event."""

import json
import sys

from blueprint_grid.cli._common import error, open_editor, output_result, save
from blueprint_grid.drag import DragEvent


def drag_apply(args) -> int:
    """Read a drag event as JSON from stdin and apply it to the board."""
    try:
        event = DragEvent.from_dict(json.loads(sys.stdin.read()))
    except (ValueError, KeyError, TypeError) as e:
        error(f"Invalid drag event: {e}", args.json)

    store, editor = open_editor(args)
    editor.drag_start()
    result = editor.drag_end(event)
    editor.settle()

    if not result.changed:
        output_result({"action": None}, "Drop cancelled, board unchanged", args.json)
        return 0

    save(store, args.board)
    data = {"action": result.action}
    if result.block is not None:
        data["block"] = result.block.id
    output_result(data, f"Applied {result.action} for {event.dragged_id}", args.json)
    return 0
