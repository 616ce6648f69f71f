"""Shared helpers for CLI command handlers."""

import json
import logging
import sys
from pathlib import Path

from blueprint_grid.editor import CONFIG_FILE, BoardEditor, load_config
from blueprint_grid.model.serialize import load_board, save_board
from blueprint_grid.model.types import BLOCK_TYPES, DEPARTMENTS, Board, BlockFilter
from blueprint_grid.store import BoardStore

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
    )


def load_board_or_die(path: str, json_mode: bool) -> Board:
    """Load board from a JSON file. Exit 1 with message if unreadable."""
    board_path = Path(path)
    if not board_path.exists():
        error(f"No board at {board_path}. Run 'blueprint-grid init' first.", json_mode)
    try:
        return load_board(board_path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        error(f"Cannot read {board_path}: {e}", json_mode)


def open_editor(args) -> tuple[BoardStore, BoardEditor]:
    """Load the board named by args and wrap it in a store and editor."""
    store = BoardStore(load_board_or_die(args.board, args.json))
    config = load_config(getattr(args, "config", None) or Path(args.board).with_name(CONFIG_FILE))
    return store, BoardEditor.for_store(store, config, build_filter(args))


def save(store: BoardStore, path: str) -> None:
    save_board(store.board, path)
    logger.info("saved %s", path)


def build_filter(args) -> BlockFilter | None:
    """BlockFilter from --department/--type options, or None if unset."""
    departments = frozenset(getattr(args, "department", None) or ())
    types = frozenset(getattr(args, "type", None) or ())
    for d in departments:
        if d not in DEPARTMENTS:
            error(f"Unknown department '{d}'. Choose from: {', '.join(DEPARTMENTS)}", args.json)
    for t in types:
        if t not in BLOCK_TYPES:
            error(f"Unknown block type '{t}'. Choose from: {', '.join(BLOCK_TYPES)}", args.json)
    if not departments and not types:
        return None
    return BlockFilter(departments=departments, types=types)


def apply_or_die(fn, json_mode: bool, *args, **kwargs):
    """Call an editor operation, turning index/lookup errors into exit 1."""
    try:
        return fn(*args, **kwargs)
    except IndexError as e:
        error(str(e), json_mode)
    except KeyError as e:
        error(f"Block {e.args[0]} not found.", json_mode)
    except ValueError as e:
        error(str(e), json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def to_index(position: int) -> int:
    """CLI positions are 1-indexed, the model is 0-indexed."""
    return position - 1


def plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"
