"""Convert boards to and from plain dicts and JSON files.

Wire keys are camelCase to match the stored board documents. Keys this
package does not model are kept in each object's ``extra`` dict and
written back unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from blueprint_grid.model.types import Block, Board, Column, Phase

_COLUMN_KEYS = {"id", "name", "image"}
_PHASE_KEYS = {"id", "name", "collapsed", "columns"}
_BLOCK_KEYS = {
    "id": "id",
    "type": "type",
    "content": "content",
    "phaseIndex": "phase_index",
    "columnIndex": "column_index",
    "comments": "comments",
    "attachments": "attachments",
    "notes": "notes",
    "emoji": "emoji",
    "department": "department",
    "customDepartment": "custom_department",
    "isDivider": "is_divider",
    "flagged": "flagged",
}


def _extra(data: dict, known) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def column_from_dict(data: dict) -> Column:
    return Column(
        id=str(data["id"]),
        name=data.get("name", ""),
        image=data.get("image") or None,
        extra=_extra(data, _COLUMN_KEYS),
    )


def phase_from_dict(data: dict) -> Phase:
    return Phase(
        id=str(data["id"]),
        name=data.get("name", ""),
        collapsed=bool(data.get("collapsed", False)),
        columns=[column_from_dict(c) for c in data.get("columns") or []],
        extra=_extra(data, _PHASE_KEYS),
    )


def block_from_dict(data: dict) -> Block:
    kwargs = {attr: data[key] for key, attr in _BLOCK_KEYS.items() if data.get(key) is not None}
    kwargs.setdefault("content", "")
    kwargs["phase_index"] = int(kwargs["phase_index"])
    kwargs["column_index"] = int(kwargs["column_index"])
    return Block(**kwargs, extra=_extra(data, _BLOCK_KEYS))


def board_from_dict(data: dict) -> Board:
    return Board(
        id=str(data.get("id", "")),
        name=data.get("name", ""),
        phases=[phase_from_dict(p) for p in data.get("phases") or []],
        blocks=[block_from_dict(b) for b in data.get("blocks") or []],
    )


def column_to_dict(column: Column) -> dict:
    data = {"id": column.id, "name": column.name}
    if column.image:
        data["image"] = column.image
    data.update(column.extra)
    return data


def phase_to_dict(phase: Phase) -> dict:
    data = {
        "id": phase.id,
        "name": phase.name,
        "collapsed": phase.collapsed,
        "columns": [column_to_dict(c) for c in phase.columns],
    }
    data.update(phase.extra)
    return data


def block_to_dict(block: Block) -> dict:
    data = {}
    for key, attr in _BLOCK_KEYS.items():
        value = getattr(block, attr)
        if value is None:
            continue
        data[key] = value
    data.update(block.extra)
    return data


def board_to_dict(board: Board) -> dict:
    return {
        "id": board.id,
        "name": board.name,
        "phases": [phase_to_dict(p) for p in board.phases],
        "blocks": [block_to_dict(b) for b in board.blocks],
    }


def load_board(path: str | Path) -> Board:
    """Read a board from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return board_from_dict(json.load(f))


def save_board(board: Board, path: str | Path) -> None:
    """Write a board to a JSON file, replacing it atomically."""
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(board_to_dict(board), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    tmp.replace(path)
