"""Pure functions for building terminal views of a board."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from blueprint_grid.model.locate import column_blocks
from blueprint_grid.model.types import Block, BlockFilter, Board, Coordinate, layer_label

ICON_FLAG = "\u2691"  # ⚑
DIVIDER_CHAR = "\u2500"

LAYER_STYLES = {
    "touchpoint": "bold blue",
    "email": "blue",
    "pendo": "cyan",
    "role": "green",
    "process": "magenta",
    "friction": "red",
    "policy": "dark_orange",
    "technology": "purple",
    "rationale": "bright_blue",
    "question": "violet",
    "note": "bright_cyan",
    "hidden": "dim",
}


def build_block_text(block: Block) -> Text:
    """One line for a block: emoji, type label, content, flag."""
    style = LAYER_STYLES.get(block.type, "")
    if block.is_divider:
        return Text(f"{DIVIDER_CHAR * 3} {block.content or layer_label(block.type)} {DIVIDER_CHAR * 3}", style="dim")
    result = Text()
    if block.emoji:
        result.append(f"{block.emoji} ")
    result.append(f"[{layer_label(block.type)}]", style=style)
    if block.content:
        result.append(f" {block.content}")
    if block.flagged:
        result.append(f" {ICON_FLAG}", style="red")
    return result


def build_board_table(board: Board, block_filter: BlockFilter | None = None) -> Table:
    """A table with one column per board column and one block per cell.

    Collapsed phases shrink to a single dim column with a block count.
    """
    table = Table(title=board.name or None, show_lines=False)
    cells: list[list[Text]] = []
    for p, phase in enumerate(board.phases):
        if phase.collapsed:
            count = sum(1 for b in board.blocks if b.phase_index == p)
            table.add_column(phase.name, style="dim")
            cells.append([Text(f"({count} blocks)", style="dim")])
            continue
        for c, column in enumerate(phase.columns):
            table.add_column(f"{phase.name} / {column.name}")
            shown = column_blocks(board.blocks, Coordinate(p, c), block_filter)
            cells.append([build_block_text(b) for b in shown])
    depth = max((len(col) for col in cells), default=0)
    for row in range(depth):
        table.add_row(*(col[row] if row < len(col) else Text() for col in cells))
    return table
