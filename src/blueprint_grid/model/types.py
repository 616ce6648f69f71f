"""Data shapes for blueprint boards and their placement invariants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# (type, label) in palette order.
LAYERS = (
    ("touchpoint", "Touchpoint"),
    ("email", "Email Touchpoint"),
    ("pendo", "Pendo Touchpoint"),
    ("role", "Role"),
    ("process", "Process"),
    ("friction", "Friction"),
    ("policy", "Policy"),
    ("technology", "Technology"),
    ("rationale", "Rationale"),
    ("question", "Question"),
    ("note", "Note"),
    ("hidden", "Hidden Step"),
    ("hypothesis", "Hypothesis"),
    ("insight", "Insight"),
    ("metrics", "Metrics"),
    ("experiment", "Experiment"),
    ("video", "Video"),
    ("front-stage", "Front Stage"),
    ("back-stage", "Back Stage"),
    ("custom-divider", "Divider"),
)

BLOCK_TYPES = tuple(t for t, _ in LAYERS)
DIVIDER_TYPES = frozenset({"front-stage", "back-stage", "custom-divider"})

# Touchpoints are seeded by default, so the palette leaves them out.
PALETTE_TYPES = tuple(t for t in BLOCK_TYPES if t != "touchpoint")

DEPARTMENTS = (
    "Engineering",
    "Marketing",
    "Product",
    "Design",
    "Brand",
    "Support",
    "Sales",
    "Custom",
)


def layer_label(block_type: str) -> str:
    """Return the display label for a block type."""
    for t, label in LAYERS:
        if t == block_type:
            return label
    raise ValueError(f"Unknown block type: {block_type!r}")


def default_content(block_type: str) -> str:
    """Text carried by a freshly created block of block_type."""
    label = layer_label(block_type)
    return label if block_type in DIVIDER_TYPES else ""


@dataclass(frozen=True)
class Coordinate:
    """A (phase index, column index) pair naming one column of the grid."""

    phase: int
    column: int

    def __str__(self) -> str:
        return f"{self.phase}-{self.column}"


@dataclass
class Column:
    id: str
    name: str
    image: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Phase:
    id: str
    name: str
    collapsed: bool = False
    columns: list[Column] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Block:
    """A content unit placed at (phase_index, column_index).

    Blocks live in the board's flat block list. Their order in that list
    is their order within a column.
    """

    id: str
    type: str
    content: str
    phase_index: int
    column_index: int
    comments: list[dict[str, Any]] = field(default_factory=list)
    attachments: list[dict[str, Any]] = field(default_factory=list)
    notes: str | None = None
    emoji: str | None = None
    department: str | None = None
    custom_department: str | None = None
    is_divider: bool = False
    flagged: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def coord(self) -> Coordinate:
        return Coordinate(self.phase_index, self.column_index)

    def at(self, coord: Coordinate) -> bool:
        """True if this block sits in the column named by coord."""
        return self.phase_index == coord.phase and self.column_index == coord.column


@dataclass
class Board:
    """Ordered phases plus the flat, order-significant block list."""

    id: str = ""
    name: str = ""
    phases: list[Phase] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)


@dataclass(frozen=True)
class BlockFilter:
    """Department/type filter for the visible block list of a column.

    Empty sets place no restriction.
    """

    departments: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()

    @property
    def active(self) -> bool:
        return bool(self.departments or self.types)

    def matches(self, block: Block) -> bool:
        if self.departments and block.department not in self.departments:
            return False
        if self.types and block.type not in self.types:
            return False
        return True


def has_coordinate(phases: list[Phase], coord: Coordinate) -> bool:
    """True if coord names an existing column."""
    if not 0 <= coord.phase < len(phases):
        return False
    return 0 <= coord.column < len(phases[coord.phase].columns)


def check_board(board: Board) -> None:
    """Raise if any block points outside the grid or an id repeats."""
    seen: set[str] = set()
    for block in board.blocks:
        if not has_coordinate(board.phases, block.coord):
            raise IndexError(f"Block {block.id} has out-of-range coordinate {block.coord}")
        if block.id in seen:
            raise ValueError(f"Duplicate block id {block.id}")
        seen.add(block.id)
