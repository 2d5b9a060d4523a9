"""Serialized grid primitives.

A grid is an ordered sequence of equal-length row strings. Row ``y`` is the
``y``-th string and column ``x`` is the ``x``-th character, so every lookup in
this package is ``grid[y][x]``. The stored alphabet is fixed:

    ``#`` wall, `` `` floor, ``S`` start, ``G`` goal

Observations additionally overlay ``A`` on the agent cell, but that glyph never
appears in a stored grid.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from mazebench.errors import InvalidDimensionsError, InvalidGridError

WALL = "#"
FLOOR = " "
START = "S"
GOAL = "G"
AGENT = "A"

GRID_GLYPHS = frozenset({WALL, FLOOR, START, GOAL})

Grid = Tuple[str, ...]


class Position(BaseModel):
    """A cell coordinate; ``x`` is the column and ``y`` the row."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(x=self.x + dx, y=self.y + dy)


def coerce_odd_dimensions(width: int, height: int) -> Tuple[int, int]:
    """Validate a requested size and bump even sides up to the next odd number.

    Raises:
        InvalidDimensionsError: If either side is below 1.
    """
    if width < 1 or height < 1:
        raise InvalidDimensionsError(
            f"Maze dimensions must be at least 1x1, got {width}x{height}"
        )
    if width % 2 == 0:
        width += 1
    if height % 2 == 0:
        height += 1
    return width, height


def start_position() -> Position:
    return Position(x=1, y=1)


def goal_position(width: int, height: int) -> Position:
    """Goal cell for a grid of the given (already odd) size."""
    return Position(x=width - 2, y=height - 2)


def grid_size(grid: Sequence[str]) -> Tuple[int, int]:
    """Return ``(width, height)`` of a serialized grid."""
    height = len(grid)
    width = len(grid[0]) if height else 0
    return width, height


def cell_at(grid: Sequence[str], x: int, y: int) -> Optional[str]:
    """Glyph at ``(x, y)`` or ``None`` when the coordinate is off the grid."""
    if y < 0 or y >= len(grid):
        return None
    row = grid[y]
    if x < 0 or x >= len(row):
        return None
    return row[x]


def is_passable(grid: Sequence[str], x: int, y: int) -> bool:
    """Any in-bounds non-wall cell is passable (floor, start and goal alike)."""
    glyph = cell_at(grid, x, y)
    return glyph is not None and glyph != WALL


def iter_cells(grid: Sequence[str]) -> Iterator[Tuple[int, int, str]]:
    for y, row in enumerate(grid):
        for x, glyph in enumerate(row):
            yield x, y, glyph


def find_glyph(grid: Sequence[str], glyph: str) -> Optional[Position]:
    """First occurrence of ``glyph`` in row-major order."""
    for y, row in enumerate(grid):
        x = row.find(glyph)
        if x != -1:
            return Position(x=x, y=y)
    return None


def validate_grid(rows: Iterable[str]) -> Grid:
    """Check a serialized grid loaded from outside the generator.

    Rows must be non-empty, of equal length and drawn from the stored glyph
    alphabet. Returns the rows as an immutable tuple.

    Raises:
        InvalidGridError: If the rows are empty, ragged or contain foreign glyphs.
    """
    grid = tuple(rows)
    if not grid or not grid[0]:
        raise InvalidGridError("Grid must contain at least one non-empty row")

    width = len(grid[0])
    for y, row in enumerate(grid):
        if len(row) != width:
            raise InvalidGridError(
                f"Row {y} has length {len(row)}, expected {width}"
            )
        unknown = set(row) - GRID_GLYPHS
        if unknown:
            raise InvalidGridError(
                f"Row {y} contains unknown glyphs: {sorted(unknown)}"
            )
    return grid
