"""Seeded procedural maze generation.

Generation works on a half-resolution lattice: odd coordinates are cell
centers and the even coordinate between two centers is their connector. The
pipeline is:

1. Fill the grid with walls.
2. Carve a spanning tree from (1, 1) by randomized backtracking (a perfect
   maze). The DFS keeps an explicit stack of frames, one per open cell, each
   holding its shuffled direction list and a cursor into it. Directions are
   shuffled when a cell is entered, so the random draws happen in the same
   order as the classic recursive formulation and a bias-free profile
   reproduces the reference mazes for a given seed.
3. Inject loops by opening random interior connectors.
4. Optionally seal dead ends (trap-removal scheme).
5. Stamp ``S`` at (1, 1) and ``G`` at (width - 2, height - 2).

Every random decision comes from one ``Mulberry32`` instance created per call.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from .grid import FLOOR, GOAL, START, WALL, Grid, coerce_odd_dimensions
from .profiles import (
    DifficultyProfile,
    GenerationScheme,
    ProfileLike,
    resolve_profile,
)
from .rng import Mulberry32

# Two-step lattice moves in up, right, down, left order.
CARVE_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -2), (2, 0), (0, 2), (-2, 0))
# Unit moves used for neighbor counting, same order.
UNIT_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

Cells = List[List[str]]


def _shuffle(items: list, rng: Mulberry32) -> list:
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def _in_interior(x: int, y: int, width: int, height: int) -> bool:
    return 0 < x < width - 1 and 0 < y < height - 1


def _ordered_directions(
    incoming: Tuple[int, int] | None,
    corridor_bias: float,
    rng: Mulberry32,
) -> List[Tuple[int, int]]:
    directions = _shuffle(list(CARVE_DIRECTIONS), rng)
    if incoming is not None and corridor_bias > 0 and rng.next_float() < corridor_bias:
        directions.remove(incoming)
        directions.insert(0, incoming)
    return directions


def carve_passages(
    cells: Cells,
    width: int,
    height: int,
    rng: Mulberry32,
    corridor_bias: float = 0.0,
) -> None:
    """Carve a spanning tree over the odd lattice starting from (1, 1)."""
    if not _in_interior(1, 1, width, height):
        return

    cells[1][1] = FLOOR
    # Frame: [x, y, shuffled directions, cursor]
    stack: List[list] = [[1, 1, _ordered_directions(None, corridor_bias, rng), 0]]

    while stack:
        frame = stack[-1]
        x, y, directions, cursor = frame
        if cursor >= len(directions):
            stack.pop()
            continue

        dx, dy = directions[cursor]
        frame[3] = cursor + 1
        nx, ny = x + dx, y + dy
        if not _in_interior(nx, ny, width, height) or cells[ny][nx] != WALL:
            continue

        cells[y + dy // 2][x + dx // 2] = FLOOR
        cells[ny][nx] = FLOOR
        stack.append(
            [nx, ny, _ordered_directions((dx, dy), corridor_bias, rng), 0]
        )


def inject_loops(
    cells: Cells,
    width: int,
    height: int,
    rng: Mulberry32,
    loop_density: float,
) -> int:
    """Open random interior connectors to add cycles. Returns how many opened.

    A connector that would land on the outer ring is skipped, not clamped.
    """
    attempts = int(loop_density * width * height)
    cells_x = (width - 1) // 2
    cells_y = (height - 1) // 2
    if attempts <= 0 or cells_x == 0 or cells_y == 0:
        return 0

    opened = 0
    for _ in range(attempts):
        cx = 1 + 2 * rng.randrange(cells_x)
        cy = 1 + 2 * rng.randrange(cells_y)
        if rng.next_float() < 0.5:
            x, y = cx + 1, cy
        else:
            x, y = cx, cy + 1
        if not _in_interior(x, y, width, height):
            continue
        if cells[y][x] == WALL:
            cells[y][x] = FLOOR
            opened += 1
    return opened


def _open_neighbors(cells: Cells, x: int, y: int) -> int:
    return sum(1 for dx, dy in UNIT_DIRECTIONS if cells[y + dy][x + dx] != WALL)


def fill_dead_ends(
    cells: Cells,
    width: int,
    height: int,
    rng: Mulberry32,
    fill_ratio: float,
) -> int:
    """Seal dead-end cells until a pass changes nothing or the cap is hit.

    Start and goal coordinates are never sealed. Removing a cell with a single
    open neighbor cannot disconnect the remaining cells, so the start-goal
    route survives. Returns the number of sealed cells.
    """
    if fill_ratio <= 0:
        return 0

    cap = max(1, int(width * height * fill_ratio) // 4)
    protected = {(1, 1), (width - 2, height - 2)}
    filled = 0

    while filled < cap:
        changed = False
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                if cells[y][x] == WALL or (x, y) in protected:
                    continue
                if _open_neighbors(cells, x, y) != 1:
                    continue
                if rng.next_float() < fill_ratio:
                    cells[y][x] = WALL
                    filled += 1
                    changed = True
                    if filled >= cap:
                        return filled
        if not changed:
            break
    return filled


def generate_maze(
    width: int,
    height: int,
    profile: ProfileLike,
    seed: int,
    *,
    scheme: Union[GenerationScheme, str] = GenerationScheme.CORRIDOR,
) -> Grid:
    """Generate a maze as a tuple of row strings.

    Args:
        width: Requested width; even values are bumped to the next odd number.
        height: Requested height; same coercion as ``width``.
        profile: Difficulty tier name, ``Difficulty`` or explicit
            ``DifficultyProfile``.
        seed: Seed for the maze's private ``Mulberry32`` stream.
        scheme: Profile table used when ``profile`` is a tier name.

    Returns:
        Row-major tuple of equal-length strings over ``# SG``.

    Raises:
        InvalidDimensionsError: If width or height is below 1.
    """
    width, height = coerce_odd_dimensions(width, height)
    params: DifficultyProfile = resolve_profile(profile, scheme)
    rng = Mulberry32(seed)

    cells: Cells = [[WALL] * width for _ in range(height)]
    carve_passages(cells, width, height, rng, params.corridor_bias)
    inject_loops(cells, width, height, rng, params.loop_density)
    fill_dead_ends(cells, width, height, rng, params.dead_end_fill)

    if _in_interior(1, 1, width, height):
        cells[1][1] = START
        cells[height - 2][width - 2] = GOAL

    return tuple("".join(row) for row in cells)
