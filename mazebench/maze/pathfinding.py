"""Shortest-path oracle over serialized grids.

Breadth-first search over 4-connected passable cells. The oracle knows nothing
about how a grid was produced, so it works the same on freshly generated mazes
and on grids read back from archived results.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from .grid import Position, goal_position, grid_size, is_passable, start_position

# Expansion order decides which shortest path is returned when several tie:
# up, right, down, left.
NEIGHBOR_ORDER: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

Coord = Tuple[int, int]
PositionLike = Union[Position, Tuple[int, int]]


class ShortestPathResult(BaseModel):
    """Outcome of a shortest-path query.

    ``length`` counts moves (positions minus one) and is ``math.inf`` when the
    goal cannot be reached.
    """

    reachable: bool
    length: Union[int, float] = Field(..., description="Move count, inf when unreachable")
    path: List[Position] = Field(default_factory=list)

    @property
    def optimal_length(self) -> Optional[int]:
        """Length as stored on maze records: an int, or ``None`` if unreachable."""
        return int(self.length) if self.reachable else None


def _coord(pos: PositionLike) -> Coord:
    if isinstance(pos, Position):
        return pos.as_tuple()
    return int(pos[0]), int(pos[1])


def _unreachable() -> ShortestPathResult:
    return ShortestPathResult(reachable=False, length=math.inf, path=[])


def find_shortest_path(
    grid: Sequence[str],
    start: PositionLike,
    goal: PositionLike,
) -> ShortestPathResult:
    """Return the BFS shortest path from ``start`` to ``goal``.

    Start and goal are ``(x, y)``. A start or goal that lies off the grid or on
    a wall is reported as unreachable rather than raising.
    """
    start_c = _coord(start)
    goal_c = _coord(goal)
    if not is_passable(grid, *start_c) or not is_passable(grid, *goal_c):
        return _unreachable()

    parents: Dict[Coord, Optional[Coord]] = {start_c: None}
    frontier: deque[Coord] = deque([start_c])

    while frontier:
        current = frontier.popleft()
        if current == goal_c:
            return _build_result(parents, goal_c)

        x, y = current
        for dx, dy in NEIGHBOR_ORDER:
            nxt = (x + dx, y + dy)
            if nxt in parents or not is_passable(grid, *nxt):
                continue
            parents[nxt] = current
            frontier.append(nxt)

    return _unreachable()


def _build_result(parents: Dict[Coord, Optional[Coord]], goal: Coord) -> ShortestPathResult:
    coords: List[Coord] = []
    node: Optional[Coord] = goal
    while node is not None:
        coords.append(node)
        node = parents[node]
    coords.reverse()
    return ShortestPathResult(
        reachable=True,
        length=len(coords) - 1,
        path=[Position(x=x, y=y) for x, y in coords],
    )


def solve_maze(grid: Sequence[str]) -> ShortestPathResult:
    """Shortest path between the canonical start (1, 1) and goal corner."""
    width, height = grid_size(grid)
    return find_shortest_path(grid, start_position(), goal_position(width, height))


def path_to_directions(path: Sequence[Position]) -> List[str]:
    """Translate consecutive positions into ``up``/``down``/``left``/``right``.

    Raises:
        ValueError: If two consecutive positions are not orthogonal neighbors.
    """
    names = {(0, -1): "up", (1, 0): "right", (0, 1): "down", (-1, 0): "left"}
    directions: List[str] = []
    for prev, nxt in zip(path, path[1:]):
        delta = (nxt.x - prev.x, nxt.y - prev.y)
        if delta not in names:
            raise ValueError(f"Positions {prev} and {nxt} are not adjacent")
        directions.append(names[delta])
    return directions
