"""Maze engine: seeded generation, grid primitives and the shortest-path oracle."""

from .grid import (
    AGENT,
    FLOOR,
    GOAL,
    START,
    WALL,
    Grid,
    Position,
    cell_at,
    coerce_odd_dimensions,
    find_glyph,
    goal_position,
    grid_size,
    is_passable,
    start_position,
    validate_grid,
)
from .rng import Mulberry32
from .profiles import (
    CORRIDOR_PROFILES,
    TRAP_REMOVAL_PROFILES,
    Difficulty,
    DifficultyProfile,
    GenerationScheme,
    resolve_profile,
)
from .generator import generate_maze
from .pathfinding import (
    ShortestPathResult,
    find_shortest_path,
    path_to_directions,
    solve_maze,
)

__all__ = [
    "AGENT",
    "FLOOR",
    "GOAL",
    "START",
    "WALL",
    "Grid",
    "Position",
    "cell_at",
    "coerce_odd_dimensions",
    "find_glyph",
    "goal_position",
    "grid_size",
    "is_passable",
    "start_position",
    "validate_grid",
    "Mulberry32",
    "CORRIDOR_PROFILES",
    "TRAP_REMOVAL_PROFILES",
    "Difficulty",
    "DifficultyProfile",
    "GenerationScheme",
    "resolve_profile",
    "generate_maze",
    "ShortestPathResult",
    "find_shortest_path",
    "path_to_directions",
    "solve_maze",
]
