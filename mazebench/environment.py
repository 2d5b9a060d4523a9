"""
Step-by-step maze simulation for a single agent run.

The environment is the only mutable piece of the engine. It starts at the
maze's start cell, applies one move per call and renders the text observation
that is handed to the agent-calling component.

Movement rules:
- Every move on a running environment costs one step, including moves that
  bump into a wall (position unchanged).
- Reaching the goal cell terminates the run with success.
- Once terminated, ``move`` is a no-op: the step count does not change and the
  same observation comes back with ``success=False``.
- No step budget lives here. Callers stop issuing moves when their own budget
  runs out (see ``mazebench.scoring.RunRecorder``).

Observation modes:
- ``global``: every grid row with ``A`` over the agent cell.
- ``local``: a 5x5 window centered on the agent; cells off the grid render as
  walls so the window always has the same shape.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from pydantic import BaseModel, Field

from mazebench.errors import InvalidDirectionError
from mazebench.maze import AGENT, GOAL, WALL, Position, cell_at, start_position
from mazebench.schemas import (
    DIRECTION_VECTORS,
    Direction,
    MazeRecord,
    ObservationMode,
)

LOCAL_VIEW_RADIUS = 2


class MazeEnvState(BaseModel):
    """Live state of one agent inside one maze."""

    maze_id: str
    maze: Tuple[str, ...]
    position: Position = Field(default_factory=start_position)
    steps: int = Field(0, ge=0, description="Moves issued while running, bumps included")
    done: bool = False
    success: bool = False
    observation_mode: ObservationMode = ObservationMode.LOCAL


class MoveResult(BaseModel):
    observation: str
    success: bool


def parse_direction(direction: Union[Direction, str]) -> Direction:
    """Normalize a direction string.

    Raises:
        InvalidDirectionError: If ``direction`` is not up/down/left/right.
    """
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(str(direction).strip().lower())
    except ValueError:
        raise InvalidDirectionError(
            f"Unknown direction {direction!r}; expected one of "
            f"{[d.value for d in Direction]}"
        ) from None


def create_environment(record: MazeRecord) -> MazeEnvState:
    """Fresh run state positioned on the start cell."""
    return MazeEnvState(
        maze_id=record.id,
        maze=record.maze,
        observation_mode=record.config.observation_mode,
    )


def move(state: MazeEnvState, direction: Union[Direction, str]) -> MoveResult:
    """Apply a single move and return the new observation.

    Raises:
        InvalidDirectionError: If ``direction`` is not a known direction. The
            check happens before anything else, terminated runs included.
    """
    parsed = parse_direction(direction)
    if state.done:
        return MoveResult(observation=observe(state), success=False)

    state.steps += 1
    dx, dy = DIRECTION_VECTORS[parsed]
    candidate = state.position.offset(dx, dy)
    glyph = cell_at(state.maze, candidate.x, candidate.y)
    if glyph is not None and glyph != WALL:
        state.position = candidate

    if cell_at(state.maze, state.position.x, state.position.y) == GOAL:
        state.done = True
        state.success = True

    return MoveResult(observation=observe(state), success=state.success)


def observe(state: MazeEnvState) -> str:
    """Render the observation text for the current state."""
    if state.observation_mode == ObservationMode.GLOBAL:
        return _render_global(state)
    return _render_local(state, LOCAL_VIEW_RADIUS)


def _render_global(state: MazeEnvState) -> str:
    px, py = state.position.x, state.position.y
    lines: List[str] = []
    for y, row in enumerate(state.maze):
        if y == py and 0 <= px < len(row):
            row = row[:px] + AGENT + row[px + 1:]
        lines.append(row)
    return "\n".join(lines)


def _render_local(state: MazeEnvState, radius: int) -> str:
    px, py = state.position.x, state.position.y
    lines: List[str] = []
    for dy in range(-radius, radius + 1):
        chars: List[str] = []
        for dx in range(-radius, radius + 1):
            if dx == 0 and dy == 0:
                chars.append(AGENT)
                continue
            glyph = cell_at(state.maze, px + dx, py + dy)
            chars.append(WALL if glyph is None else glyph)
        lines.append("".join(chars))
    return "\n".join(lines)
