"""
Pydantic schemas for the maze benchmark.

Everything that crosses a boundary (benchmark configs, maze records, run
results, reports) is defined here so archives round-trip through one set of
models.

Design notes:
- Field names are snake_case; validation also accepts the camelCase keys used
  by older JSON archives (``totalSteps``, ``optimalPathLength``...).
- Configuration keeps difficulty and observation mode on separate enums.
  Legacy ``complexity`` / ``vision`` / ``observationMode`` keys map onto them.
- ``MazeRecord`` is frozen: a record is created once per benchmark build and
  shared read-only by every run against that maze.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mazebench.maze import Difficulty, Position, validate_grid


class ObservationMode(str, Enum):
    """How much of the maze the agent sees after each move."""

    GLOBAL = "global"  # full grid
    LOCAL = "local"  # 5x5 window around the agent


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Unit vectors in (dx, dy); y grows downward.
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class _ArchiveModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Benchmark set schemas
# ============================================================================


class BenchmarkConfig(BaseModel):
    """One cell of the benchmark matrix: size, difficulty and observation mode."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    width: int = Field(..., ge=1, description="Requested width (coerced to odd)")
    height: int = Field(..., ge=1, description="Requested height (coerced to odd)")
    difficulty: Difficulty = Field(
        ...,
        validation_alias=AliasChoices("difficulty", "complexity"),
        description="Difficulty tier used to pick generation parameters",
    )
    observation_mode: ObservationMode = Field(
        ...,
        validation_alias=AliasChoices("observation_mode", "observationMode", "vision"),
        description="Full-grid or local-window observations",
    )

    @property
    def key(self) -> str:
        """Grouping key used by run statistics."""
        return f"{self.difficulty.value}_{self.observation_mode.value}"


class MazeRecord(_ArchiveModel):
    """A generated maze plus everything needed to score runs against it."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str = Field(..., description="maze_{counter}_{w}x{h}_{difficulty}_{mode}_seed{seed}")
    config: BenchmarkConfig = Field(
        ..., validation_alias=AliasChoices("config", "cfg"),
    )
    maze: Tuple[str, ...] = Field(..., description="Serialized grid rows")
    seed: int = Field(..., description="Seed the grid was generated from")
    optimal_path_length: Optional[int] = Field(
        None, description="Shortest start-goal move count; None when unreachable"
    )

    @field_validator("maze")
    @classmethod
    def _check_grid(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return validate_grid(value)

    @property
    def width(self) -> int:
        return len(self.maze[0]) if self.maze else 0

    @property
    def height(self) -> int:
        return len(self.maze)


# ============================================================================
# Run schemas
# ============================================================================


class StepTrace(_ArchiveModel):
    """One move issued by an agent during a run."""

    step: int = Field(..., ge=0)
    action: Direction
    pos_before: Position
    pos_after: Position
    success: bool
    observation: Optional[str] = None
    reasoning: Optional[str] = None


class RunResult(_ArchiveModel):
    """Outcome of one agent run against one maze record."""

    id: str
    timestamp: datetime
    config: BenchmarkConfig
    model: str = Field(..., description="Identifier of the agent or model under test")
    maze: List[str]
    start_pos: Position
    goal_pos: Position
    seed: int
    success: bool
    total_steps: int = Field(..., ge=0)
    total_duration_ms: float = Field(0.0, ge=0.0)
    cost: Optional[float] = None
    steps_trace: List[StepTrace] = Field(default_factory=list)
    last_observation: Optional[str] = None
    error: Optional[str] = None
    optimal_path_length: Optional[int] = None
    efficiency_score: float = Field(
        0.0, description="optimal_path_length / total_steps for successful runs, else 0"
    )


class ConfigStats(_ArchiveModel):
    success_rate: float
    avg_steps: float
    avg_time_ms: float
    total_cost: float
    avg_efficiency: float = 0.0
    n: int


class OverallStats(_ArchiveModel):
    success_rate: float
    avg_steps: float
    avg_time_ms: float
    total_cost: float
    avg_efficiency: float = 0.0


class BenchmarkStats(_ArchiveModel):
    overall: OverallStats
    by_config: Dict[str, ConfigStats] = Field(default_factory=dict)


class ReportMetadata(_ArchiveModel):
    model: str
    display_name: Optional[str] = None
    creator: Optional[str] = None
    date: datetime
    seeds: List[int] = Field(default_factory=list)
    suite: str = "default"


class BenchmarkReport(_ArchiveModel):
    """A model's full set of runs plus aggregate statistics."""

    metadata: ReportMetadata
    stats: BenchmarkStats
    results: List[RunResult] = Field(default_factory=list)
