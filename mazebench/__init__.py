"""
Mazebench - maze-navigation benchmark engine for LLM agents.

Seeded maze generation, a shortest-path oracle, a step-by-step environment
and scoring helpers. Pure library: no network, no global state, no required
storage backend.
"""

__version__ = "0.1.0"

from .errors import (
    MazebenchError,
    InvalidDimensionsError,
    InvalidDirectionError,
    InvalidGridError,
)
from .maze import (
    Difficulty,
    DifficultyProfile,
    GenerationScheme,
    Mulberry32,
    Position,
    ShortestPathResult,
    find_shortest_path,
    generate_maze,
    solve_maze,
)
from .schemas import (
    BenchmarkConfig,
    BenchmarkReport,
    BenchmarkStats,
    Direction,
    MazeRecord,
    ObservationMode,
    RunResult,
    StepTrace,
)
from .environment import MazeEnvState, MoveResult, create_environment, move, observe
from .benchmark import build_benchmark_set, format_maze_id
from .scoring import RunRecorder, compute_stats, efficiency_score
from .persistence import ArchiveStrategy, InMemoryArchive, JsonArchive
from .suites import (
    DEFAULT_BENCHMARK_CONFIGS,
    BenchmarkSuite,
    SuiteLoader,
    generate_mazes_for_suite,
    get_suites,
)

__all__ = [
    # Errors
    "MazebenchError",
    "InvalidDimensionsError",
    "InvalidDirectionError",
    "InvalidGridError",
    # Maze engine
    "Difficulty",
    "DifficultyProfile",
    "GenerationScheme",
    "Mulberry32",
    "Position",
    "ShortestPathResult",
    "find_shortest_path",
    "generate_maze",
    "solve_maze",
    # Schemas
    "BenchmarkConfig",
    "BenchmarkReport",
    "BenchmarkStats",
    "Direction",
    "MazeRecord",
    "ObservationMode",
    "RunResult",
    "StepTrace",
    # Environment
    "MazeEnvState",
    "MoveResult",
    "create_environment",
    "move",
    "observe",
    # Benchmark sets and scoring
    "build_benchmark_set",
    "format_maze_id",
    "RunRecorder",
    "compute_stats",
    "efficiency_score",
    # Archives and suites
    "ArchiveStrategy",
    "InMemoryArchive",
    "JsonArchive",
    "DEFAULT_BENCHMARK_CONFIGS",
    "BenchmarkSuite",
    "SuiteLoader",
    "generate_mazes_for_suite",
    "get_suites",
]
