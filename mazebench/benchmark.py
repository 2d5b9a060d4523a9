"""Reproducible benchmark maze sets.

A benchmark set is built from an ordered list of configs. Every maze gets the
next value of a running counter, and its seed is ``counter + seed_offset``, so
seeds stay small, dense and stable as long as the config order does not
change. Output order follows the config order with replicas grouped together.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence, Union

from mazebench.config import Config
from mazebench.logging_utils import log_deterministic, log_error
from mazebench.maze import GenerationScheme, generate_maze, solve_maze
from mazebench.schemas import BenchmarkConfig, MazeRecord

MAZE_ID_PATTERN = re.compile(
    r"^maze_(?P<counter>\d+)_(?P<width>\d+)x(?P<height>\d+)_"
    r"(?P<difficulty>[a-z]+)_(?P<mode>[a-z]+)_seed(?P<seed>-?\d+)$"
)


def format_maze_id(counter: int, config: BenchmarkConfig, seed: int) -> str:
    return (
        f"maze_{counter}_{config.width}x{config.height}_"
        f"{config.difficulty.value}_{config.observation_mode.value}_seed{seed}"
    )


def build_maze_record(
    counter: int,
    config: BenchmarkConfig,
    seed: int,
    scheme: Union[GenerationScheme, str] = GenerationScheme.CORRIDOR,
) -> MazeRecord:
    """Generate one maze and precompute its optimal path length."""
    grid = generate_maze(
        config.width, config.height, config.difficulty, seed, scheme=scheme
    )
    solution = solve_maze(grid)
    return MazeRecord(
        id=format_maze_id(counter, config, seed),
        config=config,
        maze=grid,
        seed=seed,
        optimal_path_length=solution.optimal_length,
    )


def build_benchmark_set(
    configs: Sequence[BenchmarkConfig],
    runs_per_config: Optional[int] = None,
    *,
    seed_offset: Optional[int] = None,
    scheme: Union[GenerationScheme, str, None] = None,
    verbose: bool = False,
) -> List[MazeRecord]:
    """Build the ordered maze collection shared by every agent run.

    Args:
        configs: Benchmark configs in the order they should appear.
        runs_per_config: Replicas per config. Defaults to ``Config.RUNS_PER_CONFIG``.
        seed_offset: Added to the running counter to get each seed.
            Defaults to ``Config.SEED_OFFSET``.
        scheme: Difficulty table to resolve tiers against.
            Defaults to ``Config.GENERATOR_SCHEME``.
        verbose: Print one line per generated maze.

    Raises:
        ValueError: If ``runs_per_config`` is below 1.
    """
    runs = Config.RUNS_PER_CONFIG if runs_per_config is None else runs_per_config
    offset = Config.SEED_OFFSET if seed_offset is None else seed_offset
    scheme = GenerationScheme(scheme or Config.GENERATOR_SCHEME)
    if runs < 1:
        raise ValueError(f"runs_per_config must be at least 1, got {runs}")

    records: List[MazeRecord] = []
    counter = 0
    for config in configs:
        for _ in range(runs):
            record = build_maze_record(counter, config, counter + offset, scheme)
            records.append(record)
            if verbose:
                if record.optimal_path_length is None:
                    log_error(f"{record.id}: goal unreachable")
                else:
                    log_deterministic(
                        f"{record.id}: optimal path {record.optimal_path_length} moves"
                    )
            counter += 1
    return records


def parse_maze_id(maze_id: str) -> Optional[Dict[str, Union[int, str]]]:
    """Split a maze id back into its parts, ``None`` if it is not one."""
    match = MAZE_ID_PATTERN.match(maze_id)
    if match is None:
        return None
    parts: Dict[str, Union[int, str]] = dict(match.groupdict())
    for key in ("counter", "width", "height", "seed"):
        parts[key] = int(parts[key])
    return parts


def seed_from_maze_id(maze_id: str) -> Optional[int]:
    """Extract the seed suffix from a maze or run id, ``None`` if absent."""
    match = re.search(r"seed(-?\d+)$", maze_id)
    return int(match.group(1)) if match else None


def filter_by_seeds(records: Iterable[MazeRecord], seeds: Iterable[int]) -> List[MazeRecord]:
    keep = set(seeds)
    return [record for record in records if record.seed in keep]
