"""
Optimal-path analysis over archived run results.

Run reports store the maze grid and seed next to every result, so the oracle
can re-derive optimal path lengths long after a benchmark ran, even for
reports produced before lengths were precomputed. Typical flow:

    mazes = extract_unique_mazes(results)
    entries = compute_optimal_paths(mazes, seeds={12345, 12346})
    print(format_optimal_path_stats(optimal_path_stats(entries)))
    scored = enhance_results(results, entries)

Report-level helpers return rewritten ``BenchmarkReport`` copies with stats
recomputed, ready to be saved back through an archive.

Mazes are deduplicated by ``{seed}_{difficulty}_{mode}_{w}x{h}`` and each seed
is solved once; the oracle is pure, so solving the archived grid and solving
a freshly regenerated one give the same answer.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

from mazebench.benchmark import seed_from_maze_id
from mazebench.logging_utils import log_deterministic, log_error
from mazebench.maze import Position, find_shortest_path, validate_grid
from mazebench.maze.pathfinding import ShortestPathResult
from mazebench.schemas import BenchmarkConfig, BenchmarkReport, RunResult
from mazebench.scoring import compute_stats, efficiency_score


class ArchivedMaze(BaseModel):
    """A maze as it appears inside a run result."""

    config: BenchmarkConfig
    maze: List[str]
    start_pos: Position
    goal_pos: Position
    seed: int

    @field_validator("maze")
    @classmethod
    def _check_grid(cls, value: List[str]) -> List[str]:
        return list(validate_grid(value))


class OptimalPathEntry(BaseModel):
    seed: int
    config: BenchmarkConfig
    result: ShortestPathResult


class ConfigPathStats(BaseModel):
    avg_optimal_length: float = 0.0
    reachable: int = 0
    total: int = 0


class OptimalPathStats(BaseModel):
    reachable_rate: float
    total_mazes: int
    total_reachable: int
    by_config: Dict[str, ConfigPathStats] = Field(default_factory=dict)


def maze_key(seed: int, config: BenchmarkConfig) -> str:
    return (
        f"{seed}_{config.difficulty.value}_{config.observation_mode.value}_"
        f"{config.width}x{config.height}"
    )


def extract_unique_mazes(results: Iterable[RunResult]) -> Dict[str, ArchivedMaze]:
    """Collect one archived maze per seed/config key, first occurrence wins."""
    mazes: Dict[str, ArchivedMaze] = {}
    for result in results:
        key = maze_key(result.seed, result.config)
        if key in mazes:
            continue
        mazes[key] = ArchivedMaze(
            config=result.config,
            maze=result.maze,
            start_pos=result.start_pos,
            goal_pos=result.goal_pos,
            seed=result.seed,
        )
    return mazes


def compute_optimal_paths(
    mazes: Dict[str, ArchivedMaze],
    seeds: Optional[Iterable[int]] = None,
    *,
    verbose: bool = False,
) -> List[OptimalPathEntry]:
    """Run the oracle once per seed, optionally restricted to ``seeds``."""
    wanted = set(seeds) if seeds is not None else None
    entries: List[OptimalPathEntry] = []
    processed: set[int] = set()

    for archived in mazes.values():
        if wanted is not None and archived.seed not in wanted:
            continue
        if archived.seed in processed:
            continue

        result = find_shortest_path(archived.maze, archived.start_pos, archived.goal_pos)
        entries.append(OptimalPathEntry(seed=archived.seed, config=archived.config, result=result))
        processed.add(archived.seed)

        if verbose:
            if result.reachable:
                log_deterministic(f"Seed {archived.seed}: optimal path length = {result.length}")
            else:
                log_error(f"Seed {archived.seed}: goal not reachable")

    return entries


def optimal_path_stats(entries: Iterable[OptimalPathEntry]) -> OptimalPathStats:
    """Reachability rate and average optimal length, overall and per config."""
    by_config: Dict[str, ConfigPathStats] = {}
    total = 0
    reachable = 0

    for entry in entries:
        key = (
            f"{entry.config.difficulty.value}_{entry.config.observation_mode.value}_"
            f"{entry.config.width}x{entry.config.height}"
        )
        stats = by_config.setdefault(key, ConfigPathStats())
        total += 1
        stats.total += 1
        if entry.result.reachable:
            reachable += 1
            stats.reachable += 1
            stats.avg_optimal_length += entry.result.length

    for stats in by_config.values():
        if stats.reachable:
            stats.avg_optimal_length /= stats.reachable

    return OptimalPathStats(
        reachable_rate=reachable / total if total else 0.0,
        total_mazes=total,
        total_reachable=reachable,
        by_config=by_config,
    )


def format_optimal_path_stats(stats: OptimalPathStats) -> str:
    lines = [
        "=== OPTIMAL PATH STATISTICS ===",
        f"Overall reachable rate: {stats.reachable_rate * 100:.1f}%",
        f"Total mazes: {stats.total_mazes}",
        f"Reachable mazes: {stats.total_reachable}",
        "",
        "By configuration:",
    ]
    for key, data in stats.by_config.items():
        pct = data.reachable / data.total * 100 if data.total else 0.0
        lines.append(f"  {key}:")
        lines.append(f"    Reachable: {data.reachable}/{data.total} ({pct:.1f}%)")
        if data.reachable:
            lines.append(f"    Avg optimal length: {data.avg_optimal_length:.1f}")
    return "\n".join(lines)


def enhance_results(
    results: Iterable[RunResult],
    entries: Iterable[OptimalPathEntry],
) -> List[RunResult]:
    """Return copies of ``results`` with optimal length and efficiency filled in.

    Results whose seed has no entry are returned unchanged.
    """
    by_seed: Dict[int, ShortestPathResult] = {entry.seed: entry.result for entry in entries}
    enhanced: List[RunResult] = []
    for result in results:
        optimal = by_seed.get(result.seed)
        if optimal is None:
            enhanced.append(result)
            continue
        length = optimal.optimal_length
        enhanced.append(
            result.model_copy(
                update={
                    "optimal_path_length": length,
                    "efficiency_score": efficiency_score(
                        length, result.total_steps, result.success
                    ),
                }
            )
        )
    return enhanced


def filter_results_by_seeds(results: Iterable[RunResult], seeds: Iterable[int]) -> List[RunResult]:
    """Keep results whose id ends in one of ``seeds``; ids without a seed are dropped."""
    keep = set(seeds)
    return [r for r in results if seed_from_maze_id(r.id) in keep]


def enhance_report(report: BenchmarkReport, entries: Iterable[OptimalPathEntry]) -> BenchmarkReport:
    """Copy of ``report`` with enhanced results and stats recomputed from them."""
    results = enhance_results(report.results, entries)
    return report.model_copy(update={"results": results, "stats": compute_stats(results)})


def filter_report(report: BenchmarkReport, seeds: Iterable[int]) -> BenchmarkReport:
    """Copy of ``report`` restricted to ``seeds``.

    ``metadata.seeds`` is replaced by the requested seeds and stats are
    recomputed over the kept results only.
    """
    seeds = list(seeds)
    results = filter_results_by_seeds(report.results, seeds)
    metadata = report.metadata.model_copy(update={"seeds": seeds})
    return report.model_copy(
        update={"metadata": metadata, "results": results, "stats": compute_stats(results)}
    )


def optimal_paths_document(
    entries: Iterable[OptimalPathEntry],
    generated: Optional[datetime] = None,
) -> Dict[str, Any]:
    """JSON-ready export of optimal-path entries keyed by seed.

    Unreachable entries carry ``"length": null`` so the document stays valid
    JSON.
    """
    entries = list(entries)
    generated = generated or datetime.now(timezone.utc)
    return {
        "metadata": {
            "generated": generated.isoformat(),
            "totalMazes": len(entries),
            "reachableMazes": sum(1 for e in entries if e.result.reachable),
        },
        "optimalPaths": {
            str(entry.seed): {
                "seed": entry.seed,
                "config": entry.config.model_dump(mode="json"),
                "result": {
                    "reachable": entry.result.reachable,
                    "length": entry.result.optimal_length,
                    "path": [p.model_dump() for p in entry.result.path],
                },
            }
            for entry in entries
        },
    }
