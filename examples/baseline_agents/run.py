"""
Baseline agents on the quick suite

Runs two reference agents against every maze of a suite and archives the
reports, so LLM runs have something to be compared against:

- oracle: replays the BFS shortest path (efficiency 1.0 on every maze)
- random: seeded random walk, stops at the step budget

Run: python examples/baseline_agents/run.py --suite quick
"""

import argparse
import asyncio
import random
import time
from datetime import datetime, timezone
from typing import List

from mazebench import (
    BenchmarkReport,
    JsonArchive,
    RunRecorder,
    RunResult,
    SuiteLoader,
    compute_stats,
    generate_mazes_for_suite,
)
from mazebench.config import Config
from mazebench.logging_utils import log_info, log_success, render_maze_preview
from mazebench.maze import path_to_directions, solve_maze
from mazebench.schemas import MazeRecord, ReportMetadata

DIRECTIONS = ["up", "down", "left", "right"]


def run_oracle(record: MazeRecord) -> RunResult:
    started = time.perf_counter()
    recorder = RunRecorder(record, keep_observations=False)
    solution = solve_maze(record.maze)
    for direction in path_to_directions(solution.path):
        recorder.move(direction, reasoning="shortest path")
    return recorder.finish(
        model="oracle",
        duration_ms=(time.perf_counter() - started) * 1000,
        cost=0.0,
    )


def run_random(record: MazeRecord) -> RunResult:
    started = time.perf_counter()
    rng = random.Random(record.seed)
    recorder = RunRecorder(record, keep_observations=False)
    while not recorder.done and not recorder.budget_exhausted:
        recorder.move(rng.choice(DIRECTIONS))
    error = None if recorder.done else f"step budget of {recorder.max_steps} exhausted"
    return recorder.finish(
        model="random",
        duration_ms=(time.perf_counter() - started) * 1000,
        cost=0.0,
        error=error,
    )


def make_report(model: str, suite_id: str, results: List[RunResult]) -> BenchmarkReport:
    return BenchmarkReport(
        metadata=ReportMetadata(
            model=model,
            display_name=f"{model} baseline",
            creator="mazebench",
            date=datetime.now(timezone.utc),
            seeds=[r.seed for r in results],
            suite=suite_id,
        ),
        stats=compute_stats(results),
        results=results,
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run oracle and random-walk baselines against a maze suite"
    )
    parser.add_argument(
        "--suite",
        default="quick",
        help="Suite id to load from the suites directory (default: quick)"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Step budget for the random walker (default: MAZEBENCH_MAX_STEPS)"
    )
    return parser.parse_args()


async def main():
    args = parse_args()
    suite_id = args.suite
    if args.max_steps is not None:
        Config.MAX_STEPS = args.max_steps
    Config.validate()
    print(Config.display())

    suite = SuiteLoader().load(suite_id)
    records = generate_mazes_for_suite(suite, verbose=True)

    first = records[0]
    solution = solve_maze(first.maze)
    print()
    print(render_maze_preview(first.maze, [p.as_tuple() for p in solution.path]))
    print()

    archive = JsonArchive(Config.RESULTS_DIR)
    await archive.initialize()
    await archive.save_maze_set(suite.id, records)

    for model, agent in (("oracle", run_oracle), ("random", run_random)):
        results = [agent(record) for record in records]
        report = make_report(model, suite.id, results)
        await archive.save_report(f"{model}_{suite.id}", report)

        overall = report.stats.overall
        log_success(
            f"{model}: success {overall.success_rate * 100:.1f}%, "
            f"avg steps {overall.avg_steps:.1f}, "
            f"avg efficiency {overall.avg_efficiency:.2f}"
        )
        for key, stats in report.stats.by_config.items():
            log_info(f"  {key}: {stats.success_rate * 100:.0f}% over {stats.n} runs")

    await archive.close()


if __name__ == "__main__":
    asyncio.run(main())
