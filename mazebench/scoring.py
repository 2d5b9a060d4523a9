"""
Run recording, efficiency scoring and aggregate statistics.

The maze engine's contract with the agent-calling side is small: an
environment to drive, and a precomputed optimal path length per maze. This
module joins the two into scored ``RunResult`` records:

    recorder = RunRecorder(record, max_steps=200)
    while not recorder.done and not recorder.budget_exhausted:
        recorder.move(agent.choose(recorder.observation))
    result = recorder.finish(model="my-agent")

Efficiency is ``optimal_path_length / total_steps`` for successful runs and 0
otherwise (failed run, or a maze whose goal was unreachable).
"""

from __future__ import annotations

from datetime import datetime, timezone
from statistics import fmean
from typing import Dict, Iterable, List, Optional, Union

from mazebench.config import Config
from mazebench.environment import (
    MazeEnvState,
    MoveResult,
    create_environment,
    move,
    observe,
    parse_direction,
)
from mazebench.maze import GOAL, find_glyph, goal_position, start_position
from mazebench.schemas import (
    BenchmarkStats,
    ConfigStats,
    Direction,
    MazeRecord,
    OverallStats,
    RunResult,
    StepTrace,
)


def efficiency_score(
    optimal_path_length: Optional[int],
    total_steps: int,
    success: bool,
) -> float:
    """Score a run; 1.0 means the agent walked a shortest path."""
    if not success or optimal_path_length is None or total_steps <= 0:
        return 0.0
    return optimal_path_length / total_steps


class RunRecorder:
    """Drives one environment and keeps the step trace for the result record."""

    def __init__(
        self,
        record: MazeRecord,
        *,
        max_steps: Optional[int] = None,
        keep_observations: bool = True,
    ):
        self.record = record
        self.max_steps = Config.MAX_STEPS if max_steps is None else max_steps
        self.keep_observations = keep_observations
        self.state: MazeEnvState = create_environment(record)
        self.trace: List[StepTrace] = []

    @property
    def observation(self) -> str:
        return observe(self.state)

    @property
    def done(self) -> bool:
        return self.state.done

    @property
    def budget_exhausted(self) -> bool:
        return self.state.steps >= self.max_steps

    def move(
        self,
        direction: Union[Direction, str],
        reasoning: Optional[str] = None,
    ) -> MoveResult:
        """Apply a move and append it to the trace (no-op moves are not traced)."""
        parsed = parse_direction(direction)
        before = self.state.position
        steps_before = self.state.steps
        result = move(self.state, parsed)
        if self.state.steps != steps_before:
            self.trace.append(
                StepTrace(
                    step=self.state.steps,
                    action=parsed,
                    pos_before=before,
                    pos_after=self.state.position,
                    success=self.state.success,
                    observation=result.observation if self.keep_observations else None,
                    reasoning=reasoning,
                )
            )
        return result

    def finish(
        self,
        model: str,
        *,
        duration_ms: float = 0.0,
        cost: Optional[float] = None,
        error: Optional[BaseException | str] = None,
        timestamp: Optional[datetime] = None,
    ) -> RunResult:
        """Build the scored result record for this run."""
        goal = find_glyph(self.record.maze, GOAL) or goal_position(
            self.record.width, self.record.height
        )
        return RunResult(
            id=f"{model}_{self.record.id}",
            timestamp=timestamp or datetime.now(timezone.utc),
            config=self.record.config,
            model=model,
            maze=list(self.record.maze),
            start_pos=start_position(),
            goal_pos=goal,
            seed=self.record.seed,
            success=self.state.success,
            total_steps=self.state.steps,
            total_duration_ms=duration_ms,
            cost=cost,
            steps_trace=list(self.trace),
            last_observation=self.observation,
            error=str(error) if error is not None else None,
            optimal_path_length=self.record.optimal_path_length,
            efficiency_score=efficiency_score(
                self.record.optimal_path_length, self.state.steps, self.state.success
            ),
        )


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return fmean(values) if values else 0.0


def _block(results: List[RunResult]) -> Dict[str, float]:
    return {
        "success_rate": _mean(1.0 if r.success else 0.0 for r in results),
        "avg_steps": _mean(r.total_steps for r in results),
        "avg_time_ms": _mean(r.total_duration_ms for r in results),
        "total_cost": sum(r.cost or 0.0 for r in results),
        "avg_efficiency": _mean(r.efficiency_score for r in results),
    }


def compute_stats(results: Iterable[RunResult]) -> BenchmarkStats:
    """Aggregate run results overall and per ``{difficulty}_{mode}`` group."""
    results = list(results)
    grouped: Dict[str, List[RunResult]] = {}
    for result in results:
        grouped.setdefault(result.config.key, []).append(result)

    by_config = {
        key: ConfigStats(**_block(group), n=len(group))
        for key, group in grouped.items()
    }
    return BenchmarkStats(overall=OverallStats(**_block(results)), by_config=by_config)


def replay_directions(record: MazeRecord, directions: Iterable[Union[Direction, str]]) -> MazeEnvState:
    """Run a fixed move list against a fresh environment and return the final state."""
    state = create_environment(record)
    for direction in directions:
        move(state, direction)
    return state

