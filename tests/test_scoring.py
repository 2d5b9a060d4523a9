"""Tests for run recording, efficiency scoring and run statistics."""

from datetime import datetime, timezone

import pytest

from mazebench.benchmark import build_maze_record
from mazebench.maze import Position, path_to_directions, solve_maze
from mazebench.schemas import BenchmarkConfig, MazeRecord
from mazebench.scoring import (
    RunRecorder,
    compute_stats,
    efficiency_score,
    replay_directions,
)


def make_record(difficulty="complex", mode="local", size=11, seed=12345):
    config = BenchmarkConfig(
        width=size, height=size, difficulty=difficulty, observation_mode=mode
    )
    return build_maze_record(0, config, seed)


def optimal_directions(record):
    return path_to_directions(solve_maze(record.maze).path)


def test_efficiency_score_rules():
    assert efficiency_score(10, 10, True) == 1.0
    assert efficiency_score(10, 20, True) == 0.5
    assert efficiency_score(10, 20, False) == 0.0
    assert efficiency_score(None, 20, True) == 0.0
    assert efficiency_score(0, 0, True) == 0.0


def test_optimal_run_scores_one():
    record = make_record()
    recorder = RunRecorder(record, max_steps=500)
    for direction in optimal_directions(record):
        recorder.move(direction)

    result = recorder.finish(model="oracle")
    assert result.success is True
    assert result.total_steps == record.optimal_path_length
    assert result.efficiency_score == 1.0
    assert result.id == f"oracle_{record.id}"
    assert result.start_pos == Position(x=1, y=1)
    assert result.goal_pos == Position(x=9, y=9)
    assert result.maze == list(record.maze)


def test_wall_bumps_lower_efficiency():
    record = make_record()
    recorder = RunRecorder(record)
    recorder.move("up")  # outer wall
    recorder.move("left")  # outer wall
    for direction in optimal_directions(record):
        recorder.move(direction)

    result = recorder.finish(model="bumper")
    assert result.total_steps == record.optimal_path_length + 2
    assert result.total_steps >= result.optimal_path_length
    assert result.efficiency_score == pytest.approx(
        record.optimal_path_length / (record.optimal_path_length + 2)
    )
    assert result.steps_trace[0].pos_before == result.steps_trace[0].pos_after


def test_trace_records_every_counted_move():
    record = make_record(size=5)
    recorder = RunRecorder(record)
    directions = optimal_directions(record)
    for direction in directions:
        recorder.move(direction, reasoning="follow the corridor")
    recorder.move("up")  # after success: no-op, not traced

    assert len(recorder.trace) == len(directions)
    assert [t.step for t in recorder.trace] == list(range(1, len(directions) + 1))
    assert [t.action.value for t in recorder.trace] == directions
    assert recorder.trace[-1].success is True
    assert recorder.trace[0].reasoning == "follow the corridor"
    assert all(t.observation for t in recorder.trace)


def test_budget_is_a_caller_policy():
    record = make_record()
    recorder = RunRecorder(record, max_steps=2, keep_observations=False)
    recorder.move("up")
    assert not recorder.budget_exhausted
    recorder.move("up")
    assert recorder.budget_exhausted

    # The environment itself keeps accepting moves past the budget
    recorder.move("up")
    assert recorder.state.steps == 3
    assert recorder.trace[0].observation is None

    result = recorder.finish(model="stuck", error=RuntimeError("budget exhausted"), cost=0.25)
    assert result.success is False
    assert result.efficiency_score == 0.0
    assert result.error == "budget exhausted"
    assert result.cost == 0.25


def test_replay_directions_matches_recorder():
    record = make_record()
    directions = optimal_directions(record)
    state = replay_directions(record, directions)
    assert state.success
    assert state.steps == len(directions)


def test_compute_stats_groups_by_difficulty_and_mode():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    results = []

    local = make_record(difficulty="simple", mode="local")
    recorder = RunRecorder(local)
    for direction in optimal_directions(local):
        recorder.move(direction)
    results.append(recorder.finish(model="m", duration_ms=100.0, cost=0.5, timestamp=now))

    glob = make_record(difficulty="simple", mode="global")
    recorder = RunRecorder(glob)
    recorder.move("up")
    recorder.move("up")
    results.append(recorder.finish(model="m", duration_ms=300.0, timestamp=now))

    stats = compute_stats(results)
    assert stats.overall.success_rate == 0.5
    assert stats.overall.avg_time_ms == 200.0
    assert stats.overall.total_cost == 0.5
    assert stats.overall.avg_efficiency == 0.5
    assert set(stats.by_config) == {"simple_local", "simple_global"}
    assert stats.by_config["simple_local"].success_rate == 1.0
    assert stats.by_config["simple_global"].avg_steps == 2.0
    assert stats.by_config["simple_global"].n == 1


def test_compute_stats_empty():
    stats = compute_stats([])
    assert stats.overall.success_rate == 0.0
    assert stats.by_config == {}


def test_finish_reports_goal_glyph_position():
    # Hand-built grid with the goal away from the default corner
    record = MazeRecord(
        id="maze_0_5x3_simple_global_seed1",
        config=BenchmarkConfig(width=5, height=3, difficulty="simple", observation_mode="global"),
        maze=("#####", "#SG #", "#####"),
        seed=1,
        optimal_path_length=1,
    )
    recorder = RunRecorder(record)
    recorder.move("right")

    result = recorder.finish(model="oracle")
    assert result.success is True
    assert result.goal_pos == Position(x=2, y=1)
    assert result.efficiency_score == 1.0
