"""Tests for suite loading via SuiteLoader."""

import json
from pathlib import Path

import pytest

from mazebench.maze import Difficulty
from mazebench.schemas import ObservationMode
from mazebench.suites import (
    DEFAULT_BENCHMARK_CONFIGS,
    DEFAULT_SUITE,
    BenchmarkSuite,
    SuiteLoader,
    generate_mazes_for_suite,
    get_suites,
)

SHIPPED_SUITES = Path(__file__).parent.parent / "suites"


def write_suite(directory: Path, name: str, data: dict) -> Path:
    path = directory / f"{name}.json"
    path.write_text(json.dumps(data))
    return path


def test_default_matrix_layout():
    assert len(DEFAULT_BENCHMARK_CONFIGS) == 24
    first = DEFAULT_BENCHMARK_CONFIGS[0]
    assert (first.width, first.difficulty, first.observation_mode) == (
        5,
        Difficulty.SIMPLE,
        ObservationMode.LOCAL,
    )
    assert DEFAULT_BENCHMARK_CONFIGS[3].observation_mode == ObservationMode.GLOBAL
    assert DEFAULT_BENCHMARK_CONFIGS[-1].width == 31
    assert {c.difficulty for c in DEFAULT_BENCHMARK_CONFIGS} == {
        Difficulty.SIMPLE,
        Difficulty.COMPLEX,
        Difficulty.EXTREME,
    }


def test_shipped_quick_suite_loads():
    loader = SuiteLoader(suites_dir=SHIPPED_SUITES)
    suite = loader.load("quick")

    assert suite.id == "quick"
    assert suite.runs_per_config == 2
    assert len(suite.configs) == 4
    assert loader.list_suites() == ["default", "quick"]

    info = loader.get_suite_info("quick")
    assert info["num_configs"] == 4
    assert info["num_mazes"] == 8


def test_default_suite_falls_back_to_builtin(tmp_path):
    loader = SuiteLoader(suites_dir=tmp_path)
    assert loader.load("default") is DEFAULT_SUITE
    assert loader.list_suites() == ["default"]
    assert loader.get_suite_info("default")["num_mazes"] == 24


def test_default_json_overrides_builtin(tmp_path):
    write_suite(
        tmp_path,
        "default",
        {"name": "Tiny default", "configs": [{"width": 5, "height": 5, "difficulty": "simple", "observation_mode": "global"}]},
    )
    suite = SuiteLoader(suites_dir=tmp_path).load("default")
    assert suite.name == "Tiny default"
    assert len(suite.configs) == 1


def test_suite_accepts_legacy_config_keys(tmp_path):
    write_suite(
        tmp_path,
        "legacy",
        {
            "name": "Legacy keys",
            "configs": [
                {"width": 7, "height": 7, "complexity": "normal", "vision": "local"},
                {"width": 9, "height": 9, "complexity": "extreme", "observationMode": "global"},
            ],
        },
    )
    suite = SuiteLoader(suites_dir=tmp_path).load("legacy")

    assert suite.id == "legacy"
    assert suite.description == ""
    assert suite.configs[0].difficulty == Difficulty.NORMAL
    assert suite.configs[0].observation_mode == ObservationMode.LOCAL
    assert suite.configs[1].observation_mode == ObservationMode.GLOBAL
    assert SuiteLoader(suites_dir=tmp_path).get_suite_info("legacy")["description"] == "No description"


def test_seed_offset_defaults_to_config(tmp_path, monkeypatch):
    from mazebench.config import Config

    monkeypatch.setattr(Config, "SEED_OFFSET", 500)
    write_suite(
        tmp_path,
        "offset",
        {"name": "Offset", "configs": [{"width": 5, "height": 5, "difficulty": "simple", "observation_mode": "local"}]},
    )
    assert SuiteLoader(suites_dir=tmp_path).load("offset").seed_offset == 500


def test_missing_suite_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SuiteLoader(suites_dir=tmp_path).load("nope")


def test_missing_fields_raise(tmp_path):
    write_suite(tmp_path, "nameless", {"configs": [{"width": 5, "height": 5, "difficulty": "simple", "observation_mode": "local"}]})
    write_suite(tmp_path, "empty", {"name": "Empty", "configs": []})
    loader = SuiteLoader(suites_dir=tmp_path)

    with pytest.raises(ValueError, match="missing required fields"):
        loader.load("nameless")
    with pytest.raises(ValueError, match="at least one config"):
        loader.load("empty")


def test_underscore_files_are_not_listed(tmp_path):
    write_suite(tmp_path, "_draft", {"name": "Draft", "configs": []})
    write_suite(tmp_path, "mine", {"name": "Mine", "configs": [{"width": 5, "height": 5, "difficulty": "simple", "observation_mode": "local"}]})
    loader = SuiteLoader(suites_dir=tmp_path)

    assert loader.list_suites() == ["default", "mine"]
    assert [s.id for s in get_suites(loader)] == ["default", "mine"]


def test_generate_mazes_for_suite():
    suite = BenchmarkSuite(
        id="pair",
        name="Pair",
        configs=DEFAULT_BENCHMARK_CONFIGS[:2],
        runs_per_config=2,
        seed_offset=100,
    )
    records = generate_mazes_for_suite(suite)

    assert [r.seed for r in records] == [100, 101, 102, 103]
    assert records[0].id == "maze_0_5x5_simple_local_seed100"
    assert records[2].id == "maze_2_5x5_complex_local_seed102"
    assert all(r.optimal_path_length == 4 for r in records)
