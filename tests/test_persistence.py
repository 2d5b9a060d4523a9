"""Tests for the in-memory and JSON benchmark archives."""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from mazebench.benchmark import build_benchmark_set
from mazebench.persistence import InMemoryArchive, JsonArchive, safe_filename
from mazebench.schemas import BenchmarkConfig, BenchmarkReport, ReportMetadata
from mazebench.scoring import RunRecorder, compute_stats

CONFIGS = [
    BenchmarkConfig(width=5, height=5, difficulty="simple", observation_mode="local"),
    BenchmarkConfig(width=7, height=7, difficulty="extreme", observation_mode="global"),
]


def make_report(model: str = "agent-x") -> BenchmarkReport:
    results = []
    for record in build_benchmark_set(CONFIGS, 1, seed_offset=12345):
        recorder = RunRecorder(record)
        for direction in ("right", "right", "down", "down"):
            recorder.move(direction, reasoning="head for the corner")
        results.append(
            recorder.finish(
                model=model,
                duration_ms=50.0,
                timestamp=datetime(2025, 6, 1, tzinfo=timezone.utc),
            )
        )
    return BenchmarkReport(
        metadata=ReportMetadata(
            model=model,
            date=datetime(2025, 6, 1, tzinfo=timezone.utc),
            seeds=[r.seed for r in results],
        ),
        stats=compute_stats(results),
        results=results,
    )


def test_safe_filename():
    assert safe_filename("[openai]gpt-5-nano") == "[openai]gpt-5-nano"
    assert safe_filename("anthropic/claude sonnet") == "anthropic_claude_sonnet"
    assert safe_filename("../..") == "unnamed"


@pytest.mark.asyncio
async def test_in_memory_archive_round_trip():
    archive = InMemoryArchive()
    await archive.initialize()

    records = build_benchmark_set(CONFIGS, 2, seed_offset=12345)
    await archive.save_maze_set("default", records)
    assert await archive.load_maze_set("default") == records
    assert await archive.load_maze_set("missing") is None
    assert await archive.list_maze_sets() == ["default"]

    report = make_report()
    await archive.save_report("agent-x", report)
    await archive.save_report("agent-y", make_report("agent-y"))

    loaded = await archive.load_reports()
    assert set(loaded) == {"agent-x", "agent-y"}
    assert loaded["agent-x"] == report
    assert loaded["agent-x"] is not report

    filtered = await archive.load_reports(name_filter="-y")
    assert list(filtered) == ["agent-y"]

    await archive.close()


@pytest.mark.asyncio
async def test_json_archive_round_trip(tmp_path):
    archive = JsonArchive(tmp_path / "results")
    await archive.initialize()
    assert (tmp_path / "results" / "mazes").is_dir()
    assert (tmp_path / "results" / "reports").is_dir()

    records = build_benchmark_set(CONFIGS, 2, seed_offset=12345)
    await archive.save_maze_set("quick", records)
    assert await archive.list_maze_sets() == ["quick"]
    assert await archive.load_maze_set("quick") == records
    assert await archive.load_maze_set("nope") is None

    report = make_report()
    await archive.save_report("agent-x", report)
    loaded = await archive.load_reports()
    assert loaded == {"agent-x": report}

    stored = loaded["agent-x"].results[0]
    assert stored.steps_trace[0].reasoning == "head for the corner"
    assert stored.optimal_path_length == 4

    await archive.close()


@pytest.mark.asyncio
async def test_json_archive_reads_camel_case_files(tmp_path):
    archive = JsonArchive(tmp_path)
    await archive.initialize()

    payload = make_report().model_dump(mode="json", by_alias=True)
    assert "totalSteps" in payload["results"][0]
    (tmp_path / "reports" / "legacy.json").write_text(json.dumps(payload), "utf-8")

    loaded = await archive.load_reports()
    assert loaded["legacy"].results[0].total_steps == 4


@pytest.mark.asyncio
async def test_json_archive_skips_invalid_reports(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("MAZEBENCH_NO_COLOR", "1")
    archive = JsonArchive(tmp_path)
    await archive.initialize()

    await archive.save_report("good", make_report())
    (tmp_path / "reports" / "broken.json").write_text('{"metadata": {}}', "utf-8")

    loaded = await archive.load_reports()
    assert list(loaded) == ["good"]
    assert "[!] Skipping report broken:" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_json_archive_missing_directories(tmp_path):
    archive = JsonArchive(tmp_path / "never-created")
    assert await archive.list_maze_sets() == []
    assert await archive.load_reports() == {}


@pytest.mark.asyncio
async def test_json_archive_reads_files_off_the_event_loop(tmp_path, monkeypatch):
    archive = JsonArchive(tmp_path)
    await archive.initialize()
    await archive.save_maze_set("quick", build_benchmark_set(CONFIGS, 1, seed_offset=12345))
    await archive.save_report("agent-x", make_report())

    loop_thread = threading.current_thread()
    readers = []
    original_read_text = Path.read_text

    def tracking_read_text(self, *args, **kwargs):
        readers.append(threading.current_thread())
        return original_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", tracking_read_text)
    await archive.load_maze_set("quick")
    await archive.load_reports()

    assert len(readers) == 2
    assert all(reader is not loop_thread for reader in readers)


@pytest.mark.asyncio
async def test_json_archive_rejects_malformed_maze_sets(tmp_path):
    archive = JsonArchive(tmp_path)
    await archive.initialize()
    record = build_benchmark_set(CONFIGS, 1, seed_offset=12345)[0].model_dump(mode="json")
    record["maze"] = ["#####", "#S  #", "### #", "#  G"]
    (tmp_path / "mazes" / "ragged.json").write_text(json.dumps([record]), "utf-8")

    with pytest.raises(ValidationError, match="Row 3 has length 4"):
        await archive.load_maze_set("ragged")
