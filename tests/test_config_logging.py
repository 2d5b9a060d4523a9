"""Tests for configuration validation and console output helpers."""

import pytest

from mazebench.config import Config
from mazebench.logging_utils import (
    Color,
    colored,
    log_deterministic,
    log_error,
    log_info,
    log_success,
    render_maze_preview,
)

MAZE = ["#####", "#S  #", "### #", "#  G#", "#####"]


def test_default_config_is_valid():
    Config.validate()


@pytest.mark.parametrize(
    "attr,value,message",
    [
        ("GENERATOR_SCHEME", "prim", "MAZEBENCH_GENERATOR_SCHEME"),
        ("RUNS_PER_CONFIG", 0, "MAZEBENCH_RUNS_PER_CONFIG"),
        ("MAX_STEPS", 0, "MAZEBENCH_MAX_STEPS"),
    ],
)
def test_config_validate_rejects_bad_values(monkeypatch, attr, value, message):
    monkeypatch.setattr(Config, attr, value)
    with pytest.raises(ValueError, match=message):
        Config.validate()


def test_config_display(monkeypatch):
    monkeypatch.setattr(Config, "SEED_OFFSET", 777)
    text = Config.display()
    assert text.startswith("Mazebench Configuration:")
    assert "Seed Offset: 777" in text
    assert "Generator Scheme:" in text


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.delenv("MAZEBENCH_NO_COLOR", raising=False)
    assert colored("hi", Color.RED) == f"{Color.RED.value}hi{Color.RESET.value}"
    assert colored("hi", Color.RED, bold=True).startswith(Color.BOLD.value)

    monkeypatch.setenv("MAZEBENCH_NO_COLOR", "1")
    assert colored("hi", Color.RED) == "hi"


def test_log_markers(monkeypatch, capsys):
    monkeypatch.setenv("MAZEBENCH_NO_COLOR", "1")
    log_deterministic("generated")
    log_error("skipped")
    log_success("done")
    log_info("note")

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["[•] generated", "[!] skipped", "[✓] done", "[i] note"]


def test_render_maze_preview(monkeypatch):
    monkeypatch.setenv("MAZEBENCH_NO_COLOR", "1")
    preview = render_maze_preview(MAZE, path=[(1, 1), (2, 1), (3, 1), (3, 2), (3, 3)])

    assert preview.splitlines() == [
        "█████",
        "█S**█",
        "███*█",
        "█··G█",
        "█████",
    ]


def test_render_maze_preview_without_path(monkeypatch):
    monkeypatch.setenv("MAZEBENCH_NO_COLOR", "1")
    assert render_maze_preview(MAZE).splitlines()[1] == "█S··█"
