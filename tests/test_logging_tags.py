"""Tests for configuration checks and the tagged search traces."""

from __future__ import annotations

import contextlib
import io

import pytest

from gridspace.config import Config
from gridspace.environment import Coord, GridStore, RouteRequest, Strategy, backtrace, solve
from gridspace.errors import RouteNotFound
from gridspace.logging_utils import (
    TAG_DETERMINISTIC,
    TAG_ERROR,
    TAG_RECOVERY,
    TAG_SUCCESS,
    Color,
    colored,
)


def run_captured(fn, *args, **kwargs):
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        result = fn(*args, **kwargs)
    return result, buffer.getvalue()


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.delenv("GRIDSPACE_NO_COLOR", raising=False)
    assert colored("hi", Color.RED) == f"{Color.RED.value}hi{Color.RESET.value}"
    assert colored("hi", Color.RED, bold=True).startswith(Color.BOLD.value)

    monkeypatch.setenv("GRIDSPACE_NO_COLOR", "1")
    assert colored("hi", Color.RED) == "hi"


@pytest.mark.parametrize("strategy", [Strategy.LEE, Strategy.ASTAR])
def test_verbose_search_prints_tags(strategy):
    grid = GridStore.create(3, 3, {})

    route, output = run_captured(solve, grid, RouteRequest((0, 0), (2, 2), strategy=strategy, verbose=True))

    assert route[-1] == (2, 2)
    assert TAG_DETERMINISTIC in output
    assert TAG_SUCCESS in output


@pytest.mark.parametrize("strategy", [Strategy.LEE, Strategy.ASTAR])
def test_quiet_search_prints_nothing(monkeypatch, strategy):
    monkeypatch.setattr(Config, "VERBOSE", False)
    grid = GridStore.create(3, 3, {})

    _, output = run_captured(solve, grid, RouteRequest((0, 0), (2, 2), strategy=strategy))

    assert output == ""


def test_global_verbose_flag_enables_traces(monkeypatch):
    monkeypatch.setattr(Config, "VERBOSE", True)
    grid = GridStore.create(2, 2, {})

    _, output = run_captured(solve, grid, RouteRequest((0, 0), (1, 1)))

    assert TAG_SUCCESS in output


def test_failed_search_prints_error_tag():
    grid = GridStore.create(1, 3, {})
    grid.set((1, 0), {"cost": 0xFFFF})

    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer), pytest.raises(RouteNotFound):
        solve(grid, RouteRequest((0, 0), (2, 0), strategy=Strategy.LEE, verbose=True))

    assert TAG_ERROR in buffer.getvalue()


def test_dead_end_recovery_prints_recovery_tag():
    labels = GridStore({(1, 0): 1, (2, 0): 2, (0, 1): 3, (2, 1): 3, (1, 1): 4})
    wave = {1: [Coord(1, 0)], 2: [Coord(2, 0)], 3: [Coord(0, 1), Coord(2, 1)], 4: [Coord(1, 1)]}

    route, output = run_captured(backtrace, labels, wave, Coord(1, 0), Coord(1, 1), tracing=True)

    assert route[-1] == (1, 1)
    assert TAG_RECOVERY in output


def test_backtrace_step_bound(monkeypatch):
    monkeypatch.setattr(Config, "LEE_STEP_FACTOR", 0)
    labels = GridStore({(0, 0): 1, (1, 0): 2})

    with pytest.raises(RouteNotFound) as excinfo:
        backtrace(labels, {1: [Coord(0, 0)], 2: [Coord(1, 0)]}, Coord(0, 0), Coord(1, 0))
    assert "step bound" in excinfo.value.reason


def test_config_validate(monkeypatch):
    monkeypatch.setattr(Config, "LEE_STEP_FACTOR", 4)
    monkeypatch.setattr(Config, "GRID_COLLECTION", "grid")
    Config.validate()

    monkeypatch.setattr(Config, "LEE_STEP_FACTOR", 0)
    with pytest.raises(ValueError):
        Config.validate()

    monkeypatch.setattr(Config, "LEE_STEP_FACTOR", 4)
    monkeypatch.setattr(Config, "GRID_COLLECTION", "")
    with pytest.raises(ValueError):
        Config.validate()


def test_config_display_lists_settings():
    text = Config.display()

    assert text.startswith("Gridspace Configuration:")
    assert "Lee step factor" in text
    assert str(Config.SCENARIOS_DIR) in text
