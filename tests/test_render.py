"""Tests for ASCII grid renderings."""

import pytest

from gridspace.environment import (
    GridStore,
    SpatialSettings,
    build,
    illustrate,
    illustrate_cost,
    simple_route,
)
from gridspace.logging_utils import Color, colored


@pytest.fixture
def small_grid() -> GridStore:
    return build(
        SpatialSettings(
            size={"width": 4, "height": 3},
            entrances=[{"i": 0, "j": 0}],
            exits=[{"i": 3, "j": 2}],
            walls=[{"i": 1, "j": 1}],
        )
    )


@pytest.fixture
def no_color(monkeypatch):
    monkeypatch.setenv("GRIDSPACE_NO_COLOR", "1")


def test_illustrate_lays_out_rows(small_grid):
    lines = illustrate(small_grid).split("\n")

    assert len(lines) == 3
    assert lines[0] == "E ☐ ☐ ☐ "
    assert lines[1] == "☐ ██☐ ☐ "
    assert lines[2] == "☐ ☐ ☐ X "


def test_illustrate_marks_route(small_grid):
    route = simple_route(small_grid)
    picture = illustrate(small_grid, route)

    # Entrance and exit keep their own symbols
    assert picture.count("★ ") == len(route) - 2
    assert picture.startswith("E ")


def test_illustrate_accepts_custom_symbols(small_grid):
    picture = illustrate(small_grid, symbols={"wall": "##", "floor": ". "})

    assert "##" in picture
    assert "☐" not in picture


def test_illustrate_leaves_gaps_for_missing_cells():
    sparse = GridStore({(0, 0): {"cost": 1}, (1, 1): {"cost": 1}})

    assert illustrate(sparse) == "☐   \n  ☐ "


def test_illustrate_cost_blocks():
    grid = GridStore(
        {
            (0, 0): {"cost": 7, "isEntrance": True},
            (1, 0): {"cost": 7},
            (2, 0): {"cost": 42},
            (3, 0): {"cost": 5000},
            (4, 0): {"cost": 0xFFFF},
            (5, 0): {"cost": 1, "isExit": True},
        }
    )

    assert illustrate_cost(grid) == "[ E ][ 7 ][ 42][###][ # ][ X ]"


def test_color_is_added_on_request(monkeypatch, small_grid):
    monkeypatch.delenv("GRIDSPACE_NO_COLOR", raising=False)

    assert "\033[" in illustrate(small_grid, color=True)
    assert "\033[" in illustrate_cost(small_grid, simple_route(small_grid), color=True)
    assert "\033[" not in illustrate(small_grid)


def test_color_can_be_disabled(no_color, small_grid):
    assert illustrate(small_grid, color=True) == illustrate(small_grid)


def test_floor_tints_follow_cost_bands(monkeypatch):
    monkeypatch.delenv("GRIDSPACE_NO_COLOR", raising=False)
    grid = GridStore(
        {
            (0, 0): {"cost": 1},
            (1, 0): {"cost": 5},
            (2, 0): {"cost": 7},
            (3, 0): {"cost": 10},
            (4, 0): {"cost": 1},
        }
    )

    picture = illustrate(grid, [(4, 0)], color=True)

    expected = [
        (Color.GRAY, "☐ "),
        (Color.CYAN, "☐ "),
        (Color.BLUE, "☐ "),
        (Color.MAGENTA, "☐ "),
        (Color.WHITE, "★ "),
    ]
    assert picture == "".join(colored(block, tint) for tint, block in expected)
