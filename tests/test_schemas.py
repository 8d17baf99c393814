"""Tests for the pydantic settings and record schemas."""

import pytest
from pydantic import ValidationError

from gridspace.environment import CellRecord, CellRef, Coord, GridBounds, SpatialSettings
from gridspace.environment.schemas import identity_cost


def test_settings_defaults_are_empty():
    settings = SpatialSettings()

    assert settings.size.area == 0
    assert settings.offset.i == settings.offset.j == 0
    assert settings.entrances == settings.walls == settings.items == []
    assert settings.cost_function is identity_cost


def test_settings_dump_skips_cost_function():
    settings = SpatialSettings(
        size={"width": 2, "height": 3},
        items=[{"i": 1, "j": 2, "item": {"name": "lamp"}}],
        cost_function=lambda value, coord: 3,
    )

    dumped = settings.model_dump(mode="json")

    assert "cost_function" not in dumped
    assert dumped["size"] == {"width": 2, "height": 3}
    assert dumped["items"][0]["item"] == {"name": "lamp"}
    assert SpatialSettings.model_validate(dumped).size.area == 6


def test_cell_refs_reject_negative_or_missing_indices():
    with pytest.raises(ValidationError):
        CellRef(i=-1, j=0)
    with pytest.raises(ValidationError):
        SpatialSettings(walls=[{"i": 0}])

    assert CellRef(i=3, j=4).coord == Coord(3, 4)


def test_grid_bounds_are_inclusive():
    bounds = GridBounds(i0=1, j0=1, iN=3, jN=3)

    assert bounds.contains(Coord(1, 1))
    assert bounds.contains(Coord(3, 3))
    assert not bounds.contains(Coord(0, 2))
    assert not bounds.contains(Coord(2, 4))
    assert GridBounds().contains(Coord(0xFFFF, 0))


def test_cell_record_coordinates():
    record = CellRecord.model_validate({"u": 4, "v": 7, "data": {"cost": 2}})

    assert record.coord == (4, 7)
    assert record.model_dump(mode="json") == {"u": 4, "v": 7, "data": {"cost": 2}}
