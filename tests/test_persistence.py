"""Tests for grid persistence adapters (in-memory and JSON)."""

import pytest

from gridspace.environment import GridBounds, GridStore, SpatialSettings, build
from gridspace.persistence import InMemoryGridPersistence, JsonGridPersistence


def make_grid() -> GridStore:
    return build(
        SpatialSettings(
            size={"width": 16, "height": 16},
            entrances=[{"i": 0, "j": 0}, {"i": 15, "j": 15}],
            exits=[{"i": 0, "j": 15}],
            items=[{"i": 12, "j": 12, "item": "apple"}, {"i": 10, "j": 14, "item": "pencil"}],
            obstacles=[{"i": 1, "j": 0, "obstacle": 255}],
            walls=[{"i": i, "j": 10} for i in range(15)],
            cost_function=lambda value, coord: abs(value),
        )
    )


def in_saving_region(cell, coord):
    return coord.i < 5


@pytest.mark.asyncio
async def test_in_memory_round_trip():
    persistence = InMemoryGridPersistence(collection="gridsample")
    await persistence.initialize()

    grid = make_grid()
    saved = await persistence.save(grid)
    restored = await persistence.load(GridBounds(i0=0, j0=0, iN=16, jN=16))

    assert saved == 256
    assert restored == grid

    # Stored records do not alias the caller's cells
    grid.get((12, 12))["items"].append("pear")
    again = await persistence.load()
    assert again.get((12, 12))["items"] == ["apple"]

    await persistence.close()


@pytest.mark.asyncio
async def test_partial_save_selects_cells():
    persistence = InMemoryGridPersistence()
    await persistence.initialize()

    grid = GridStore.create(20, 20, {})
    grid.each(in_saving_region).set_to({"foo": "baz"})

    assert await persistence.save(grid, in_saving_region) == 100

    restored = await persistence.load()
    assert len(restored) == 100
    assert all(cell == {"foo": "baz"} for cell, _ in restored.each())
    assert not restored.has((5, 0))


@pytest.mark.asyncio
async def test_in_memory_collections_are_separate():
    first = InMemoryGridPersistence(collection="level_1")
    await first.save(GridStore.create(2, 2, 1))

    second = InMemoryGridPersistence(collection="level_2")
    second.collections = first.collections
    await second.save(GridStore.create(3, 3, 2))

    assert await first.list_collections() == ["level_1", "level_2"]
    assert len(await first.load()) == 4

    await first.delete_all()
    assert len(await first.load()) == 0
    assert len(await second.load()) == 9


@pytest.mark.asyncio
async def test_json_round_trip(tmp_path):
    persistence = JsonGridPersistence(tmp_path, collection="gridsample")
    await persistence.initialize()

    grid = make_grid()
    await persistence.save(grid)

    assert persistence.path.exists()
    assert await persistence.list_collections() == ["gridsample"]

    restored = await persistence.load()
    assert restored == grid

    window = await persistence.load(GridBounds(i0=0, j0=0, iN=4, jN=4))
    assert len(window) == 25
    assert window.get((1, 0))["obstacles"] == [255]
    assert not window.has((5, 5))

    await persistence.close()


@pytest.mark.asyncio
async def test_json_save_upserts_by_coordinate(tmp_path):
    persistence = JsonGridPersistence(tmp_path / "store", collection="level")
    await persistence.initialize()

    grid = GridStore.create(4, 4, {})
    await persistence.save(grid)

    grid.set((0, 0), {"cost": 9})
    grid.set((3, 3), {"cost": 9})
    assert await persistence.save(grid, lambda cell, coord: cell.get("cost") == 9) == 2

    restored = await persistence.load()
    assert len(restored) == 16
    assert restored.get((0, 0)) == {"cost": 9}
    assert restored.get((3, 3)) == {"cost": 9}
    assert restored.get((1, 1)) == {}


@pytest.mark.asyncio
async def test_json_delete_all(tmp_path):
    persistence = JsonGridPersistence(tmp_path, collection="doomed")
    await persistence.initialize()
    await persistence.save(GridStore.create(2, 2, 0))

    await persistence.delete_all()

    assert not persistence.path.exists()
    assert len(await persistence.load()) == 0
    assert await persistence.list_collections() == []
