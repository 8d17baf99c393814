"""Build cost-model grids from ``SpatialSettings``.

The build order is fixed: allocate, default costs and items, cost function,
entrance/exit flags, item/obstacle placement, then walls. Walls go last so that
neither the cost function nor a placement can turn a wall back into floor.
"""

from __future__ import annotations

from typing import Any, List

from ..errors import InvalidDimensions
from .grid import WALL_COST, Coord, GridStore
from .schemas import SpatialSettings


def build(settings: SpatialSettings) -> GridStore:
    """Generate a grid satisfying ``settings``.

    Every cell is a dict with ``cost`` and ``items``; entrances/exits get
    ``isEntrance``/``isExit`` set to True, placements are appended to the
    cell's ``items``/``obstacles`` list, and walls get ``cost = WALL_COST``.

    Raises:
        InvalidDimensions: ``size.width * size.height <= 0``
        OutOfBounds: a placement or wall lies outside the grid
    """
    size = settings.size
    if size.width <= 0 or size.height <= 0:
        raise InvalidDimensions(
            f"The size must be properly defined (got {size.width} x {size.height})"
        )

    grid = GridStore.create(size.height, size.width, {})
    grid.offset = Coord(settings.offset.i, settings.offset.j)

    cells = grid.each()
    cells.apply_property("cost", lambda value, coord: 1)
    cells.apply_property("items", lambda value, coord: [])
    cells.apply_property("cost", settings.cost_function)

    for entrance in settings.entrances:
        grid.apply_property(entrance.coord, "isEntrance", lambda value, coord: True)
    for exit_ in settings.exits:
        grid.apply_property(exit_.coord, "isExit", lambda value, coord: True)
    grid.flag_order["isEntrance"] = _declared(settings.entrances)
    grid.flag_order["isExit"] = _declared(settings.exits)

    for placement in settings.items:
        grid.apply_property(placement.coord, "items", _appender(placement.item))
    for placement in settings.obstacles:
        grid.apply_property(placement.coord, "obstacles", _appender(placement.obstacle))

    for wall in settings.walls:
        grid.apply_property(wall.coord, "cost", lambda value, coord: WALL_COST)

    return grid


# Alias kept for callers that think in terms of generating a map
generate = build


def _appender(payload: Any):
    def append(previous, coord):
        previous = previous or []
        previous.append(payload)
        return previous

    return append


def _declared(refs: List[Any]) -> List[Coord]:
    order: List[Coord] = []
    for ref in refs:
        if ref.coord not in order:
            order.append(ref.coord)
    return order


def _flagged(grid: GridStore, flag: str) -> List[Coord]:
    """Declared order first (cells still flagged), then any other flagged cell in traversal order."""
    declared = [coord for coord in grid.flag_order.get(flag, []) if _flag(grid.get(coord), flag)]
    seen = set(declared)
    rest = [
        coord
        for _, coord in grid.each(lambda cell, coord: _flag(cell, flag))
        if coord not in seen
    ]
    return declared + rest


def _flag(cell: Any, flag: str) -> bool:
    return isinstance(cell, dict) and cell.get(flag) is True


def entrances(grid: GridStore) -> List[Coord]:
    """Coordinates flagged ``isEntrance``, in the order the settings listed them."""
    return _flagged(grid, "isEntrance")


def exits(grid: GridStore) -> List[Coord]:
    """Coordinates flagged ``isExit``, in the order the settings listed them."""
    return _flagged(grid, "isExit")


def is_dug(cell: Any, coord: Coord) -> bool:
    """True when the cell is open ground (cost of at most 1; missing cost counts as 1)."""
    if not isinstance(cell, dict):
        return False
    return (cell.get("cost") or 1) <= 1
