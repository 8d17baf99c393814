"""Measurements and conversions over routes."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, List, Sequence

from ..errors import OutOfBounds
from .grid import Coord, GridStore, as_coord


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


# (di, dj) per direction; j grows downwards
_STEPS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def distance(a: Any, b: Any) -> int:
    """Manhattan (block) distance between two coordinates."""
    a, b = as_coord(a), as_coord(b)
    return abs(a.i - b.i) + abs(a.j - b.j)


def sum_cost(grid: GridStore, route: Iterable[Any]) -> float:
    """Total ``cost`` of the cells along ``route`` (cells without a cost add 0)."""
    total = 0
    for coord in route:
        cell = grid.get(coord)
        if isinstance(cell, dict):
            total += cell.get("cost") or 0
    return total


def direction(origin: Any, target: Any) -> Direction:
    """Direction of a single step between adjacent coordinates."""
    a, b = as_coord(origin), as_coord(target)
    if distance(a, b) != 1:
        raise ValueError(f"{tuple(a)} -> {tuple(b)} is not a single axis-aligned step")
    if b.i > a.i:
        return Direction.RIGHT
    if b.i < a.i:
        return Direction.LEFT
    if b.j > a.j:
        return Direction.DOWN
    return Direction.UP


def directions(route: Sequence[Any]) -> List[Direction]:
    """Translate a route into the direction taken at every step."""
    return [direction(a, b) for a, b in zip(route, route[1:])]


def move(origin: Any, token: Any) -> Coord:
    """Coordinate one step from ``origin`` towards ``token`` (a Direction or its name)."""
    i, j = as_coord(origin)
    di, dj = _STEPS[Direction(token)]
    return Coord(i + di, j + dj)


def walk(grid: GridStore, start: Any, tokens: Iterable[Any]) -> List[Coord]:
    """Apply ``tokens`` from ``start`` and return the visited route.

    Raises ``OutOfBounds`` the moment a step leaves the grid.
    """
    position = as_coord(start)
    route = [position]
    for token in tokens:
        position = move(position, token)
        if not grid.has(position):
            raise OutOfBounds(position, f"Move to {tuple(position)} exceeds the boundary of the grid")
        route.append(position)
    return route


def straight_route(start: Any, end: Any) -> List[Coord]:
    """L-shaped route: walk along ``j`` until aligned, then along ``i``.

    Ignores walls and grid extent; useful as a baseline for route length.
    """
    i, j = as_coord(start)
    target = as_coord(end)
    route = [Coord(i, j)]
    while j != target.j:
        j += 1 if target.j > j else -1
        route.append(Coord(i, j))
    while i != target.i:
        i += 1 if target.i > i else -1
        route.append(Coord(i, j))
    return route
