"""Flood-fill reachability over a grid."""

from __future__ import annotations

from collections import deque
from typing import Any, Optional, Set

from .builder import is_dug
from .grid import CellPredicate, Coord, GridStore, as_coord


def _always(cell: Any, coord: Coord) -> bool:
    return True


def flood_fill(
    grid: GridStore,
    start: Any,
    is_accessible: Optional[CellPredicate] = None,
) -> Set[Coord]:
    """Return every coordinate connected to ``start`` through accessible cells.

    A cell joins the fill (and has its siblings expanded) when
    ``is_accessible(cell, coord)`` holds and it has not been visited yet. A
    visited scratch grid guarantees each coordinate is tested once, so the
    fill is O(cells) and terminates on cyclic regions. When ``start`` is not
    in the grid or is itself inaccessible, the result is empty.
    """
    accessible = is_accessible or _always
    origin = as_coord(start)
    if not grid.has(origin):
        return set()

    tested = grid.duplicate_structure(False)
    filled: Set[Coord] = set()
    queue: deque[Coord] = deque([origin])
    tested.set(origin, True)

    while queue:
        coord = queue.popleft()
        if not accessible(grid.get(coord), coord):
            continue
        filled.add(coord)
        for sibling in grid.siblings(coord):
            if tested.get(sibling):
                continue
            # Mark on enqueue so a cell reached from two sides is queued once
            tested.set(sibling, True)
            queue.append(sibling)

    return filled


def is_accessible(grid: GridStore, origin: Any, target: Any) -> bool:
    """True when ``target`` is reachable from ``origin`` over dug cells."""
    return as_coord(target) in flood_fill(grid, origin, is_dug)


def is_exit_accessible(grid: GridStore, origin: Any) -> bool:
    """True when at least one exit is reachable from ``origin`` over dug cells."""
    for coord in flood_fill(grid, origin, is_dug):
        cell = grid.get(coord)
        if isinstance(cell, dict) and cell.get("isExit") is True:
            return True
    return False
