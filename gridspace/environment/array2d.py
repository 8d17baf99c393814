"""Whole-grid utilities treating a ``GridStore`` as a 2D array.

Every function returns a new grid and leaves its inputs untouched.
"""

from __future__ import annotations

from typing import Any, Callable, Tuple

from .grid import Coord, GridStore


def size(grid: GridStore) -> Tuple[int, int]:
    """Return ``(width, height)``: number of columns and cells in the first column."""
    columns = sorted({coord.i for coord in grid.coords()})
    if not columns:
        return 0, 0
    first = columns[0]
    height = sum(1 for coord in grid.coords() if coord.i == first)
    return len(columns), height


def map_cells(grid: GridStore, mapper: Callable[[Any], Any]) -> GridStore:
    """Grid of ``mapper(cell)`` for every cell."""
    return GridStore(
        {coord: mapper(cell) for cell, coord in grid.each()},
        offset=grid.offset,
    )


def pluck(grid: GridStore, name: str) -> GridStore:
    """Grid holding property ``name`` of every cell (None where missing)."""
    return map_cells(grid, lambda cell: cell.get(name) if isinstance(cell, dict) else None)


def offset(grid: GridStore, offset_i: int, offset_j: int) -> GridStore:
    """Shift every cell by ``(offset_i, offset_j)``.

    Cells landing on a negative coordinate are dropped. Cell values are shared
    with the source grid; ``duplicate()`` first when they must be independent.
    """
    shifted = {}
    for cell, coord in grid.each():
        i, j = coord.i + offset_i, coord.j + offset_j
        if i >= 0 and j >= 0:
            shifted[Coord(i, j)] = cell
    return GridStore(shifted, offset=grid.offset)


# Synonym
shift = offset


def merge(*grids: GridStore) -> GridStore:
    """Union of ``grids``; where they overlap the later grid wins."""
    merged = {}
    for grid in grids:
        for cell, coord in grid.each():
            merged[coord] = cell
    return GridStore(merged, offset=grids[0].offset if grids else (0, 0))
