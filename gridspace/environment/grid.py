"""Sparse spatial grid container.

Cells live in a dict keyed by ``Coord(i, j)`` where ``i`` is the column (outer
index) and ``j`` the row (inner index). The store does not have to be
rectangular: a coordinate is part of the grid exactly when a cell is stored for
it. Builders in this package always produce dense rectangles, but the array
utilities (offset, merge) and persistence loads can produce ragged or shifted
grids, and search algorithms only ever ask ``has()``.

Cells are arbitrary values. The cost model (``cost``, ``items``, ``isExit``,
...) is layered on top by ``builder.py``; the container itself is a plain 2D
array usable for any payload, including scratch grids of booleans.
"""

from __future__ import annotations

import copy
from collections.abc import MutableMapping
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple

from ..errors import InvalidCoordinate, InvalidDimensions, OutOfBounds

# Reserved cost meaning "impassable".
WALL_COST = 0xFFFF


class Coord(NamedTuple):
    """Grid coordinate: ``i`` is the column, ``j`` the row."""

    i: int
    j: int


CellPredicate = Callable[[Any, Coord], bool]
CellMapper = Callable[[Any, Coord], Any]

_SCALAR_TYPES = (str, bytes, int, float, complex, bool, type(None))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def as_coord(coord: Any) -> Coord:
    """Normalize ``coord`` into a ``Coord``.

    Accepts ``Coord``, plain ``(i, j)`` pairs and objects exposing ``i`` and
    ``j`` attributes (e.g. the ``CellRef`` schema). Raises
    ``InvalidCoordinate`` when the components are not integers.
    """
    if isinstance(coord, Coord):
        i, j = coord
    elif hasattr(coord, "i") and hasattr(coord, "j"):
        i, j = coord.i, coord.j
    else:
        try:
            i, j = coord
        except (TypeError, ValueError):
            raise InvalidCoordinate(f"Coordinate must be an (i, j) pair, got {coord!r}") from None
    if not (_is_int(i) and _is_int(j)):
        raise InvalidCoordinate(f"Coordinate i, j must be defined as integers, got {coord!r}")
    return Coord(i, j)


def fresh_default(value: Any) -> Any:
    """Per-cell initial value derived from a ``create()`` default.

    Scalars are shared by value, dict/list/set defaults become a fresh empty
    container, anything else is deep-copied so no two cells share an instance.
    """
    if isinstance(value, _SCALAR_TYPES):
        return value
    if type(value) in (dict, list, set):
        return type(value)()
    return copy.deepcopy(value)


def copy_value(value: Any) -> Any:
    """Copy of ``value`` safe to store in one cell (scalars are returned as-is)."""
    if isinstance(value, _SCALAR_TYPES):
        return value
    return copy.deepcopy(value)


def _everything(cell: Any, coord: Coord) -> bool:
    return True


def _apply_to_cell(cell: Any, name: str, mapper: CellMapper, coord: Coord) -> None:
    if not isinstance(cell, MutableMapping):
        raise TypeError(
            f"Cell {coord.i}, {coord.j} holds {type(cell).__name__}, not a property mapping"
        )
    # Missing properties read as None before mapping
    cell[name] = mapper(cell.get(name), coord)


class CellQuery:
    """Lazy, restartable traversal over the cells of a grid.

    Iteration yields ``(cell, coord)`` pairs in ascending ``i`` then ascending
    ``j`` order for every cell satisfying the predicate. The coordinate list
    is snapshotted when a traversal starts, so terminal operations may rewrite
    cells while iterating.
    """

    def __init__(self, grid: "GridStore", where: Optional[CellPredicate] = None):
        self._grid = grid
        self._where = where or _everything

    def where(self, predicate: CellPredicate) -> "CellQuery":
        """Return a narrower query (both predicates must hold)."""
        if not callable(predicate):
            raise TypeError("Requires a function clause")
        previous = self._where
        if previous is _everything:
            return CellQuery(self._grid, predicate)
        return CellQuery(self._grid, lambda cell, coord: previous(cell, coord) and predicate(cell, coord))

    def __iter__(self) -> Iterator[Tuple[Any, Coord]]:
        cells = self._grid._cells
        for coord in self._grid.coords():
            if coord not in cells:
                continue
            cell = cells[coord]
            if self._where(cell, coord):
                yield cell, coord

    def count(self) -> int:
        return sum(1 for _ in self)

    def set_to(self, value: Any) -> int:
        """Overwrite every matching cell with (a copy of) ``value``."""
        count = 0
        for _, coord in self:
            self._grid._cells[coord] = copy_value(value)
            count += 1
        return count

    def apply_property(self, name: str, mapper: CellMapper) -> int:
        """Replace property ``name`` of each matching cell with ``mapper(old, coord)``."""
        count = 0
        for cell, coord in self:
            _apply_to_cell(cell, name, mapper, coord)
            count += 1
        return count

    def for_each(self, action: CellMapper) -> int:
        """Run ``action(cell, coord)``; a non-None return value replaces the cell."""
        count = 0
        for cell, coord in self:
            replacement = action(cell, coord)
            if replacement is not None:
                self._grid._cells[coord] = replacement
            count += 1
        return count


class GridStore:
    """Sparse 2D container of cells keyed by ``(i, j)``."""

    def __init__(self, cells: Optional[Dict[Any, Any]] = None, *, offset: Any = (0, 0)):
        self._cells: Dict[Coord, Any] = {}
        for key, value in (cells or {}).items():
            self._cells[as_coord(key)] = value
        # World-space origin of (0, 0); informational, never moves cell keys
        self.offset = as_coord(offset)
        # Declared order of flagged cells (e.g. entrances), keyed by flag name
        self.flag_order: Dict[str, List[Coord]] = {}

    @classmethod
    def create(cls, rows: int, cols: int, default: Any = None) -> "GridStore":
        """Create a dense grid with ``cols`` columns (``i``) and ``rows`` rows (``j``)."""
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(
                f"Number of columns and rows must be positive integers (got {rows} x {cols})"
            )
        grid = cls()
        for i in range(cols):
            for j in range(rows):
                grid._cells[Coord(i, j)] = fresh_default(default)
        return grid

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def has(self, coord: Any) -> bool:
        return as_coord(coord) in self._cells

    def __contains__(self, coord: Any) -> bool:
        return self.has(coord)

    def get(self, coord: Any) -> Any:
        """Return the cell at ``coord`` or None when the coordinate is absent."""
        return self._cells.get(as_coord(coord))

    def set(self, coord: Any, value: Any) -> None:
        self._cells[as_coord(coord)] = value

    def apply_property(self, coord: Any, name: str, mapper: CellMapper) -> "GridStore":
        """Map a single cell property in place. The cell must exist."""
        key = as_coord(coord)
        if key not in self._cells:
            raise OutOfBounds(key)
        _apply_to_cell(self._cells[key], name, mapper, key)
        return self

    def coords(self) -> List[Coord]:
        """All coordinates in traversal order (ascending i, then j)."""
        return sorted(self._cells)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.coords())

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridStore):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GridStore(cells={len(self._cells)}, bounds={self.bounds()})"

    def bounds(self) -> Optional[Tuple[Coord, Coord]]:
        """Smallest and largest corner of the occupied area, or None when empty."""
        if not self._cells:
            return None
        columns = [c.i for c in self._cells]
        rows = [c.j for c in self._cells]
        return Coord(min(columns), min(rows)), Coord(max(columns), max(rows))

    # ------------------------------------------------------------------
    # Bulk traversal
    # ------------------------------------------------------------------

    def each(self, where: Optional[CellPredicate] = None) -> CellQuery:
        query = CellQuery(self)
        return query.where(where) if where is not None else query

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def duplicate(self) -> "GridStore":
        """Deep copy: same coordinates, independent cell data."""
        copied = GridStore(copy.deepcopy(self._cells), offset=self.offset)
        copied.flag_order = {flag: list(order) for flag, order in self.flag_order.items()}
        return copied

    def duplicate_structure(self, value: Any) -> "GridStore":
        """Same coordinate set with every cell replaced by ``value``."""
        return GridStore({coord: copy_value(value) for coord in self._cells}, offset=self.offset)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def add_row(self, n: int, length: int, default: Any = None) -> int:
        """Create row ``n`` for columns ``0..length-1``. No-op if the row exists.

        Returns the number of cells created.
        """
        if any(coord.j == n for coord in self._cells):
            return 0
        for i in range(length):
            self._cells[Coord(i, n)] = fresh_default(default)
        return max(length, 0)

    def add_col(self, n: int, length: int, default: Any = None) -> int:
        """Create column ``n`` for rows ``0..length-1``. No-op if the column exists."""
        if any(coord.i == n for coord in self._cells):
            return 0
        for j in range(length):
            self._cells[Coord(n, j)] = fresh_default(default)
        return max(length, 0)

    def remove_row(self, n: int) -> None:
        """Delete row ``n``; later rows shift down by one."""
        shifted: Dict[Coord, Any] = {}
        for coord, value in self._cells.items():
            if coord.j == n:
                continue
            shifted[Coord(coord.i, coord.j - 1) if coord.j > n else coord] = value
        self._cells = shifted

    def remove_col(self, n: int) -> None:
        """Delete column ``n``; later columns shift down by one."""
        shifted: Dict[Coord, Any] = {}
        for coord, value in self._cells.items():
            if coord.i == n:
                continue
            shifted[Coord(coord.i - 1, coord.j) if coord.i > n else coord] = value
        self._cells = shifted

    # ------------------------------------------------------------------
    # Neighbourhood
    # ------------------------------------------------------------------

    def siblings(self, coord: Any) -> List[Coord]:
        """Axis-adjacent coordinates present in the grid (left, right, up, down)."""
        i, j = as_coord(coord)
        candidates = (Coord(i - 1, j), Coord(i + 1, j), Coord(i, j - 1), Coord(i, j + 1))
        return [c for c in candidates if c in self._cells]
