"""Pydantic schemas for grid settings and stored cells.

``SpatialSettings`` is the declarative input of ``builder.build``; the record
models describe what persistence adapters write and read. Coordinates use the
``i`` (column) / ``j`` (row) convention of ``grid.Coord``.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .grid import Coord


def identity_cost(value: Any, coord: Coord) -> Any:
    """Default cost function: keep the current cost."""
    return value


class CellRef(BaseModel):
    """A single grid coordinate."""

    i: int = Field(..., ge=0, description="Column index")
    j: int = Field(..., ge=0, description="Row index")

    @property
    def coord(self) -> Coord:
        return Coord(self.i, self.j)


class ItemPlacement(CellRef):
    """An opaque item placed at a cell."""

    item: Any


class ObstaclePlacement(CellRef):
    """An opaque obstacle placed at a cell."""

    obstacle: Any


class GridOffset(BaseModel):
    """World-space origin of the grid."""

    i: int = 0
    j: int = 0


class GridSize(BaseModel):
    width: int = 0
    height: int = 0

    @property
    def area(self) -> int:
        return self.width * self.height


class SpatialSettings(BaseModel):
    """Declarative grid configuration consumed by ``builder.build``.

    Everything except ``size`` is optional. ``cost_function`` is invoked as
    ``cost_function(current_cost, coord)`` once per cell; walls are applied
    after it and always win.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    offset: GridOffset = Field(default_factory=GridOffset)
    size: GridSize = Field(default_factory=GridSize)
    entrances: List[CellRef] = Field(default_factory=list)
    exits: List[CellRef] = Field(default_factory=list)
    items: List[ItemPlacement] = Field(default_factory=list)
    obstacles: List[ObstaclePlacement] = Field(default_factory=list)
    walls: List[CellRef] = Field(default_factory=list)
    cost_function: Callable[[Any, Coord], Any] = Field(
        default=identity_cost,
        exclude=True,
        description="Maps (current cost, coord) to the cell cost",
    )


class GridBounds(BaseModel):
    """Inclusive coordinate window used when loading a stored grid."""

    i0: int = 0
    j0: int = 0
    iN: int = 0xFFFF
    jN: int = 0xFFFF

    def contains(self, coord: Coord) -> bool:
        return self.i0 <= coord.i <= self.iN and self.j0 <= coord.j <= self.jN


class CellRecord(BaseModel):
    """One stored cell: ``u``/``v`` are the i/j coordinate, ``data`` the cell value."""

    u: int
    v: int
    data: Any = None

    @property
    def coord(self) -> Coord:
        return Coord(self.u, self.v)
