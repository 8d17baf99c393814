"""Grid container, builder and route algorithms."""

from .grid import WALL_COST, CellQuery, Coord, GridStore, as_coord
from .schemas import (
    CellRecord,
    CellRef,
    GridBounds,
    GridOffset,
    GridSize,
    ItemPlacement,
    ObstaclePlacement,
    SpatialSettings,
)
from .builder import build, generate, entrances, exits, is_dug
from .connectivity import flood_fill, is_accessible, is_exit_accessible
from .pathfinding import (
    RouteRequest,
    Strategy,
    solve,
    simple_route,
    best_route,
    is_not_wall,
    cell_cost,
    uniform_cost,
    reconstruct_route,
    expand_wave,
    backtrace,
)
from .metrics import Direction, distance, sum_cost, direction, directions, move, walk, straight_route
from .render import illustrate, illustrate_cost
from . import array2d

__all__ = [
    "WALL_COST",
    "CellQuery",
    "Coord",
    "GridStore",
    "as_coord",
    "CellRecord",
    "CellRef",
    "GridBounds",
    "GridOffset",
    "GridSize",
    "ItemPlacement",
    "ObstaclePlacement",
    "SpatialSettings",
    "build",
    "generate",
    "entrances",
    "exits",
    "is_dug",
    "flood_fill",
    "is_accessible",
    "is_exit_accessible",
    "RouteRequest",
    "Strategy",
    "solve",
    "simple_route",
    "best_route",
    "is_not_wall",
    "cell_cost",
    "uniform_cost",
    "reconstruct_route",
    "expand_wave",
    "backtrace",
    "Direction",
    "distance",
    "sum_cost",
    "direction",
    "directions",
    "move",
    "walk",
    "straight_route",
    "illustrate",
    "illustrate_cost",
    "array2d",
]
