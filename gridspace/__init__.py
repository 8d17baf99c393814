"""
Gridspace - bounded 2D spatial grids with route search.

Build a grid of cells carrying cost, entrance/exit flags, items and
obstacles, then find routes through it with wave expansion (Lee) or
cost-weighted best-first search, check reachability with flood fill and
measure the results.

The core is synchronous and storage-free. Rendering, persistence and JSON
scenarios are optional helpers around it.
"""

__version__ = "0.1.0"

from .errors import (
    GridError,
    InvalidDimensions,
    InvalidCoordinate,
    OutOfBounds,
    RouteNotFound,
    RouteReconstructionError,
)
from .environment import (
    WALL_COST,
    CellQuery,
    Coord,
    GridStore,
    CellRecord,
    CellRef,
    GridBounds,
    ItemPlacement,
    ObstaclePlacement,
    SpatialSettings,
    build,
    generate,
    entrances,
    exits,
    is_dug,
    flood_fill,
    is_accessible,
    is_exit_accessible,
    RouteRequest,
    Strategy,
    solve,
    simple_route,
    best_route,
    Direction,
    distance,
    sum_cost,
    directions,
    walk,
    straight_route,
    illustrate,
    illustrate_cost,
    array2d,
)
from .persistence import (
    GridPersistence,
    InMemoryGridPersistence,
    JsonGridPersistence,
    PostgresGridPersistence,
)
from .scenario import ScenarioLoader, load_scenario

__all__ = [
    # Errors
    "GridError",
    "InvalidDimensions",
    "InvalidCoordinate",
    "OutOfBounds",
    "RouteNotFound",
    "RouteReconstructionError",
    # Grid
    "WALL_COST",
    "CellQuery",
    "Coord",
    "GridStore",
    "array2d",
    # Settings and builder
    "CellRecord",
    "CellRef",
    "GridBounds",
    "ItemPlacement",
    "ObstaclePlacement",
    "SpatialSettings",
    "build",
    "generate",
    "entrances",
    "exits",
    "is_dug",
    # Connectivity
    "flood_fill",
    "is_accessible",
    "is_exit_accessible",
    # Route search
    "RouteRequest",
    "Strategy",
    "solve",
    "simple_route",
    "best_route",
    # Route metrics
    "Direction",
    "distance",
    "sum_cost",
    "directions",
    "walk",
    "straight_route",
    # Rendering
    "illustrate",
    "illustrate_cost",
    # Persistence
    "GridPersistence",
    "InMemoryGridPersistence",
    "JsonGridPersistence",
    "PostgresGridPersistence",
    # Scenarios
    "ScenarioLoader",
    "load_scenario",
]
