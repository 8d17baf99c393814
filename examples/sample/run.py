"""Build a cost-shaped grid, route across it and print the result.

Run from the repository root:
    python examples/sample/run.py
    python examples/sample/run.py corridors   # load examples/scenarios/corridors.json
"""

import sys

from gridspace import (
    Coord,
    RouteNotFound,
    ScenarioLoader,
    SpatialSettings,
    best_route,
    build,
    illustrate,
    simple_route,
    sum_cost,
)
from gridspace.logging_utils import log_error, log_info, log_success


def valley_cost(value, coord):
    """Cheap along the middle row and column, growing towards the edges."""
    return abs((coord.i - 11) * 2) * abs(11 - coord.j) or 1


def main() -> None:
    if len(sys.argv) > 1:
        grid = ScenarioLoader().load_grid(sys.argv[1])
        start, end = None, None
    else:
        settings = SpatialSettings(size={"width": 24, "height": 24}, cost_function=valley_cost)
        grid = build(settings)
        start, end = Coord(12, 0), Coord(23, 23)

    for name, finder in (("Lee", simple_route), ("Best-first", best_route)):
        try:
            route = finder(grid, start, end)
        except RouteNotFound as exc:
            log_error(f"{name}: {exc}")
            continue
        log_info(f"{name} route ({len(route)} cells):")
        print(illustrate(grid, route, color=True))
        log_success(f"Total cost spent for this route: {sum_cost(grid, route):.0f}")


if __name__ == "__main__":
    main()
