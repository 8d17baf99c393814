"""Route search over a ``GridStore``.

Two interchangeable strategies answer the same ``RouteRequest``:

- ``Strategy.LEE``: wave expansion (Lee's algorithm). Labels the whole region
  reachable from the start with breadth-first wave magnitudes, then walks back
  from the destination along strictly descending magnitudes. Step costs are
  ignored; the result has the fewest cells.
- ``Strategy.ASTAR``: cost-weighted best-first search. The frontier is ordered
  by accumulated cost only (no heuristic term), ties broken by discovery
  order, so the result minimises the summed step cost.

Both return a list of ``Coord`` from start to end inclusive and raise
``RouteNotFound`` when the destination cannot be reached. All scratch state
(labels, frontier, predecessor map) lives in the call.
"""

from __future__ import annotations

import heapq
import itertools
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from ..config import Config
from ..errors import OutOfBounds, RouteNotFound, RouteReconstructionError
from ..logging_utils import (
    TAG_DETERMINISTIC,
    TAG_ERROR,
    TAG_RECOVERY,
    TAG_SUCCESS,
    log_deterministic,
    log_error,
    log_recovery,
    log_success,
)
from .builder import entrances, exits
from .grid import WALL_COST, CellPredicate, Coord, GridStore, as_coord

CostFunction = Callable[[Any, Coord], float]


class Strategy(str, Enum):
    LEE = "lee"
    ASTAR = "astar"


def is_not_wall(cell: Any, coord: Coord) -> bool:
    """Default walkability: anything whose cost is below the wall sentinel."""
    if isinstance(cell, dict):
        return (cell.get("cost") or 0) < WALL_COST
    return cell is not None


def uniform_cost(cell: Any, coord: Coord) -> float:
    return 1


def cell_cost(cell: Any, coord: Coord) -> float:
    """Step cost read from the cell's ``cost`` property (missing counts as 0)."""
    if isinstance(cell, dict):
        return cell.get("cost") or 0
    return 0


@dataclass(frozen=True)
class RouteRequest:
    """Immutable description of one route search."""

    start: Coord
    end: Coord
    walkable: CellPredicate = is_not_wall
    cost: CostFunction = uniform_cost
    strategy: Strategy = Strategy.ASTAR
    verbose: bool = False

    def __post_init__(self) -> None:
        # Accept plain tuples and CellRef-like objects
        object.__setattr__(self, "start", as_coord(self.start))
        object.__setattr__(self, "end", as_coord(self.end))
        object.__setattr__(self, "strategy", Strategy(self.strategy))

    @property
    def tracing(self) -> bool:
        return self.verbose or Config.VERBOSE


def solve(grid: GridStore, request: RouteRequest) -> List[Coord]:
    """Compute the route described by ``request``.

    Only cells entered after the start are tested with ``request.walkable``:
    an unwalkable end is never reached, while an unwalkable start (e.g. a
    wall) is still expanded.

    Raises:
        OutOfBounds: start or end is not in the grid
        RouteNotFound: no walkable route connects them
    """
    for endpoint in (request.start, request.end):
        if not grid.has(endpoint):
            raise OutOfBounds(endpoint)
    if request.start == request.end:
        return [request.start]

    if request.strategy is Strategy.LEE:
        return _lee(grid, request)
    return _astar(grid, request)


# ----------------------------------------------------------------------
# Lee's algorithm
# ----------------------------------------------------------------------


Wave = Dict[int, List[Coord]]


def expand_wave(grid: GridStore, start: Coord, walkable: CellPredicate) -> Tuple[GridStore, Wave]:
    """Label every cell reachable from ``start`` with its wave magnitude.

    Returns the label grid (None for unreached cells) and the magnitude
    buckets, each listing its cells in labelling order.
    """
    labels = grid.duplicate_structure(None)
    wave: Wave = {1: [start]}
    labels.set(start, 1)
    queue: deque[Coord] = deque([start])

    while queue:
        coord = queue.popleft()
        magnitude = labels.get(coord) + 1
        for sibling in grid.siblings(coord):
            if labels.get(sibling) is not None:
                continue
            if not walkable(grid.get(sibling), sibling):
                continue
            labels.set(sibling, magnitude)
            wave.setdefault(magnitude, []).append(sibling)
            queue.append(sibling)

    return labels, wave


def backtrace(
    labels: GridStore,
    wave: Wave,
    start: Coord,
    end: Coord,
    *,
    tracing: bool = False,
) -> List[Coord]:
    """Walk from ``end`` to ``start`` along strictly descending magnitudes.

    Each step tries the siblings of the current cell (left, right, up, down)
    and takes the first one listed in the next lower bucket. On a dead end
    the cell is evicted from its bucket, blacklisted under ``WALL_COST`` and
    the walk retreats to the previous route cell. ``labels`` and ``wave`` are
    modified in place.
    """
    if labels.get(end) is None:
        raise RouteNotFound(start, end, "destination not reached by the wave")

    blacklist = wave.setdefault(WALL_COST, [])
    members = {magnitude: set(bucket) for magnitude, bucket in wave.items()}
    route: List[Coord] = [end]
    max_steps = Config.LEE_STEP_FACTOR * max(len(labels), 1)
    steps = 0

    while route[-1] != start:
        steps += 1
        if steps > max_steps:
            raise RouteNotFound(start, end, "backtrace exceeded its step bound")

        current = route[-1]
        magnitude = labels.get(current)
        lower = members.get(magnitude - 1, set())
        step = next((s for s in labels.siblings(current) if s in lower), None)
        if step is not None:
            route.append(step)
            continue

        if tracing:
            log_recovery(f"  {TAG_RECOVERY} [Lee] No descent from {tuple(current)} ({magnitude}), recessing")
        if current in members.get(magnitude, ()):
            wave[magnitude].remove(current)
            members[magnitude].discard(current)
        blacklist.append(current)
        labels.set(current, WALL_COST)
        route.pop()
        if not route:
            raise RouteNotFound(start, end, "every descent from the destination dead-ends")

    route.reverse()
    return route


def _lee(grid: GridStore, request: RouteRequest) -> List[Coord]:
    start, end = request.start, request.end
    if request.tracing:
        log_deterministic(f"  {TAG_DETERMINISTIC} [Lee] Expanding wave from {tuple(start)}...")

    labels, wave = expand_wave(grid, start, request.walkable)
    if labels.get(end) is None:
        if request.tracing:
            log_error(f"  {TAG_ERROR} [Lee] Wave never reached {tuple(end)}")
        raise RouteNotFound(start, end, "destination not reached by the wave")

    if request.tracing:
        labelled = sum(len(bucket) for bucket in wave.values())
        log_deterministic(f"  {TAG_DETERMINISTIC} [Lee] {labelled} cells labelled, backtracing...")

    route = backtrace(labels, wave, start, end, tracing=request.tracing)
    if request.tracing:
        log_success(f"  {TAG_SUCCESS} [Lee] Route of {len(route)} cells")
    return route


# ----------------------------------------------------------------------
# Cost-weighted best-first search
# ----------------------------------------------------------------------


def _astar(grid: GridStore, request: RouteRequest) -> List[Coord]:
    start, end = request.start, request.end
    if request.tracing:
        log_deterministic(f"  {TAG_DETERMINISTIC} [A*] {tuple(start)} --> {tuple(end)}")

    def step_cost(coord: Coord) -> float:
        value = request.cost(grid.get(coord), coord)
        if value < 0:
            raise ValueError(f"Cost function returned {value} for {tuple(coord)}; costs must be >= 0")
        return value

    g_score: Dict[Coord, float] = {start: 0}

    def g(coord: Coord) -> float:
        # Unvisited cells default to their own stepping cost
        if coord in g_score:
            return g_score[coord]
        return step_cost(coord)

    sequence = itertools.count()
    frontier: List[Tuple[float, int, Coord]] = [(0, next(sequence), start)]
    closed: Set[Coord] = set()
    came_from: Dict[Coord, Coord] = {}
    reached = False

    while frontier:
        cost_so_far, _, current = heapq.heappop(frontier)
        if current in closed or cost_so_far > g_score.get(current, cost_so_far):
            continue  # stale entry
        if current == end:
            reached = True
            break
        closed.add(current)

        for sibling in grid.siblings(current):
            if sibling in closed:
                continue
            if not request.walkable(grid.get(sibling), sibling):
                continue
            candidate = g(current) + step_cost(sibling)
            if sibling not in g_score or candidate < g(sibling):
                came_from[sibling] = current
                g_score[sibling] = candidate
                heapq.heappush(frontier, (candidate, next(sequence), sibling))

        if request.tracing:
            log_deterministic(f"  {TAG_DETERMINISTIC} [A*] cells registered: {len(came_from)}")

    if not reached:
        if request.tracing:
            log_error(f"  {TAG_ERROR} [A*] Frontier exhausted before {tuple(end)}")
        raise RouteNotFound(start, end, "frontier exhausted")

    route = reconstruct_route(came_from, start, end)
    if request.tracing:
        log_success(f"  {TAG_SUCCESS} [A*] Path fully reconstructed ({len(route)} cells, cost {g_score[end]})")
    return route


def reconstruct_route(came_from: Dict[Coord, Coord], start: Coord, end: Coord) -> List[Coord]:
    """Follow predecessor links from ``end`` back to ``start``.

    Raises ``RouteReconstructionError`` when a link is missing or the chain
    loops before reaching the start.
    """
    route = [end]
    position = end
    while position != start:
        if position not in came_from or len(route) > len(came_from) + 1:
            raise RouteReconstructionError(position)
        position = came_from[position]
        route.append(position)
    route.reverse()
    return route


# ----------------------------------------------------------------------
# Convenience entry points
# ----------------------------------------------------------------------


def _endpoints(grid: GridStore, start: Optional[Any], end: Optional[Any]) -> Tuple[Coord, Coord]:
    if start is None:
        found = entrances(grid)
        if not found:
            raise ValueError("No start given and the grid has no entrance")
        start = found[0]
    if end is None:
        found = exits(grid)
        if not found:
            raise ValueError("No end given and the grid has no exit")
        end = found[0]
    return as_coord(start), as_coord(end)


def simple_route(grid: GridStore, start: Any = None, end: Any = None, *, verbose: bool = False) -> List[Coord]:
    """Fewest-cells route avoiding walls (Lee). Endpoints default to the first entrance/exit."""
    origin, destination = _endpoints(grid, start, end)
    return solve(
        grid,
        RouteRequest(origin, destination, walkable=is_not_wall, strategy=Strategy.LEE, verbose=verbose),
    )


def best_route(grid: GridStore, start: Any = None, end: Any = None, *, verbose: bool = False) -> List[Coord]:
    """Cheapest route by cell cost avoiding walls. Endpoints default to the first entrance/exit."""
    origin, destination = _endpoints(grid, start, end)
    return solve(
        grid,
        RouteRequest(
            origin,
            destination,
            walkable=is_not_wall,
            cost=cell_cost,
            strategy=Strategy.ASTAR,
            verbose=verbose,
        ),
    )
