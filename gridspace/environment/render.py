"""ASCII rendering of grids and routes.

Output is one text line per row ``j`` with cells in ascending column order.
Suitable for terminals, logs and test failure messages. Colors are only
added when requested and honour ``GRIDSPACE_NO_COLOR``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from ..logging_utils import Color, colored
from .grid import WALL_COST, Coord, GridStore, as_coord

_DEFAULT_SYMBOLS: Dict[str, str] = {
    "entrance": "E ",
    "exit": "X ",
    "wall": "██",
    "route": "★ ",
    "floor": "☐ ",
    "missing": "  ",
}


def _layout(grid: GridStore) -> Tuple[List[int], List[int]]:
    coords = grid.coords()
    columns = sorted({c.i for c in coords})
    rows = sorted({c.j for c in coords})
    return columns, rows


def _route_set(route: Optional[Iterable[Any]]) -> Set[Coord]:
    return {as_coord(c) for c in (route or [])}


def _cost_range(grid: GridStore) -> Tuple[float, float]:
    costs = [
        cell["cost"]
        for cell, _ in grid.each(lambda cell, coord: isinstance(cell, dict) and "cost" in cell)
        if cell["cost"] < WALL_COST
    ]
    if not costs:
        return 0, 0
    return min(costs), max(costs)


def _cost_color(cost: float, min_cost: float, max_cost: float) -> Color:
    if cost == 0:
        return Color.YELLOW
    if cost >= max_cost * 0.9:
        return Color.MAGENTA
    if cost > max_cost / 2:
        return Color.BLUE
    if cost <= min_cost:
        return Color.GRAY
    return Color.CYAN


def illustrate(
    grid: GridStore,
    route: Optional[Iterable[Any]] = None,
    *,
    color: bool = False,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render entrances, exits, walls and ``route`` as a symbol map.

    With ``color`` the remaining floor cells are tinted by cost band.
    """
    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    on_route = _route_set(route)
    min_cost, max_cost = _cost_range(grid) if color else (0, 0)
    columns, rows = _layout(grid)

    lines: List[str] = []
    for j in rows:
        blocks: List[str] = []
        for i in columns:
            coord = Coord(i, j)
            cell = grid.get(coord)
            if cell is None and not grid.has(coord):
                blocks.append(mapping["missing"])
                continue
            cell = cell if isinstance(cell, dict) else {}
            cost = cell.get("cost") or 0
            if cell.get("isEntrance"):
                block = mapping["entrance"]
                tint = Color.CYAN
            elif cell.get("isExit"):
                block = mapping["exit"]
                tint = Color.GREEN
            elif cost >= WALL_COST:
                block = mapping["wall"]
                tint = Color.RED
            elif coord in on_route:
                block = mapping["route"]
                tint = Color.WHITE
            else:
                block = mapping["floor"]
                tint = _cost_color(cost, min_cost, max_cost)
            blocks.append(colored(block, tint) if color else block)
        lines.append("".join(blocks))

    return "\n".join(lines)


def _pad(cost: float) -> str:
    value = int(cost)
    if value < 10:
        return f" {value} "
    if value < 1000:
        return f"{value:>3}"
    return "###"


def illustrate_cost(
    grid: GridStore,
    route: Optional[Iterable[Any]] = None,
    *,
    color: bool = False,
) -> str:
    """Render the cost of every cell as ``[nnn]`` blocks (``###`` above 999)."""
    on_route = _route_set(route)
    columns, rows = _layout(grid)

    lines: List[str] = []
    for j in rows:
        blocks: List[str] = []
        for i in columns:
            coord = Coord(i, j)
            if not grid.has(coord):
                blocks.append("     ")
                continue
            cell = grid.get(coord)
            cell = cell if isinstance(cell, dict) else {}
            cost = cell.get("cost") or 0
            tint = None
            if cell.get("isEntrance"):
                block, tint = "[ E ]", Color.CYAN
            elif cell.get("isExit"):
                block, tint = "[ X ]", Color.GREEN
            elif cost >= WALL_COST:
                block, tint = "[ # ]", Color.RED
            else:
                block = f"[{_pad(cost)}]"
                if coord in on_route:
                    tint = Color.GREEN
            blocks.append(colored(block, tint) if color and tint else block)
        lines.append("".join(blocks))

    return "\n".join(lines)
