"""Error taxonomy for grid construction, access and route search."""

from __future__ import annotations


class GridError(Exception):
    """Base class for every error raised by gridspace."""


class InvalidDimensions(GridError, ValueError):
    """Grid size is not positive (rows * cols <= 0)."""


class InvalidCoordinate(GridError, TypeError):
    """Coordinate components are not integers."""


class OutOfBounds(GridError, IndexError):
    """A coordinate falls outside the grid."""

    def __init__(self, coord, message: str | None = None):
        self.coord = coord
        super().__init__(message or f"Cell {coord[0]}, {coord[1]} is out of bound")


class RouteNotFound(GridError):
    """No walkable route connects the requested start and end."""

    def __init__(self, start, end, reason: str = "no walkable route"):
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"No route from {tuple(start)} to {tuple(end)}: {reason}")


class RouteReconstructionError(GridError, RuntimeError):
    """Predecessor chain broke while rebuilding a route (inconsistent search state)."""

    def __init__(self, coord):
        self.coord = coord
        super().__init__(f"Route breaks at {tuple(coord)}")
