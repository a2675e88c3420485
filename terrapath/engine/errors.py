"""Error taxonomy for the pathfinding engine."""

from __future__ import annotations

from typing import Any


class PathfindingError(Exception):
    """Base class for engine errors."""


class InvalidDimensions(PathfindingError, ValueError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"grid dimensions must be positive, got {width}x{height}"
        )
        self.width = width
        self.height = height


class OutOfBounds(PathfindingError, IndexError):
    def __init__(self, coord: tuple[int, int], width: int, height: int) -> None:
        super().__init__(f"{tuple(coord)} is outside the {width}x{height} grid")
        self.coord = coord
        self.width = width
        self.height = height


class InvalidEndpoint(OutOfBounds):
    def __init__(
        self, role: str, coord: tuple[int, int], width: int, height: int
    ) -> None:
        super().__init__(coord, width, height)
        self.role = role
        self.args = (f"{role} {tuple(coord)} is outside the {width}x{height} grid",)


class InvalidTerrainCost(PathfindingError, ValueError):
    def __init__(self, coord: tuple[int, int], cost: Any) -> None:
        super().__init__(
            f"terrain cost at {tuple(coord)} must be a positive integer, got {cost!r}"
        )
        self.coord = coord
        self.cost = cost


class SearchCancelled(PathfindingError):
    """Raised when a stepped search is aborted before it finishes."""
