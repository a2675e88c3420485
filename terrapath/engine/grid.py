"""Grid graph with 8-way adjacency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple

from terrapath.engine.errors import InvalidDimensions, OutOfBounds


class Coordinate(NamedTuple):
    x: int
    y: int


# Clockwise from the upper-left; relaxation order depends on it.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
)


@dataclass(frozen=True)
class Node:
    coord: Coordinate
    ordered_neighbors: tuple[Coordinate, ...]

    @property
    def neighbors(self) -> frozenset[Coordinate]:
        return frozenset(self.ordered_neighbors)


class GridGraph:
    """Node identities and adjacency for a ``width`` x ``height`` grid.

    The graph only depends on the grid size, so it can be shared by any number
    of searches over terrain of that size. Build a new one when the size changes.
    """

    def __init__(self, width: int, height: int, nodes: dict[Coordinate, Node]) -> None:
        self._width = width
        self._height = height
        self._nodes = nodes

    @classmethod
    def build(cls, width: int, height: int) -> "GridGraph":
        if width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)
        nodes: dict[Coordinate, Node] = {}
        for y in range(height):
            for x in range(width):
                coord = Coordinate(x, y)
                adjacent = tuple(
                    Coordinate(x + dx, y + dy)
                    for dx, dy in NEIGHBOR_OFFSETS
                    if 0 <= x + dx < width and 0 <= y + dy < height
                )
                nodes[coord] = Node(coord=coord, ordered_neighbors=adjacent)
        return cls(width, height, nodes)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def contains(self, coord: tuple[int, int]) -> bool:
        x, y = coord
        return 0 <= x < self._width and 0 <= y < self._height

    def node(self, coord: tuple[int, int]) -> Node:
        if not self.contains(coord):
            raise OutOfBounds(coord, self._width, self._height)
        return self._nodes[Coordinate(*coord)]

    def neighbors(self, coord: tuple[int, int]) -> frozenset[Coordinate]:
        return self.node(coord).neighbors

    def ordered_neighbors(self, coord: tuple[int, int]) -> tuple[Coordinate, ...]:
        return self.node(coord).ordered_neighbors

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, tuple) or len(coord) != 2:
            return False
        return self.contains(coord)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
