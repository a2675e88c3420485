"""Terrain tiers and the cost lookup consumed by the search."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Protocol, Sequence

from terrapath.engine.errors import InvalidDimensions, OutOfBounds

BLOCKED_SYMBOL = "#"


class Terrain(IntEnum):
    ROAD = 10
    GRASS = 50
    SWAMP = 150
    MOUNTAIN = 1000

    @property
    def symbol(self) -> str:
        return self.name[0]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Terrain":
        for tier in cls:
            if tier.symbol == symbol.upper():
                return tier
        raise ValueError(f"unknown terrain symbol {symbol!r}")


class TerrainMap(Protocol):
    def cost(self, coord: tuple[int, int]) -> int | None:
        """Return the cost of entering ``coord``, or None if it cannot be entered."""


class TerrainGrid:
    """Rectangular terrain stored row by row.

    Cells hold a positive weight or ``None`` for impassable. Weights are not
    limited to the ``Terrain`` tiers.
    """

    def __init__(self, rows: Sequence[Sequence[int | None]]) -> None:
        if not rows or not rows[0]:
            raise InvalidDimensions(len(rows[0]) if rows else 0, len(rows))
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise ValueError("terrain rows must all have the same width")
        self._rows: tuple[tuple[int | None, ...], ...] = tuple(
            tuple(row) for row in rows
        )
        self._width = width
        self._height = len(rows)

    @classmethod
    def uniform(cls, width: int, height: int, weight: int) -> "TerrainGrid":
        if width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)
        return cls([[weight] * width for _ in range(height)])

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TerrainGrid":
        rows: list[list[int | None]] = []
        for line in lines:
            stripped = line.strip()
            if not stripped:
                continue
            rows.append(
                [
                    None if symbol == BLOCKED_SYMBOL else int(Terrain.from_symbol(symbol))
                    for symbol in stripped
                ]
            )
        return cls(rows)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def cost(self, coord: tuple[int, int]) -> int | None:
        x, y = coord
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBounds(coord, self._width, self._height)
        return self._rows[y][x]

    def with_cost(self, coord: tuple[int, int], weight: int | None) -> "TerrainGrid":
        x, y = coord
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBounds(coord, self._width, self._height)
        rows = [list(row) for row in self._rows]
        rows[y][x] = weight
        return TerrainGrid(rows)

    def to_lines(self) -> list[str]:
        symbols = {int(tier): tier.symbol for tier in Terrain}
        return [
            "".join(
                BLOCKED_SYMBOL if value is None else symbols.get(value, "?")
                for value in row
            )
            for row in self._rows
        ]
