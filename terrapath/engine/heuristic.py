"""Octile-distance heuristic on integer-scaled step costs."""

from __future__ import annotations

from dataclasses import dataclass

DIAGONAL_STEP = 14
LINEAR_STEP = 10


@dataclass(frozen=True)
class Heuristic:
    """Estimate the remaining cost between two cells.

    With the default 14/10 weights a diagonal step is estimated at 14 while the
    cheapest terrain charges 10 to enter any cell, so the estimate can exceed the
    true cost on roads. ``Heuristic.admissible()`` uses 10 for both; it never
    overestimates as long as no cell costs less than 10 to enter, which holds for
    the built-in tiers but not for custom weights below 10.
    """

    diagonal_step: int = DIAGONAL_STEP
    linear_step: int = LINEAR_STEP

    @property
    def name(self) -> str:
        weights = (self.diagonal_step, self.linear_step)
        if weights == (DIAGONAL_STEP, LINEAR_STEP):
            return "octile"
        if weights == (LINEAR_STEP, LINEAR_STEP):
            return "admissible"
        return f"octile-{self.diagonal_step}-{self.linear_step}"

    @classmethod
    def octile(cls) -> "Heuristic":
        return cls()

    @classmethod
    def admissible(cls) -> "Heuristic":
        return cls(diagonal_step=LINEAR_STEP, linear_step=LINEAR_STEP)

    @classmethod
    def from_name(cls, name: str) -> "Heuristic":
        normalized = name.strip().lower()
        if normalized == "octile":
            return cls.octile()
        if normalized == "admissible":
            return cls.admissible()
        raise ValueError(f"unknown heuristic {name!r} (expected octile or admissible)")

    def estimate(self, a: tuple[int, int], b: tuple[int, int]) -> int:
        dx = abs(a[0] - b[0])
        dy = abs(a[1] - b[1])
        diagonal = min(dx, dy)
        linear = max(dx, dy) - diagonal
        return diagonal * self.diagonal_step + linear * self.linear_step
