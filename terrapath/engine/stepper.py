"""Step-at-a-time execution of the A* search for animated viewers."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from math import inf
from typing import Any, Callable, Iterator

from terrapath.engine.astar import AStarSearch, Path, Relaxation, SearchRun
from terrapath.engine.errors import SearchCancelled
from terrapath.engine.grid import Coordinate, GridGraph
from terrapath.engine.terrain import TerrainMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepSnapshot:
    step: int
    relaxation: Relaxation
    g_score: dict[Coordinate, int]
    f_score: dict[Coordinate, int]
    open_set: frozenset[Coordinate]
    closed_set: frozenset[Coordinate]
    expansions: int

    def h(self, coord: Coordinate) -> float:
        if coord not in self.f_score:
            return inf
        return self.f_score[coord] - self.g_score[coord]

    @classmethod
    def capture(cls, run: SearchRun, relaxation: Relaxation) -> "StepSnapshot":
        state = run.state
        return cls(
            step=run.relaxations,
            relaxation=relaxation,
            g_score=dict(state.g_score),
            f_score=dict(state.f_score),
            open_set=state.frontier.coords(),
            closed_set=frozenset(state.closed),
            expansions=run.expansions,
        )


StepCallback = Callable[[StepSnapshot], Any]


class StepController:
    """Drive a search one relaxation at a time.

    ``run`` calls ``on_step`` after every relaxation. ``arun`` does the same but
    awaits the callback, and sleeps ``delay`` seconds after each relaxation that
    improved a score. ``cancel`` stops the in-flight run before its next step;
    the run then raises ``SearchCancelled`` and its partial state is dropped.
    ``max_steps`` caps the relaxations a run may deliver: a search that needs
    one more is cancelled before that step reaches the observer, while one that
    finishes within the budget returns normally.
    """

    def __init__(self, search: AStarSearch | None = None) -> None:
        self._search = search or AStarSearch()
        self._cancelled = False
        self._last_run: SearchRun | None = None

    @property
    def last_run(self) -> SearchRun | None:
        return self._last_run

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def steps(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
        *,
        max_steps: int | None = None,
    ) -> Iterator[StepSnapshot]:
        run = self._begin(graph, terrain, start, end, max_steps)
        return self._iter_snapshots(run, max_steps)

    def run(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
        on_step: StepCallback | None = None,
        *,
        max_steps: int | None = None,
    ) -> Path | None:
        run = self._begin(graph, terrain, start, end, max_steps)
        if on_step is None and max_steps is None:
            return run.run_to_completion()
        for relaxation in run:
            self._check_budget(run, max_steps)
            if on_step is not None:
                on_step(StepSnapshot.capture(run, relaxation))
            self._check_cancelled(run)
        return run.result

    async def arun(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
        on_step: StepCallback | None = None,
        *,
        delay: float = 0.0,
        max_steps: int | None = None,
    ) -> Path | None:
        run = self._begin(graph, terrain, start, end, max_steps)
        if on_step is None and delay <= 0 and max_steps is None:
            return run.run_to_completion()
        for relaxation in run:
            self._check_budget(run, max_steps)
            if on_step is not None:
                outcome = on_step(StepSnapshot.capture(run, relaxation))
                if inspect.isawaitable(outcome):
                    await outcome
            if delay > 0 and relaxation.improved:
                await asyncio.sleep(delay)
            self._check_cancelled(run)
        return run.result

    def _begin(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
        max_steps: int | None,
    ) -> SearchRun:
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")
        self._cancelled = False
        self._last_run = self._search.begin(graph, terrain, start, end)
        return self._last_run

    def _iter_snapshots(
        self, run: SearchRun, max_steps: int | None
    ) -> Iterator[StepSnapshot]:
        for relaxation in run:
            self._check_budget(run, max_steps)
            yield StepSnapshot.capture(run, relaxation)
            self._check_cancelled(run)

    def _check_budget(self, run: SearchRun, max_steps: int | None) -> None:
        if max_steps is not None and run.relaxations > max_steps:
            self._cancelled = True
            self._check_cancelled(run)

    def _check_cancelled(self, run: SearchRun) -> None:
        if not self._cancelled:
            return
        logger.debug(
            "stepped search %s -> %s cancelled after %d relaxations",
            run.start,
            run.end,
            run.relaxations,
        )
        self._last_run = None
        raise SearchCancelled(
            f"search from {tuple(run.start)} to {tuple(run.end)} was cancelled"
        )
