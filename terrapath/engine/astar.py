"""Grid-based pathfinding (A*) over weighted terrain."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import Iterator

from terrapath.engine.errors import InvalidEndpoint, InvalidTerrainCost
from terrapath.engine.frontier import Frontier
from terrapath.engine.grid import Coordinate, GridGraph
from terrapath.engine.heuristic import Heuristic
from terrapath.engine.terrain import TerrainMap

logger = logging.getLogger(__name__)


class NodeStatus(str, Enum):
    UNVISITED = "unvisited"
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class SearchState:
    g_score: dict[Coordinate, int] = field(default_factory=dict)
    f_score: dict[Coordinate, int] = field(default_factory=dict)
    came_from: dict[Coordinate, Coordinate] = field(default_factory=dict)
    closed: set[Coordinate] = field(default_factory=set)
    frontier: Frontier = field(default_factory=Frontier)

    def g(self, coord: Coordinate) -> float:
        return self.g_score.get(coord, inf)

    def f(self, coord: Coordinate) -> float:
        return self.f_score.get(coord, inf)

    def status(self, coord: Coordinate) -> NodeStatus:
        if coord in self.closed:
            return NodeStatus.CLOSED
        if coord in self.frontier:
            return NodeStatus.OPEN
        return NodeStatus.UNVISITED

    def reconstruct_path(self, end: Coordinate) -> tuple[Coordinate, ...]:
        steps = [end]
        current = end
        while current in self.came_from:
            current = self.came_from[current]
            steps.append(current)
        steps.reverse()
        return tuple(steps)


@dataclass(frozen=True)
class Relaxation:
    current: Coordinate
    neighbor: Coordinate
    tentative_g: int
    improved: bool


@dataclass(frozen=True)
class Path:
    nodes: tuple[Coordinate, ...]
    cost: int

    @property
    def start(self) -> Coordinate:
        return self.nodes[0]

    @property
    def end(self) -> Coordinate:
        return self.nodes[-1]

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Coordinate:
        return self.nodes[index]


class SearchRun:
    """One resumable A* invocation.

    Iterating the run advances the search by one neighbor relaxation at a time
    and yields a ``Relaxation`` for each. Once iteration stops, ``result`` holds
    the path, or None when the end cannot be reached.
    """

    def __init__(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
        *,
        heuristic: Heuristic,
    ) -> None:
        if not graph.contains(start):
            raise InvalidEndpoint("start", start, graph.width, graph.height)
        if not graph.contains(end):
            raise InvalidEndpoint("end", end, graph.width, graph.height)
        self._graph = graph
        self._terrain = terrain
        self._heuristic = heuristic
        self.start = Coordinate(*start)
        self.end = Coordinate(*end)
        self.state = SearchState()
        self.expansions = 0
        self.relaxations = 0
        self._result: Path | None = None
        self._finished = False

        self.state.g_score[self.start] = 0
        self.state.f_score[self.start] = heuristic.estimate(self.start, self.end)
        self.state.frontier.insert_or_reprioritize(
            self.start, self.state.f_score[self.start]
        )
        self._steps = self._explore()

    @property
    def heuristic(self) -> Heuristic:
        return self._heuristic

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def result(self) -> Path | None:
        if not self._finished:
            raise RuntimeError("search run has not finished")
        return self._result

    def __iter__(self) -> "SearchRun":
        return self

    def __next__(self) -> Relaxation:
        return next(self._steps)

    def run_to_completion(self) -> Path | None:
        for _ in self:
            pass
        return self.result

    def _explore(self) -> Iterator[Relaxation]:
        state = self.state
        logger.debug(
            "A* start=%s end=%s heuristic=%s", self.start, self.end, self._heuristic.name
        )
        while not state.frontier.is_empty():
            current = state.frontier.pop_min()
            if current == self.end:
                self._finish(
                    Path(nodes=state.reconstruct_path(current), cost=state.g_score[current])
                )
                return

            state.closed.add(current)
            self.expansions += 1
            current_g = state.g_score[current]
            for neighbor in self._graph.ordered_neighbors(current):
                if neighbor in state.closed:
                    continue
                cost = self._entry_cost(neighbor)
                if cost is None:
                    continue
                tentative = current_g + cost
                improved = tentative < state.g(neighbor)
                if improved:
                    state.came_from[neighbor] = current
                    state.g_score[neighbor] = tentative
                    state.f_score[neighbor] = tentative + self._heuristic.estimate(
                        neighbor, self.end
                    )
                    state.frontier.insert_or_reprioritize(
                        neighbor, state.f_score[neighbor]
                    )
                self.relaxations += 1
                yield Relaxation(
                    current=current,
                    neighbor=neighbor,
                    tentative_g=tentative,
                    improved=improved,
                )

        self._finish(None)

    def _entry_cost(self, coord: Coordinate) -> int | None:
        cost = self._terrain.cost(coord)
        if cost is None:
            return None
        if isinstance(cost, bool) or not isinstance(cost, int) or cost <= 0:
            raise InvalidTerrainCost(coord, cost)
        return int(cost)

    def _finish(self, result: Path | None) -> None:
        self._result = result
        self._finished = True
        if result is None:
            logger.debug(
                "A* exhausted frontier after %d expansions, no path to %s",
                self.expansions,
                self.end,
            )
        else:
            logger.debug(
                "A* reached %s cost=%d steps=%d expansions=%d",
                self.end,
                result.cost,
                len(result),
                self.expansions,
            )


class AStarSearch:
    def __init__(self, heuristic: Heuristic | None = None) -> None:
        self._heuristic = heuristic or Heuristic.octile()

    @property
    def heuristic(self) -> Heuristic:
        return self._heuristic

    def begin(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
    ) -> SearchRun:
        return SearchRun(graph, terrain, start, end, heuristic=self._heuristic)

    def search(
        self,
        graph: GridGraph,
        terrain: TerrainMap,
        start: tuple[int, int],
        end: tuple[int, int],
    ) -> Path | None:
        """Return the cheapest path found from ``start`` to ``end``, or None."""
        return self.begin(graph, terrain, start, end).run_to_completion()


def search(
    graph: GridGraph,
    terrain: TerrainMap,
    start: tuple[int, int],
    end: tuple[int, int],
    *,
    heuristic: Heuristic | None = None,
) -> Path | None:
    return AStarSearch(heuristic).search(graph, terrain, start, end)
