"""Search engine: grid graph, heuristic, frontier, A* and stepping."""

from terrapath.engine.astar import (
    AStarSearch,
    NodeStatus,
    Path,
    Relaxation,
    SearchRun,
    SearchState,
    search,
)
from terrapath.engine.errors import (
    InvalidDimensions,
    InvalidEndpoint,
    InvalidTerrainCost,
    OutOfBounds,
    PathfindingError,
    SearchCancelled,
)
from terrapath.engine.frontier import Frontier
from terrapath.engine.grid import NEIGHBOR_OFFSETS, Coordinate, GridGraph, Node
from terrapath.engine.heuristic import Heuristic
from terrapath.engine.stepper import StepController, StepSnapshot
from terrapath.engine.terrain import Terrain, TerrainGrid, TerrainMap

__all__ = [
    "AStarSearch",
    "Coordinate",
    "Frontier",
    "GridGraph",
    "Heuristic",
    "InvalidDimensions",
    "InvalidEndpoint",
    "InvalidTerrainCost",
    "NEIGHBOR_OFFSETS",
    "Node",
    "NodeStatus",
    "OutOfBounds",
    "Path",
    "PathfindingError",
    "Relaxation",
    "SearchCancelled",
    "SearchRun",
    "SearchState",
    "StepController",
    "StepSnapshot",
    "Terrain",
    "TerrainGrid",
    "TerrainMap",
    "search",
]
