"""Application wiring for running searches from settings and map files."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from terrapath.db.trace_log import (
    append_step,
    append_summary,
    create_run_folder,
    write_header,
)
from terrapath.engine.astar import AStarSearch, Path as SearchPath
from terrapath.engine.contracts import SearchSummary, StepRecord
from terrapath.engine.grid import GridGraph
from terrapath.engine.heuristic import Heuristic
from terrapath.engine.stepper import StepController, StepSnapshot
from terrapath.engine.terrain import TerrainGrid

DEFAULT_HEURISTIC = "octile"
DEFAULT_STEP_DELAY = 0.025
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class SearchSettings:
    heuristic: Heuristic
    step_delay: float
    log_level: str


@dataclass(frozen=True)
class SearchOutcome:
    path: SearchPath | None
    summary: SearchSummary
    trace_path: Path | None = None


def load_settings(
    *,
    heuristic: str | None = None,
    step_delay: float | None = None,
    log_level: str | None = None,
) -> SearchSettings:
    heuristic_name = (
        heuristic or os.getenv("TERRAPATH_HEURISTIC") or DEFAULT_HEURISTIC
    )
    return SearchSettings(
        heuristic=Heuristic.from_name(heuristic_name),
        step_delay=_resolve_step_delay(step_delay),
        log_level=_resolve_log_level(log_level),
    )


def load_terrain(path: Path) -> TerrainGrid:
    with path.open("r", encoding="utf-8") as handle:
        return TerrainGrid.from_lines(handle)


def run_search(
    terrain: TerrainGrid,
    start: tuple[int, int],
    end: tuple[int, int],
    *,
    settings: SearchSettings,
    on_step: Callable[[StepSnapshot], Any] | None = None,
    animate: bool = False,
    max_steps: int | None = None,
    trace_dir: Path | None = None,
) -> SearchOutcome:
    if max_steps is not None and max_steps < 1:
        raise ValueError(f"max_steps must be at least 1, got {max_steps}")
    graph = GridGraph.build(terrain.width, terrain.height)
    controller = StepController(AStarSearch(settings.heuristic))

    trace_path = None
    if trace_dir is not None:
        run_dir, trace_path = create_run_folder(trace_dir)
        write_header(
            trace_path,
            metadata={
                "run_id": run_dir.name,
                "width": terrain.width,
                "height": terrain.height,
                "start": list(start),
                "end": list(end),
                "heuristic": settings.heuristic.name,
            },
        )

    observers: list[Callable[[StepSnapshot], Any]] = []
    if on_step is not None:
        observers.append(on_step)
    if trace_path is not None:
        observers.append(
            lambda snapshot: append_step(trace_path, StepRecord.from_snapshot(snapshot))
        )

    def _observe(snapshot: StepSnapshot) -> None:
        for observer in observers:
            observer(snapshot)

    callback = _observe if observers else None
    if animate:
        path = asyncio.run(
            controller.arun(
                graph,
                terrain,
                start,
                end,
                callback,
                delay=settings.step_delay,
                max_steps=max_steps,
            )
        )
    else:
        path = controller.run(
            graph, terrain, start, end, callback, max_steps=max_steps
        )

    run = controller.last_run
    if run is None:
        raise RuntimeError("search finished without a recorded run")
    summary = SearchSummary.from_result(run, path)
    if trace_path is not None:
        append_summary(trace_path, summary)
    return SearchOutcome(path=path, summary=summary, trace_path=trace_path)


def _resolve_log_level(log_level: str | None) -> str:
    level = (
        log_level or os.getenv("TERRAPATH_LOG_LEVEL") or DEFAULT_LOG_LEVEL
    ).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {level!r}")
    return level


def _resolve_step_delay(step_delay: float | None) -> float:
    if step_delay is not None:
        value = step_delay
    else:
        raw = os.getenv("TERRAPATH_STEP_DELAY")
        if raw is None:
            return DEFAULT_STEP_DELAY
        try:
            value = float(raw)
        except ValueError as exc:
            raise ValueError(f"TERRAPATH_STEP_DELAY must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValueError("step delay cannot be negative")
    return value
