"""Serializable records for search traces and summaries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from terrapath.engine.astar import Path, SearchRun
from terrapath.engine.stepper import StepSnapshot


class StepRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    step: int
    current: tuple[int, int]
    neighbor: tuple[int, int]
    tentative_g: int
    improved: bool
    g: int | None = None
    f: int | None = None
    open_size: int
    closed_size: int

    @classmethod
    def from_snapshot(cls, snapshot: StepSnapshot) -> "StepRecord":
        relaxation = snapshot.relaxation
        neighbor = relaxation.neighbor
        return cls(
            step=snapshot.step,
            current=tuple(relaxation.current),
            neighbor=tuple(neighbor),
            tentative_g=relaxation.tentative_g,
            improved=relaxation.improved,
            g=snapshot.g_score.get(neighbor),
            f=snapshot.f_score.get(neighbor),
            open_size=len(snapshot.open_set),
            closed_size=len(snapshot.closed_set),
        )


class SearchSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: tuple[int, int]
    end: tuple[int, int]
    heuristic: str
    found: bool
    path: list[tuple[int, int]] = Field(default_factory=list)
    cost: int | None = None
    expansions: int = 0
    relaxations: int = 0

    @model_validator(mode="after")
    def validate_summary(self) -> "SearchSummary":
        if self.found:
            if not self.path or self.cost is None:
                raise ValueError("found summaries require path and cost")
            if self.path[0] != self.start or self.path[-1] != self.end:
                raise ValueError("path must run from start to end")
        elif self.path or self.cost is not None:
            raise ValueError("summaries without a path cannot carry path or cost")
        return self

    @classmethod
    def from_result(
        cls,
        run: SearchRun,
        path: Path | None,
    ) -> "SearchSummary":
        return cls(
            start=tuple(run.start),
            end=tuple(run.end),
            heuristic=run.heuristic.name,
            found=path is not None,
            path=[tuple(coord) for coord in path] if path is not None else [],
            cost=path.cost if path is not None else None,
            expansions=run.expansions,
            relaxations=run.relaxations,
        )
