"""Module entry point for `python -m terrapath`."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from terrapath.app import SearchOutcome, load_settings, load_terrain, run_search
from terrapath.engine.errors import PathfindingError, SearchCancelled
from terrapath.engine.stepper import StepSnapshot
from terrapath.engine.terrain import Terrain, TerrainGrid

EXIT_NO_PATH = 1
EXIT_CANCELLED = 2
EXIT_INVALID = 3


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Find the cheapest route across an ASCII terrain map."
    )
    parser.add_argument(
        "map",
        type=Path,
        help="Terrain file: one row per line using R, G, S, M and # (impassable).",
    )
    parser.add_argument(
        "--start",
        type=_parse_coord,
        required=True,
        help="Start cell as X,Y.",
    )
    parser.add_argument(
        "--end",
        type=_parse_coord,
        required=True,
        help="End cell as X,Y.",
    )
    parser.add_argument(
        "--heuristic",
        choices=["octile", "admissible"],
        default=None,
        help="Heuristic weights (defaults to TERRAPATH_HEURISTIC or octile).",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Print every relaxation while the search runs.",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to pause between relaxations when animating.",
    )
    parser.add_argument(
        "--max-steps",
        type=_positive_int,
        default=None,
        help="Cancel the search after this many relaxations.",
    )
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Write a JSONL trace of the search under this directory.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to TERRAPATH_LOG_LEVEL or WARNING).",
    )
    args = parser.parse_args(argv)

    console = Console()
    try:
        settings = load_settings(
            heuristic=args.heuristic,
            step_delay=args.delay,
            log_level=args.log_level,
        )
    except ValueError as exc:
        console.print(f"[red]Invalid settings:[/red] {exc}")
        return EXIT_INVALID
    _configure_logging(settings.log_level)

    try:
        terrain = load_terrain(args.map)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Could not load {args.map}:[/red] {exc}")
        return EXIT_INVALID

    on_step = _print_step(console) if args.animate else None
    try:
        outcome = run_search(
            terrain,
            args.start,
            args.end,
            settings=settings,
            on_step=on_step,
            animate=args.animate,
            max_steps=args.max_steps,
            trace_dir=args.trace_dir,
        )
    except SearchCancelled as exc:
        console.print(f"[yellow]Cancelled:[/yellow] {exc}")
        return EXIT_CANCELLED
    except PathfindingError as exc:
        console.print(f"[red]Search failed:[/red] {exc}")
        return EXIT_INVALID

    _print_outcome(console, terrain, outcome)
    return 0 if outcome.path is not None else EXIT_NO_PATH


def _parse_coord(value: str) -> tuple[int, int]:
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {value!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected integers in {value!r}") from exc


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer but got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer but got {number}")
    return number


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _print_step(console: Console):
    def _print(snapshot: StepSnapshot) -> None:
        relaxation = snapshot.relaxation
        marker = "+" if relaxation.improved else " "
        console.print(
            f"{snapshot.step:>5} {marker} {tuple(relaxation.current)} -> "
            f"{tuple(relaxation.neighbor)} g={relaxation.tentative_g} "
            f"open={len(snapshot.open_set)} closed={len(snapshot.closed_set)}"
        )

    return _print


def _print_outcome(console: Console, terrain: TerrainGrid, outcome: SearchOutcome) -> None:
    summary = outcome.summary
    if outcome.path is None:
        console.print(
            f"No path from {summary.start} to {summary.end} "
            f"({summary.expansions} cells expanded)."
        )
    else:
        table = Table(title=f"Path {summary.start} -> {summary.end}")
        table.add_column("#", justify="right")
        table.add_column("Cell")
        table.add_column("Terrain")
        table.add_column("Cost", justify="right")
        running = 0
        for index, coord in enumerate(outcome.path):
            weight = terrain.cost(coord)
            if index > 0 and weight is not None:
                running += weight
            table.add_row(str(index), str(tuple(coord)), _terrain_label(weight), str(running))
        console.print(table)
        console.print(
            f"Total cost {summary.cost} over {len(outcome.path) - 1} moves "
            f"({summary.expansions} expanded, heuristic {summary.heuristic})."
        )
    if outcome.trace_path is not None:
        console.print(f"Trace saved to {outcome.trace_path}")


def _terrain_label(weight: int | None) -> str:
    if weight is None:
        return "blocked"
    try:
        return Terrain(weight).name.title()
    except ValueError:
        return str(weight)


if __name__ == "__main__":
    raise SystemExit(main())
