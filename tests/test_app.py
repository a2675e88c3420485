from pathlib import Path

import pytest

from terrapath.__main__ import EXIT_CANCELLED, EXIT_INVALID, EXIT_NO_PATH, main
from terrapath.app import load_settings, load_terrain, run_search
from terrapath.db.trace_reader import read_step_records, read_summary
from terrapath.engine.errors import SearchCancelled
from terrapath.engine.terrain import TerrainGrid

WALLED_MAP = "GGMGG\nGGMGG\nGGMGG\nGGMGG\nGGRGG\n"


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TERRAPATH_HEURISTIC", raising=False)
    monkeypatch.delenv("TERRAPATH_STEP_DELAY", raising=False)
    monkeypatch.delenv("TERRAPATH_LOG_LEVEL", raising=False)
    settings = load_settings()

    assert settings.heuristic.name == "octile"
    assert settings.step_delay == 0.025
    assert settings.log_level == "WARNING"


def test_load_settings_env_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERRAPATH_HEURISTIC", "admissible")
    monkeypatch.setenv("TERRAPATH_STEP_DELAY", "0")
    monkeypatch.setenv("TERRAPATH_LOG_LEVEL", "debug")

    settings = load_settings()
    assert settings.heuristic.name == "admissible"
    assert settings.step_delay == 0
    assert settings.log_level == "DEBUG"

    overridden = load_settings(heuristic="octile", step_delay=0.5)
    assert overridden.heuristic.name == "octile"
    assert overridden.step_delay == 0.5


def test_load_settings_rejects_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERRAPATH_STEP_DELAY", "soon")
    with pytest.raises(ValueError):
        load_settings()
    with pytest.raises(ValueError):
        load_settings(step_delay=-1)
    with pytest.raises(ValueError):
        load_settings(heuristic="manhattan", step_delay=0)
    with pytest.raises(ValueError, match="unknown log level"):
        load_settings(log_level="loud", step_delay=0)


def test_run_search_writes_trace(tmp_path: Path) -> None:
    map_path = tmp_path / "walled.txt"
    map_path.write_text(WALLED_MAP, encoding="utf-8")
    terrain = load_terrain(map_path)
    settings = load_settings(heuristic="admissible", step_delay=0)

    outcome = run_search(
        terrain, (0, 0), (4, 0), settings=settings, trace_dir=tmp_path / "traces"
    )

    assert outcome.path is not None
    assert outcome.summary.cost == 360
    assert outcome.trace_path is not None
    assert len(list(read_step_records(outcome.trace_path))) == outcome.summary.relaxations
    assert read_summary(outcome.trace_path) == outcome.summary


def test_run_search_step_budget_cancels() -> None:
    terrain = TerrainGrid.from_lines(WALLED_MAP.splitlines())
    settings = load_settings(heuristic="octile", step_delay=0)

    with pytest.raises(SearchCancelled):
        run_search(terrain, (0, 0), (4, 0), settings=settings, max_steps=5)


def test_run_search_step_budget_allows_an_exact_finish() -> None:
    terrain = TerrainGrid.from_lines(["RMR"])
    settings = load_settings(heuristic="octile", step_delay=0)
    needed = run_search(terrain, (0, 0), (2, 0), settings=settings).summary.relaxations

    outcome = run_search(terrain, (0, 0), (2, 0), settings=settings, max_steps=needed)
    assert outcome.path is not None
    assert outcome.summary.relaxations == needed

    with pytest.raises(ValueError):
        run_search(terrain, (0, 0), (2, 0), settings=settings, max_steps=0)


def test_cli_prints_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    map_path = tmp_path / "walled.txt"
    map_path.write_text(WALLED_MAP, encoding="utf-8")

    code = main(
        [str(map_path), "--start", "0,0", "--end", "4,0", "--heuristic", "admissible"]
    )

    output = capsys.readouterr().out
    assert code == 0
    assert "Total cost 360" in output
    assert "Road" in output


def test_cli_animate_prints_steps(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    map_path = tmp_path / "row.txt"
    map_path.write_text("RMR\n", encoding="utf-8")

    code = main(
        [str(map_path), "--start", "0,0", "--end", "2,0", "--animate", "--delay", "0"]
    )

    output = capsys.readouterr().out
    assert code == 0
    assert "(0, 0) -> (1, 0) g=1000" in output
    assert "Total cost 1010" in output


def test_cli_no_path_and_errors(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    map_path = tmp_path / "blocked.txt"
    map_path.write_text("R#R\n", encoding="utf-8")

    assert main([str(map_path), "--start", "0,0", "--end", "2,0"]) == EXIT_NO_PATH
    assert "No path" in capsys.readouterr().out

    assert main([str(map_path), "--start", "0,0", "--end", "5,0"]) == EXIT_INVALID
    assert "outside" in capsys.readouterr().out

    bad_map = tmp_path / "bad.txt"
    bad_map.write_text("RXR\n", encoding="utf-8")
    assert main([str(bad_map), "--start", "0,0", "--end", "2,0"]) == EXIT_INVALID

    open_map = tmp_path / "open.txt"
    open_map.write_text(WALLED_MAP, encoding="utf-8")
    assert (
        main([str(open_map), "--start", "0,0", "--end", "4,0", "--max-steps", "2"])
        == EXIT_CANCELLED
    )

    assert (
        main([str(open_map), "--start", "0,0", "--end", "4,0", "--log-level", "loud"])
        == EXIT_INVALID
    )
    assert "unknown log level" in capsys.readouterr().out
    with pytest.raises(SystemExit):
        main([str(open_map), "--start", "0,0", "--end", "4,0", "--max-steps", "0"])
