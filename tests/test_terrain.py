import pytest

from terrapath.engine.errors import InvalidDimensions, OutOfBounds
from terrapath.engine.terrain import Terrain, TerrainGrid


def test_tier_weights_and_symbols() -> None:
    assert [int(tier) for tier in Terrain] == [10, 50, 150, 1000]
    assert Terrain.from_symbol("m") is Terrain.MOUNTAIN
    assert Terrain.SWAMP.symbol == "S"
    with pytest.raises(ValueError):
        Terrain.from_symbol("W")


def test_from_lines_parses_symbols_and_blocked_cells() -> None:
    terrain = TerrainGrid.from_lines(["RGS", "M#R", ""])

    assert (terrain.width, terrain.height) == (3, 2)
    assert terrain.cost((0, 0)) == 10
    assert terrain.cost((2, 0)) == 150
    assert terrain.cost((0, 1)) == 1000
    assert terrain.cost((1, 1)) is None
    assert terrain.to_lines() == ["RGS", "M#R"]


def test_custom_weights_are_allowed() -> None:
    terrain = TerrainGrid([[10, 75], [25, 10]])
    assert terrain.cost((1, 0)) == 75
    assert terrain.to_lines() == ["R?", "?R"]


def test_rejects_ragged_or_empty_rows() -> None:
    with pytest.raises(ValueError):
        TerrainGrid([[10, 10], [10]])
    with pytest.raises(InvalidDimensions):
        TerrainGrid([])
    with pytest.raises(InvalidDimensions):
        TerrainGrid.uniform(0, 2, 10)


def test_cost_out_of_bounds() -> None:
    terrain = TerrainGrid.uniform(2, 2, Terrain.GRASS)
    with pytest.raises(OutOfBounds):
        terrain.cost((-1, 0))


def test_with_cost_returns_a_new_grid() -> None:
    terrain = TerrainGrid.uniform(2, 2, Terrain.GRASS)
    changed = terrain.with_cost((1, 1), Terrain.ROAD)

    assert terrain.cost((1, 1)) == 50
    assert changed.cost((1, 1)) == 10
