import pytest

from terrapath.engine.heuristic import Heuristic


def test_octile_distance() -> None:
    heuristic = Heuristic.octile()
    assert heuristic.estimate((0, 0), (0, 0)) == 0
    assert heuristic.estimate((0, 0), (3, 0)) == 30
    assert heuristic.estimate((0, 0), (2, 2)) == 28
    assert heuristic.estimate((4, 1), (0, 0)) == 14 + 30


def test_octile_overestimates_a_diagonal_road_step() -> None:
    # Entering a road cell costs 10 whichever direction it is entered from.
    assert Heuristic.octile().estimate((0, 0), (1, 1)) == 14
    assert Heuristic.admissible().estimate((0, 0), (1, 1)) == 10


def test_from_name() -> None:
    assert Heuristic.from_name("Admissible") == Heuristic.admissible()
    assert Heuristic.from_name("octile").name == "octile"
    with pytest.raises(ValueError):
        Heuristic.from_name("euclid")


def test_name_follows_the_weights() -> None:
    assert Heuristic().name == "octile"
    assert Heuristic(10, 10).name == "admissible"
    assert Heuristic(12, 10).name == "octile-12-10"
