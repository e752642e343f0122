import pytest

from npuzzle.domains.spiral import Configuration, build_goal, goal_configuration, scramble
from npuzzle.heuristics.distance import (
    HEURISTICS, estimate, euclidean, make_heuristic, manhattan, out_of_place,
)


@pytest.mark.parametrize("name", sorted(HEURISTICS))
@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7])
def test_zero_at_goal(name, n):
    for include_blank in (False, True):
        assert make_heuristic(name, n, include_blank)(goal_configuration(n)) == 0


def test_distance_functions():
    assert manhattan((0, 0), (2, 1)) == 3
    assert euclidean((0, 0), (2, 1)) == 5
    assert out_of_place((1, 1), (1, 1)) == 0
    assert out_of_place((1, 1), (0, 1)) == 4


def test_blank_excluded_by_default():
    # goal with the blank swapped right: only tile 4 and the blank are off by one
    s = Configuration.from_rows([[1, 2, 3], [8, 4, 0], [7, 6, 5]])
    goal = build_goal(3)
    assert estimate(goal, s, manhattan) == 1
    assert estimate(goal, s, manhattan, include_blank=True) == 2
    assert make_heuristic("out_of_place", 3)(s) == 4


@pytest.mark.parametrize("n", [3, 4, 5])
def test_manhattan_changes_by_one_per_move(n):
    goal = build_goal(n)
    h = make_heuristic("manhattan", n)
    for seed in range(10):
        s = scramble(n, 40, seed)
        for s2 in s.neighbors():
            assert abs(h(s2) - h(s)) == 1
            moved = s.tiles[s2.blank]
            before = manhattan(goal[moved], s.position(moved))
            after = manhattan(goal[moved], s2.position(moved))
            assert abs(after - before) == 1


def test_unknown_heuristic():
    with pytest.raises(ValueError):
        make_heuristic("chebyshev", 3)


def test_names_are_case_insensitive():
    assert make_heuristic("Manhattan", 3).__name__ == "manhattan"
