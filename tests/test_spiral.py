from __future__ import annotations
import itertools

import pytest

from npuzzle.domains.spiral import (
    Configuration, blank_distance, blank_moves, build_goal, goal_configuration,
    is_solvable, make_unsolvable_variant, permutation_parity, scramble,
)
from npuzzle.errors import MalformedPuzzleError, MissingBlankError


@pytest.mark.parametrize("n", range(1, 9))
def test_goal_is_bijection_onto_grid(n):
    goal = build_goal(n)
    assert len(goal) == n * n
    assert set(goal) == {(r, c) for r in range(n) for c in range(n)}


@pytest.mark.parametrize("n,home", [(1, (0, 0)), (2, (1, 0)), (3, (1, 1)), (4, (2, 1)), (5, (2, 2)), (6, (3, 2))])
def test_blank_home_is_centre(n, home):
    assert build_goal(n)[0] == home


@pytest.mark.parametrize("n", range(2, 9))
def test_consecutive_tiles_are_adjacent(n):
    goal = build_goal(n)
    for v in range(1, n * n - 1):
        (r1, c1), (r2, c2) = goal[v], goal[v + 1]
        assert abs(r1 - r2) + abs(c1 - c2) == 1


def test_known_layouts():
    assert goal_configuration(3).rows() == [(1, 2, 3), (8, 0, 4), (7, 6, 5)]
    assert goal_configuration(4).rows() == [
        (1, 2, 3, 4), (12, 13, 14, 5), (11, 0, 15, 6), (10, 9, 8, 7)]
    assert goal_configuration(2).rows() == [(1, 2), (0, 3)]
    assert goal_configuration(1).rows() == [(0,)]


def test_is_goal():
    assert goal_configuration(4).is_goal()
    assert Configuration.from_rows([[1, 2], [0, 3]]).is_goal()
    assert not scramble(3, 7, 2).is_goal()


def test_build_goal_is_cached():
    assert build_goal(5) is build_goal(5)


def test_build_goal_rejects_zero():
    with pytest.raises(ValueError):
        build_goal(0)


def test_configuration_equality_and_hash():
    a = Configuration.from_rows([[1, 2], [0, 3]])
    b = Configuration(2, (1, 2, 0, 3))
    assert a == b and hash(a) == hash(b)
    assert a.blank == 2 and a.blank_pos == (1, 0)
    assert a.position(3) == (1, 1)


def test_configuration_is_immutable():
    a = goal_configuration(3)
    with pytest.raises(AttributeError):
        a.tiles = (0,)


@pytest.mark.parametrize("rows", [
    [[1, 2], [3]],
    [[1, 2, 3], [0, 4, 5]],
    [[1, 1], [0, 3]],
    [[1, 2], [0, 4]],
    [[1, 2], [-1, 3]],
])
def test_from_rows_rejects_bad_grids(rows):
    with pytest.raises(MalformedPuzzleError):
        Configuration.from_rows(rows)


def test_missing_blank():
    with pytest.raises(MissingBlankError):
        Configuration(2, (1, 2, 3, 4))


def test_neighbors_stay_on_grid():
    corner = Configuration.from_rows([[0, 1, 2], [3, 4, 5], [6, 7, 8]])
    assert len(list(corner.neighbors())) == 2
    centre = goal_configuration(3)
    assert len(list(centre.neighbors())) == 4
    edge = Configuration.from_rows([[1, 0, 2], [3, 4, 5], [6, 7, 8]])
    assert blank_moves(3, edge.blank) == (4, 0, 2)


def test_move_swaps_only_blank_and_target():
    g = goal_configuration(3)
    s = g.move(1)  # tile 2 moves down into the centre
    assert s.rows() == [(1, 0, 3), (8, 2, 4), (7, 6, 5)]
    assert s.blank_pos == (0, 1)
    assert g.blank_pos == (1, 1)


def test_goal_parities_are_even():
    g = goal_configuration(4)
    assert permutation_parity(g) == 0
    assert blank_distance(g) == 0
    assert is_solvable(g)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_scrambles_are_solvable(n):
    for seed in range(20):
        s = scramble(n, 25, seed)
        assert is_solvable(s)
        assert not is_solvable(make_unsolvable_variant(s))


def test_single_move_flips_both_parities():
    s = scramble(4, 9, 3)
    for s2 in s.neighbors():
        assert permutation_parity(s2) != permutation_parity(s)
        assert blank_distance(s2) % 2 != blank_distance(s) % 2


def test_half_of_2x2_permutations_are_solvable():
    solvable = [p for p in itertools.permutations(range(4)) if is_solvable(Configuration(2, p))]
    assert len(solvable) == 12


def test_scramble_is_seeded():
    assert scramble(4, 30, 7) == scramble(4, 30, 7)
    assert scramble(3, 0, 1) == goal_configuration(3)
