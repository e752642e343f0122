from __future__ import annotations
from typing import Callable, Dict, FrozenSet

from npuzzle.domains.spiral import Configuration, Coord, Goal, build_goal

DistanceFn = Callable[[Coord, Coord], int]
HFun = Callable[[Configuration], int]


def manhattan(target: Coord, pos: Coord) -> int:
    return abs(target[0] - pos[0]) + abs(target[1] - pos[1])


def out_of_place(target: Coord, pos: Coord) -> int:
    # Weighted 4 per misplaced tile, so it is not admissible.
    return 0 if target == pos else 4


def euclidean(target: Coord, pos: Coord) -> int:
    """Squared Euclidean distance. Overestimates, so solutions may be longer than optimal."""
    dr = target[0] - pos[0]
    dc = target[1] - pos[1]
    return dr * dr + dc * dc


HEURISTICS: Dict[str, DistanceFn] = {
    "manhattan": manhattan,
    "out_of_place": out_of_place,
    "euclidean": euclidean,
}

# Heuristics that never overestimate, i.e. A* returns a minimal move count.
ADMISSIBLE: FrozenSet[str] = frozenset({"manhattan"})


def estimate(goal: Goal, config: Configuration, distance_fn: DistanceFn,
             include_blank: bool = False) -> int:
    """Sum of distance_fn(home, current) over every cell (blank skipped unless include_blank)."""
    n = config.n
    dist = 0
    for idx, tile in enumerate(config.tiles):
        if tile == 0 and not include_blank:
            continue
        dist += distance_fn(goal[tile], divmod(idx, n))
    return dist


def get_distance_fn(name: str) -> DistanceFn:
    try:
        return HEURISTICS[name.lower()]
    except KeyError:
        raise ValueError(f"unknown heuristic {name!r}; choose from {sorted(HEURISTICS)}") from None


def make_heuristic(name: str, n: int, include_blank: bool = False) -> HFun:
    """Bind a named distance function to the spiral goal of an n×n board."""
    distance_fn = get_distance_fn(name)
    goal = build_goal(n)

    def hfun(config: Configuration) -> int:
        return estimate(goal, config, distance_fn, include_blank)

    hfun.__name__ = name.lower()
    return hfun
