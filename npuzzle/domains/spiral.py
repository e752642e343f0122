from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterator, List, Sequence, Tuple
import random

from npuzzle.errors import MalformedPuzzleError, MissingBlankError

State = Tuple[int, ...]      # flat, row-major; 0 is the blank
Coord = Tuple[int, int]      # (row, col)
Goal = Tuple[Coord, ...]     # goal[v] = home cell of tile v

# Blank moves in expansion order: up, down, left, right
_DIRS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


# ---------- Goal layout ----------

@lru_cache(maxsize=None)
def build_goal(n: int) -> Goal:
    """Home cell of every tile value under the inward spiral ("snail") layout.

    goal[0] is the blank's home: the centre cell, or for even n the cell just
    left of the exact centre. Tiles 1.. follow the outer ring clockwise from
    the top-left corner, then the next ring inside it, and so on.
    """
    if n < 1:
        raise ValueError(f"board size must be >= 1, got {n}")
    total = n * n
    out: List[Coord] = [(n // 2, n // 2 - 1 if n % 2 == 0 else n // 2)]
    r = c = 0
    side = n
    while side > 1:
        for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
            if len(out) >= total:
                break
            for _ in range(side - 1):
                out.append((r, c))
                r += dr
                c += dc
        side -= 2
        r += 1
        c += 1
    return tuple(out)


@lru_cache(maxsize=None)
def goal_index(n: int) -> Tuple[int, ...]:
    """goal_index(n)[v] = flat index of tile v's home cell."""
    return tuple(r * n + c for r, c in build_goal(n))


# ---------- Configuration ----------

@dataclass(frozen=True)
class Configuration:
    """Immutable n×n arrangement of tiles. Hash/equality cover (n, tiles)."""
    n: int
    tiles: State
    blank: int = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        try:
            z = self.tiles.index(0)
        except ValueError:
            raise MissingBlankError("no blank (0) cell in configuration") from None
        object.__setattr__(self, "blank", z)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Configuration":
        n = len(rows)
        if n == 0:
            raise MalformedPuzzleError("empty grid")
        for i, row in enumerate(rows):
            if len(row) != n:
                raise MalformedPuzzleError(f"row {i} has {len(row)} values, expected {n}")
        tiles = tuple(v for row in rows for v in row)
        validate_tiles(n, tiles)
        return cls(n, tiles)

    @property
    def blank_pos(self) -> Coord:
        return divmod(self.blank, self.n)

    def rows(self) -> List[State]:
        n = self.n
        return [self.tiles[r * n:(r + 1) * n] for r in range(n)]

    def position(self, tile: int) -> Coord:
        return divmod(self.tiles.index(tile), self.n)

    def move(self, j: int) -> "Configuration":
        """Swap the blank with the tile at flat index j."""
        lst = list(self.tiles)
        z = self.blank
        lst[z], lst[j] = lst[j], lst[z]
        return Configuration(self.n, tuple(lst))

    def neighbors(self) -> Iterator["Configuration"]:
        """Successors reachable by one blank swap, never moving the blank off-grid."""
        for j in blank_moves(self.n, self.blank):
            yield self.move(j)

    def is_goal(self) -> bool:
        return self == goal_configuration(self.n)


def validate_tiles(n: int, tiles: Sequence[int]) -> None:
    """Every value in [0, n²-1] exactly once."""
    size = n * n
    if len(tiles) != size:
        raise MalformedPuzzleError(f"expected {size} values, got {len(tiles)}")
    seen = set()
    for v in tiles:
        if not 0 <= v < size:
            raise MalformedPuzzleError(f"value {v} out of range [0, {size - 1}]")
        if v in seen:
            raise MalformedPuzzleError(f"duplicate value {v}")
        seen.add(v)


@lru_cache(maxsize=None)
def _neighbor_table(n: int) -> Dict[int, Tuple[int, ...]]:
    table: Dict[int, Tuple[int, ...]] = {}
    for i in range(n * n):
        r, c = divmod(i, n)
        moves = []
        for dr, dc in _DIRS:
            r2, c2 = r + dr, c + dc
            if 0 <= r2 < n and 0 <= c2 < n:
                moves.append(r2 * n + c2)
        table[i] = tuple(moves)
    return table


def blank_moves(n: int, blank: int) -> Tuple[int, ...]:
    """Flat indices the blank at `blank` may swap with."""
    return _neighbor_table(n)[blank]


@lru_cache(maxsize=None)
def goal_configuration(n: int) -> Configuration:
    lst = [0] * (n * n)
    for v, idx in enumerate(goal_index(n)):
        lst[idx] = v
    return Configuration(n, tuple(lst))


# ---------- Solvability ----------

def permutation_parity(config: Configuration) -> int:
    """Parity (0 even, 1 odd) of the cell permutation sending each cell to the
    home of the value it holds, blank included."""
    home = goal_index(config.n)
    perm = [home[v] for v in config.tiles]
    seen = [False] * len(perm)
    swaps = 0
    for i in range(len(perm)):
        if seen[i]:
            continue
        length = 0
        j = i
        while not seen[j]:
            seen[j] = True
            j = perm[j]
            length += 1
        swaps += length - 1
    return swaps % 2


def blank_distance(config: Configuration) -> int:
    """Manhattan distance from the blank to its home cell."""
    r, c = config.blank_pos
    gr, gc = build_goal(config.n)[0]
    return abs(r - gr) + abs(c - gc)


def is_solvable(config: Configuration) -> bool:
    """Every move is one transposition of cells and moves the blank by one, so
    the two parities flip together; the goal has both even."""
    if config.n == 1:
        return True
    return permutation_parity(config) == blank_distance(config) % 2


# ---------- Instance generation ----------

def scramble(n: int, depth: int, seed: int) -> Configuration:
    """Depth-limited random walk from the goal with no immediate backtrack."""
    rng = random.Random(seed)
    s = goal_configuration(n)
    last_blank = None
    for _ in range(depth):
        cand = list(blank_moves(n, s.blank))
        if last_blank in cand and len(cand) > 1:
            cand.remove(last_blank)
        j = rng.choice(cand)
        last_blank = s.blank
        s = s.move(j)
    return s


def make_unsolvable_variant(config: Configuration) -> Configuration:
    """Swap the first two non-blank tiles, flipping the permutation parity."""
    lst = list(config.tiles)
    i = next(k for k, v in enumerate(lst) if v != 0)
    j = next(k for k, v in enumerate(lst[i + 1:], start=i + 1) if v != 0)
    lst[i], lst[j] = lst[j], lst[i]
    return Configuration(config.n, tuple(lst))
