"""Terminal rendering of boards, solution paths and search summaries."""
from __future__ import annotations
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from npuzzle.domains.spiral import Configuration, Goal
from npuzzle.heuristics.distance import DistanceFn, estimate
from npuzzle.search.a_star import BUDGET, EXHAUSTED, OK, TIMEOUT, UNSOLVABLE, SearchResult

# Background swatch per per-cell distance; anything larger is red
_SWATCH = {0: "on bright_blue", 1: "on bright_cyan", 2: "on bright_green", 3: "on bright_yellow"}

_STATUS = {
    OK: ("solved", "bold bright_green"),
    UNSOLVABLE: ("unsolvable", "bold bright_red"),
    EXHAUSTED: ("no solution found", "bold bright_red"),
    BUDGET: ("expansion budget exhausted", "bold yellow"),
    TIMEOUT: ("time budget exhausted", "bold yellow"),
}


def board_text(config: Configuration, goal: Goal, distance_fn: DistanceFn,
               moved: Optional[int] = None, include_blank: bool = False) -> Text:
    """
    One line per row: the tiles (blank in red, the tile at flat index `moved`
    in green), then a colour swatch per cell showing its distance to home,
    and finally the board's total heuristic value.
    """
    n = config.n
    width = max(2, len(str(n * n - 1)))
    out = Text()
    for r in range(n):
        for c in range(n):
            idx = r * n + c
            tile = config.tiles[idx]
            if tile == 0:
                out.append(f" [{0:>{width - 1}}] ", style="bold bright_red")
            elif idx == moved:
                out.append(f" {tile:>{width}}  ", style="bold bright_green")
            else:
                out.append(f" {tile:>{width}}  ")
        for c in range(n):
            tile = config.tiles[r * n + c]
            d = distance_fn(goal[tile], (r, c))
            out.append("  ", style=_SWATCH.get(d, "on bright_red"))
        out.append("\n")
    pad = " " * ((width + 3) * n)
    out.append(pad)
    out.append(f"     {estimate(goal, config, distance_fn, include_blank)}\n", style="bold")
    return out


def render_path(console: Console, path: List[Configuration], goal: Goal,
                distance_fn: DistanceFn, include_blank: bool = False) -> None:
    moved: Optional[int] = None
    for i, config in enumerate(path):
        console.print("initial state" if i == 0 else f"step {i}:", highlight=False)
        console.print(board_text(config, goal, distance_fn, moved, include_blank))
        moved = config.blank


def render_summary(console: Console, result: SearchResult) -> None:
    label, style = _STATUS.get(result.termination, (result.termination, "bold"))
    console.print(Text(label, style=style))
    if result.solved:
        console.print(f"Number of moves                       : {result.moves}", highlight=False)
    console.print(f"Number of moves evaluated             : {result.expanded}", highlight=False)
    console.print(f"Number of moves skipped               : {result.skipped}", highlight=False)
    console.print(f"Maximum number of simultaneous states : {result.peak_open}", highlight=False)
