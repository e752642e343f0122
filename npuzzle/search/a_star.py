from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import heapq
import itertools
import logging
from time import perf_counter

from npuzzle.domains.spiral import Configuration, Coord, is_solvable
from npuzzle.errors import SearchInvariantError

logger = logging.getLogger(__name__)

HFun = Callable[[Configuration], int]

# Termination codes shared by every search in this package
OK = "ok"
EXHAUSTED = "exhausted"
UNSOLVABLE = "unsolvable"
BUDGET = "budget"
TIMEOUT = "timeout"


@dataclass
class SearchNode:
    config: Configuration
    g: int
    h: int
    blank: Coord
    parent: Optional[int] = None  # arena index in the VisitedTable

    @property
    def f(self) -> int:
        return self.g + self.h


class VisitedTable:
    """
    Append-only arena of SearchNodes plus a Configuration -> arena index map.
    The stored g for a configuration only ever decreases; a replaced node
    stays in the arena so that parent indices pointing at it remain valid.
    """
    def __init__(self):
        self._arena: List[SearchNode] = []
        self._index: Dict[Configuration, int] = {}

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, config: Configuration) -> bool:
        return config in self._index

    @property
    def arena_size(self) -> int:
        return len(self._arena)

    def node(self, idx: int) -> SearchNode:
        return self._arena[idx]

    def index_of(self, config: Configuration) -> Optional[int]:
        return self._index.get(config)

    def lookup(self, config: Configuration) -> Optional[SearchNode]:
        idx = self._index.get(config)
        return None if idx is None else self._arena[idx]

    def best_g(self, config: Configuration) -> Optional[int]:
        node = self.lookup(config)
        return None if node is None else node.g

    def offer(self, node: SearchNode) -> Optional[int]:
        """Record node if its configuration is new or reached more cheaply.
        Returns the new arena index, or None when a path at least as cheap is known."""
        best = self.best_g(node.config)
        if best is not None and best <= node.g:
            return None
        self._arena.append(node)
        idx = len(self._arena) - 1
        self._index[node.config] = idx
        return idx


class Frontier:
    """Binary heap of arena indices keyed by (f, tie, insertion order). No decrease-key."""
    def __init__(self, tie_break: str = "h"):
        if tie_break not in ("h", "g", "fifo", "lifo"):
            raise ValueError(f"unknown tie_break {tie_break!r}")
        self.tie_break = tie_break
        self._heap: List[Tuple[int, int, int, int]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def _key(self, node: SearchNode, ctr: int) -> Tuple[int, int, int]:
        if self.tie_break == "h":    return (node.f, node.h, ctr)
        if self.tie_break == "g":    return (node.f, -node.g, ctr)
        if self.tie_break == "fifo": return (node.f, 0, ctr)
        return (node.f, 0, -ctr)

    def push(self, idx: int, node: SearchNode) -> None:
        heapq.heappush(self._heap, self._key(node, next(self._counter)) + (idx,))

    def pop(self) -> int:
        return heapq.heappop(self._heap)[-1]


@dataclass
class SearchResult:
    termination: str
    path: Optional[List[Configuration]] = None
    g: Optional[int] = None
    expanded: int = 0
    skipped: int = 0
    generated: int = 0
    peak_open: int = 0
    peak_closed: int = 0
    time: float = 0.0
    algorithm: str = "A*"
    extra: Dict[str, object] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.termination == OK

    @property
    def moves(self) -> Optional[int]:
        if self.path is not None:
            return len(self.path) - 1
        return self.g

    def as_row(self) -> Dict[str, object]:
        row = {
            "algorithm": self.algorithm,
            "termination": self.termination,
            "g": "" if self.g is None else self.g,
            "expanded": self.expanded,
            "skipped": self.skipped,
            "generated": self.generated,
            "peak_open": self.peak_open,
            "peak_closed": self.peak_closed,
            "time_sec": f"{self.time:.6f}",
        }
        row.update(self.extra)
        return row


def reconstruct_path(table: VisitedTable, goal: Configuration) -> List[Configuration]:
    """Follow parent indices from goal's table entry back to the start; start-to-goal order."""
    idx = table.index_of(goal)
    if idx is None:
        raise SearchInvariantError("goal configuration missing from visited table")
    path: List[Configuration] = []
    seen = set()
    while idx is not None:
        if idx in seen or not 0 <= idx < table.arena_size:
            raise SearchInvariantError(f"broken parent chain at arena index {idx}")
        seen.add(idx)
        node = table.node(idx)
        path.append(node.config)
        idx = node.parent
    path.reverse()
    return path


def a_star(
    start: Configuration,
    hfun: HFun,
    check_parity: bool = True,
    tie_break: str = "h",
    max_expansions: Optional[int] = None,
    timeout_sec: float | None = None,
    return_path: bool = True,
) -> SearchResult:
    """
    A* over blank swaps toward the spiral goal, with lazy deletion of stale heap entries.
    hfun: callable(config) -> int; a node with h == 0 is the goal.
    check_parity: reject unsolvable starts before expanding anything.
    max_expansions / timeout_sec: optional budgets, reported as "budget" / "timeout".
    """
    t0 = perf_counter()
    name = getattr(hfun, "__name__", "h")

    if check_parity and not is_solvable(start):
        logger.debug("parity check rejected start (n=%d)", start.n)
        return SearchResult(termination=UNSOLVABLE, time=perf_counter() - t0)

    table = VisitedTable()
    frontier = Frontier(tie_break)

    h0 = hfun(start)
    root = SearchNode(config=start, g=0, h=h0, blank=start.blank_pos, parent=None)
    frontier.push(table.offer(root), root)

    expanded = 0
    skipped = 0
    generated = 0
    peak_open = 1
    logger.debug("A* start: n=%d h0=%d heuristic=%s", start.n, h0, name)

    def finish(termination: str, **kw) -> SearchResult:
        res = SearchResult(
            termination=termination,
            expanded=expanded, skipped=skipped, generated=generated,
            peak_open=peak_open, peak_closed=len(table),
            time=perf_counter() - t0, **kw,
        )
        logger.debug("A* %s: expanded=%d skipped=%d peak_open=%d",
                     termination, expanded, skipped, peak_open)
        return res

    while frontier:
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return finish(TIMEOUT)

        idx = frontier.pop()
        node = table.node(idx)
        best = table.best_g(node.config)
        if best is None:
            raise SearchInvariantError("popped configuration missing from visited table")
        if node.g > best:
            skipped += 1
            continue

        if node.h == 0:
            path = reconstruct_path(table, node.config) if return_path else None
            return finish(OK, path=path, g=node.g)

        if max_expansions is not None and expanded >= max_expansions:
            return finish(BUDGET)

        expanded += 1
        g2 = node.g + 1
        for s2 in node.config.neighbors():
            generated += 1
            known = table.best_g(s2)
            if known is not None and known <= g2:
                skipped += 1
                continue
            child = SearchNode(config=s2, g=g2, h=hfun(s2), blank=s2.blank_pos, parent=idx)
            frontier.push(table.offer(child), child)
        peak_open = max(peak_open, len(frontier))

    return finish(EXHAUSTED)
