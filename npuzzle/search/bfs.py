from collections import deque
from time import perf_counter
from typing import Dict, Optional

from npuzzle.domains.spiral import Configuration
from npuzzle.search.a_star import BUDGET, EXHAUSTED, OK, SearchResult


def bfs(start: Configuration, max_states: Optional[int] = None) -> SearchResult:
    """Breadth-first search to the spiral goal. Shortest by construction; used as an oracle."""
    t0 = perf_counter()
    q = deque([start])
    parent: Dict[Configuration, Optional[Configuration]] = {start: None}
    expanded = generated = 0
    peak = 1
    while q:
        peak = max(peak, len(q))
        s = q.popleft()
        if s.is_goal():
            path = []
            while s is not None:
                path.append(s); s = parent[s]
            path.reverse()
            return SearchResult(termination=OK, path=path, g=len(path) - 1,
                                expanded=expanded, generated=generated,
                                peak_open=peak, peak_closed=len(parent),
                                time=perf_counter() - t0, algorithm="BFS")
        expanded += 1
        for s2 in s.neighbors():
            generated += 1
            if s2 in parent: continue
            parent[s2] = s; q.append(s2)
        if max_states is not None and len(parent) > max_states:
            return SearchResult(termination=BUDGET, expanded=expanded, generated=generated,
                                peak_open=peak, peak_closed=len(parent),
                                time=perf_counter() - t0, algorithm="BFS")
    return SearchResult(termination=EXHAUSTED, expanded=expanded, generated=generated,
                        peak_open=peak, peak_closed=len(parent),
                        time=perf_counter() - t0, algorithm="BFS")
