# gridpath/core/search.py
#!/usr/bin/env python3
"""
Best-first grid search — Dijkstra and A* as one algorithm.

A single run:
- validates the grid, then works on its own flat scratch arrays
  (index = row * cols + col), so the caller's grid is never touched;
- expands cells in priority order until the end cell is settled
  or the frontier runs dry;
- returns an AlgorithmResult made only of coordinates.

Heuristic:
- Manhattan distance to the end for A*, zero for Dijkstra.
- Admissible because every step costs at least 1.

Tie-breaking in the PQ:
- (priority, h, seq, index): lower priority, then lower h, then FIFO by seq.
"""

import heapq
import time
from math import inf
from typing import Dict, List, Optional, Tuple

from gridpath.core.types import (
    ASTAR,
    DIJKSTRA,
    MODES,
    AlgorithmResult,
    CellKind,
    Coord,
    Grid,
    manhattan_distance,
    move_cost,
    neighbors,
)


def search(grid: Grid, start: Optional[Coord] = None, end: Optional[Coord] = None,
           mode: str = DIJKSTRA) -> AlgorithmResult:
    if mode not in MODES:
        raise ValueError(f"unknown search mode {mode!r}")
    start = grid.start if start is None else tuple(start)
    end = grid.end if end is None else tuple(end)
    grid.validate(start, end)

    t0 = time.perf_counter()
    cols = grid.cols
    n = grid.rows * cols
    use_h = mode == ASTAR

    # scratch state, fresh for every run
    distance: List[float] = [inf] * n
    heuristic: List[int] = [0] * n
    priority: List[float] = [inf] * n
    predecessor: List[int] = [-1] * n
    settled: List[bool] = [False] * n

    def idx(c: Coord) -> int:
        return c[0] * cols + c[1]

    def coord(i: int) -> Coord:
        return divmod(i, cols)

    s, e = idx(start), idx(end)
    distance[s] = 0
    heuristic[s] = manhattan_distance(start, end) if use_h else 0
    priority[s] = heuristic[s]

    seq = 0
    frontier: List[Tuple[float, int, int, int]] = [(priority[s], heuristic[s], seq, s)]
    visited_order: List[Coord] = []

    while frontier:
        p_u, _, _, u = heapq.heappop(frontier)

        # Ignore settled and stale pops
        if settled[u] or p_u != priority[u]:
            continue
        cu = coord(u)
        if grid.is_wall(cu):
            continue
        if distance[u] == inf:
            break

        settled[u] = True
        if u != s and u != e:
            visited_order.append(cu)
        if u == e:
            break

        for cv in neighbors(grid, cu):
            v = idx(cv)
            kind = grid.kind_at(cv)
            if settled[v] or kind is CellKind.WALL:
                continue
            alt = distance[u] + move_cost(kind)
            if alt < distance[v]:
                distance[v] = alt
                heuristic[v] = manhattan_distance(cv, end) if use_h else 0
                priority[v] = alt + heuristic[v]
                predecessor[v] = u
                seq += 1
                heapq.heappush(frontier, (priority[v], heuristic[v], seq, v))

    path: List[Coord] = []
    path_cost = None
    if settled[e]:
        path_cost = int(distance[e])
        cur = predecessor[e]
        while cur != -1 and cur != s:
            path.append(coord(cur))
            cur = predecessor[cur]
        path.reverse()

    elapsed = (time.perf_counter() - t0) * 1000.0
    return AlgorithmResult(
        algorithm=mode,
        visited_order=visited_order,
        path=path,
        path_cost=path_cost,
        execution_time_ms=round(elapsed, 2),
    )


def compare(grid: Grid, start: Optional[Coord] = None,
            end: Optional[Coord] = None) -> Dict[str, AlgorithmResult]:
    """Run both modes over the same board; each run owns its scratch state."""
    return {mode: search(grid, start, end, mode) for mode in MODES}
