# gridpath/core/maze.py
#!/usr/bin/env python3
"""
Recursive-backtracker maze over the unit grid.

Rooms sit two cells apart on a lattice fixed by the carve origin; the cell
between two rooms is the corridor opened when the carver moves between them.
The result is a perfect maze: one path between any two rooms.
"""

import random
from typing import Iterator, List, Optional, Tuple

from gridpath.core.types import Coord

# two-step moves between rooms
STEPS: Tuple[Coord, ...] = ((0, 2), (2, 0), (0, -2), (-2, 0))


def carve_origin(start: Coord) -> Coord:
    r, c = start
    return (r if r % 2 == 0 else 1, c if c % 2 == 0 else 1)


def carve(rows: int, cols: int, origin: Coord, rng: random.Random) -> List[List[bool]]:
    """
    Carve from origin. Returns the wall mask, [row][col], True where still walled.

    Depth-first with an explicit stack of shuffled direction iterators; each
    room shuffles its directions once, on entry, like the recursive form.
    """
    wall = [[True] * cols for _ in range(rows)]

    def enter(r: int, c: int) -> Iterator[Coord]:
        wall[r][c] = False
        dirs = list(STEPS)
        rng.shuffle(dirs)
        return iter(dirs)

    r0, c0 = origin
    stack: List[Tuple[Coord, Iterator[Coord]]] = [((r0, c0), enter(r0, c0))]
    while stack:
        (r, c), dirs = stack[-1]
        for dr, dc in dirs:
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and wall[nr][nc]:
                mr, mc = r + dr // 2, c + dc // 2
                wall[mr][mc] = False
                stack.append(((nr, nc), enter(nr, nc)))
                break
        else:
            # Backtrack
            stack.pop()
    return wall


def generate_maze(rows: int, cols: int, start: Coord, end: Coord,
                  rng: Optional[random.Random] = None,
                  seed: Optional[int] = None) -> List[Coord]:
    """Wall coordinates of a fresh maze, row-major, never including start or end."""
    if rows < 1 or cols < 1:
        raise ValueError("maze needs at least one row and one column")
    start, end = tuple(start), tuple(end)
    for name, c in (("start", start), ("end", end)):
        if not (0 <= c[0] < rows and 0 <= c[1] < cols):
            raise ValueError(f"{name} {c} out of bounds")
    if rng is None:
        rng = random.Random(seed)

    wall = carve(rows, cols, carve_origin(start), rng)

    # Endpoints are always open, even off the lattice.
    # end may still be cut off if none of its neighbours got carved.
    wall[start[0]][start[1]] = False
    wall[end[0]][end[1]] = False

    return [(r, c) for r in range(rows) for c in range(cols) if wall[r][c]]
