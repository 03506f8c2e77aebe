# gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Any

Coord = Tuple[int, int]  # (row, col)

DIJKSTRA = "dijkstra"
ASTAR = "astar"
MODES = (DIJKSTRA, ASTAR)

BASE_COST = 1
WEIGHT_COST = 5


class CellKind(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    WEIGHT = "weight"


# up, down, left, right -- order matters for frontier tie-breaking
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

_CHARS = {
    ".": CellKind.EMPTY,
    "#": CellKind.WALL,
    "S": CellKind.START,
    "E": CellKind.END,
    "w": CellKind.WEIGHT,
}


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[CellKind]]        # [row][col]
    start: Coord
    end: Coord

    # -------------------- constructors --------------------

    @classmethod
    def blank(cls, rows: int, cols: int, start: Coord, end: Coord) -> "Grid":
        cells = [[CellKind.EMPTY] * cols for _ in range(rows)]
        grid = cls(rows, cols, cells, tuple(start), tuple(end))
        if not grid.in_bounds(grid.start) or not grid.in_bounds(grid.end):
            raise ValueError("start/end out of bounds")
        if grid.start == grid.end:
            raise ValueError("start and end must differ on a board")
        cells[grid.start[0]][grid.start[1]] = CellKind.START
        cells[grid.end[0]][grid.end[1]] = CellKind.END
        return grid

    @classmethod
    def from_rows(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from text rows: '.' empty, '#' wall, 'w' weight, 'S'/'E' endpoints."""
        cells: List[List[CellKind]] = []
        start = end = None
        for r, line in enumerate(lines):
            row: List[CellKind] = []
            for c, ch in enumerate(line):
                try:
                    kind = _CHARS[ch]
                except KeyError:
                    raise ValueError(f"unknown cell character {ch!r} at {(r, c)}") from None
                if kind is CellKind.START:
                    if start is not None:
                        raise ValueError(f"second 'S' at {(r, c)}, first at {start}")
                    start = (r, c)
                elif kind is CellKind.END:
                    if end is not None:
                        raise ValueError(f"second 'E' at {(r, c)}, first at {end}")
                    end = (r, c)
                row.append(kind)
            cells.append(row)
        if start is None or end is None:
            raise ValueError("grid text needs one 'S' and one 'E'")
        grid = cls(len(cells), len(cells[0]) if cells else 0, cells, start, end)
        grid.validate()
        return grid

    def copy(self) -> "Grid":
        return Grid(self.rows, self.cols, [list(row) for row in self.cells], self.start, self.end)

    # -------------------- queries --------------------

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def kind_at(self, c: Coord) -> CellKind:
        r, col = c
        return self.cells[r][col]

    def is_wall(self, c: Coord) -> bool:
        return self.kind_at(c) is CellKind.WALL

    def validate(self, start: Optional[Coord] = None, end: Optional[Coord] = None) -> None:
        """Reject structurally invalid grids before any algorithm touches them."""
        start = self.start if start is None else start
        end = self.end if end is None else end
        if self.rows < 1 or self.cols < 1:
            raise ValueError("grid must have at least one row and one column")
        if len(self.cells) != self.rows or any(len(row) != self.cols for row in self.cells):
            raise ValueError("cells size mismatch")
        if not self.in_bounds(start):
            raise ValueError(f"start {start} out of bounds")
        if not self.in_bounds(end):
            raise ValueError(f"end {end} out of bounds")
        if self.is_wall(start):
            raise ValueError(f"start {start} is a wall")
        if self.is_wall(end):
            raise ValueError(f"end {end} is a wall")

    # -------------------- editing --------------------

    def paint(self, c: Coord, brush: CellKind = CellKind.WALL) -> None:
        """Toggle a cell with the brush: empty -> brush, wall/weight -> empty."""
        if brush not in (CellKind.WALL, CellKind.WEIGHT):
            raise ValueError(f"cannot paint with {brush}")
        kind = self.kind_at(c)
        if kind is CellKind.EMPTY:
            self.cells[c[0]][c[1]] = brush
        elif kind in (CellKind.WALL, CellKind.WEIGHT):
            self.cells[c[0]][c[1]] = CellKind.EMPTY

    def move_start(self, c: Coord) -> bool:
        return self._move_endpoint(c, CellKind.START)

    def move_end(self, c: Coord) -> bool:
        return self._move_endpoint(c, CellKind.END)

    def _move_endpoint(self, c: Coord, kind: CellKind) -> bool:
        c = tuple(c)
        if not self.in_bounds(c):
            return False
        if self.kind_at(c) in (CellKind.WALL, CellKind.START, CellKind.END):
            return c == (self.start if kind is CellKind.START else self.end)
        old = self.start if kind is CellKind.START else self.end
        self.cells[old[0]][old[1]] = CellKind.EMPTY
        self.cells[c[0]][c[1]] = kind
        if kind is CellKind.START:
            self.start = c
        else:
            self.end = c
        return True

    def apply_walls(self, walls: Iterable[Coord]) -> None:
        for r in range(self.rows):
            for col in range(self.cols):
                if self.cells[r][col] not in (CellKind.START, CellKind.END):
                    self.cells[r][col] = CellKind.EMPTY
        for r, col in walls:
            if (r, col) not in (self.start, self.end):
                self.cells[r][col] = CellKind.WALL

    def clear_walls(self) -> None:
        for row in self.cells:
            for col, kind in enumerate(row):
                if kind in (CellKind.WALL, CellKind.WEIGHT):
                    row[col] = CellKind.EMPTY


def neighbors(grid: Grid, c: Coord) -> List[Coord]:
    """In-bounds 4-connected neighbours of c, in up/down/left/right order."""
    r, col = c
    out: List[Coord] = []
    for dr, dc in DIRECTIONS:
        n = (r + dr, col + dc)
        if grid.in_bounds(n):
            out.append(n)
    return out


def move_cost(kind: CellKind) -> int:
    if kind is CellKind.WALL:
        raise ValueError("Asked cost of a WALL cell")
    return WEIGHT_COST if kind is CellKind.WEIGHT else BASE_COST


def manhattan_distance(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AlgorithmResult:
    algorithm: str
    visited_order: List[Coord] = field(default_factory=list)
    path: List[Coord] = field(default_factory=list)
    path_cost: Optional[int] = None          # None -> end unreachable
    execution_time_ms: float = 0.0

    @property
    def total_nodes_visited(self) -> int:
        return len(self.visited_order)

    @property
    def found(self) -> bool:
        return self.path_cost is not None

    def metrics(self) -> Dict[str, Any]:
        return {
            "algo": self.algorithm,
            "visited": self.total_nodes_visited,
            "path_len": len(self.path),
            "total_cost": self.path_cost,
            "time_ms": self.execution_time_ms,
        }
