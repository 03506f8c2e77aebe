import random
from collections import deque

import pytest

from gridpath.core.maze import carve, carve_origin, generate_maze
from gridpath.core.search import search
from gridpath.core.types import ASTAR, DIJKSTRA, Grid


def _open_cells(rows, cols, walls):
    blocked = set(walls)
    return {(r, c) for r in range(rows) for c in range(cols) if (r, c) not in blocked}


def _reachable(open_cells, origin):
    """BFS over open cells from origin."""
    seen = {origin}
    queue = deque([origin])
    while queue:
        r, c = queue.popleft()
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            n = (r + dr, c + dc)
            if n in open_cells and n not in seen:
                seen.add(n)
                queue.append(n)
    return seen


def _edge_count(open_cells):
    return sum(1 for (r, c) in open_cells for n in ((r + 1, c), (r, c + 1)) if n in open_cells)


def test_carve_origin_rounds_odd_coordinates_to_one():
    assert carve_origin((12, 10)) == (12, 10)
    assert carve_origin((3, 4)) == (1, 4)
    assert carve_origin((3, 5)) == (1, 1)


def test_default_board_is_one_perfect_maze():
    rows, cols = 25, 50
    start, end = (12, 10), (12, 40)
    walls = generate_maze(rows, cols, start, end, seed=42)
    open_cells = _open_cells(rows, cols, walls)

    # 13 x 25 rooms plus one corridor per tree edge
    assert len(open_cells) == 325 + 324
    assert len(walls) == rows * cols - 649
    assert _reachable(open_cells, carve_origin(start)) == open_cells
    assert _edge_count(open_cells) == len(open_cells) - 1


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_carved_count_does_not_depend_on_randomness(seed):
    walls = generate_maze(25, 50, (12, 10), (12, 40), seed=seed)
    assert len(walls) == 601


def test_endpoints_never_walls():
    for seed in range(5):
        walls = set(generate_maze(9, 9, (3, 3), (1, 6), seed=seed))
        assert (3, 3) not in walls
        assert (1, 6) not in walls


def test_odd_start_shifts_room_lattice():
    rows, cols = 11, 11
    walls = generate_maze(rows, cols, (3, 5), (9, 9), seed=7)
    open_cells = _open_cells(rows, cols, walls)
    assert (1, 1) in open_cells
    assert len(open_cells) == 25 + 24
    assert _reachable(open_cells, (1, 1)) == open_cells


def test_walls_are_row_major_and_unique():
    walls = generate_maze(15, 21, (0, 0), (14, 20), seed=3)
    assert walls == sorted(walls)
    assert len(walls) == len(set(walls))


def test_seeded_generation_is_reproducible():
    a = generate_maze(25, 50, (12, 10), (12, 40), seed=1234)
    b = generate_maze(25, 50, (12, 10), (12, 40), rng=random.Random(1234))
    c = generate_maze(25, 50, (12, 10), (12, 40), seed=4321)
    assert a == b
    assert a != c


def test_carve_returns_wall_mask():
    wall = carve(9, 9, (0, 0), random.Random(5))
    assert len(wall) == 9 and all(len(row) == 9 for row in wall)
    opened = {(r, c) for r in range(9) for c in range(9) if not wall[r][c]}
    assert (0, 0) in opened
    assert len(opened) == 25 + 24
    # odd/odd cells are never rooms or corridors on an even lattice
    assert all(wall[r][c] for r in range(1, 9, 2) for c in range(1, 9, 2))


def test_generated_maze_is_solvable_between_rooms():
    rows, cols = 25, 50
    grid = Grid.blank(rows, cols, (12, 10), (12, 40))
    grid.apply_walls(generate_maze(rows, cols, grid.start, grid.end, seed=99))
    dijkstra = search(grid, mode=DIJKSTRA)
    astar = search(grid, mode=ASTAR)
    assert dijkstra.found
    # a perfect maze has exactly one route
    assert astar.path == dijkstra.path
    assert astar.total_nodes_visited <= dijkstra.total_nodes_visited


def test_bad_dimensions_raise():
    with pytest.raises(ValueError):
        generate_maze(0, 5, (0, 0), (0, 0))
    with pytest.raises(ValueError):
        generate_maze(5, 5, (0, 0), (5, 0))
