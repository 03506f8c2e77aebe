import pytest

from gridpath.core.types import (
    AlgorithmResult,
    CellKind,
    Grid,
    manhattan_distance,
    move_cost,
    neighbors,
)


def test_neighbors_fixed_order_up_down_left_right():
    grid = Grid.blank(3, 3, (0, 0), (2, 2))
    assert neighbors(grid, (1, 1)) == [(0, 1), (2, 1), (1, 0), (1, 2)]


def test_neighbors_stay_in_bounds():
    grid = Grid.blank(3, 4, (0, 0), (2, 3))
    assert neighbors(grid, (0, 0)) == [(1, 0), (0, 1)]
    assert neighbors(grid, (2, 3)) == [(1, 3), (2, 2)]


def test_move_cost():
    assert move_cost(CellKind.EMPTY) == 1
    assert move_cost(CellKind.START) == 1
    assert move_cost(CellKind.END) == 1
    assert move_cost(CellKind.WEIGHT) == 5
    with pytest.raises(ValueError):
        move_cost(CellKind.WALL)


def test_manhattan_distance():
    assert manhattan_distance((0, 0), (4, 4)) == 8
    assert manhattan_distance((3, 1), (1, 6)) == 7
    assert manhattan_distance((2, 2), (2, 2)) == 0


def test_blank_grid_has_one_start_and_one_end():
    grid = Grid.blank(4, 6, (1, 1), (2, 5))
    kinds = [k for row in grid.cells for k in row]
    assert kinds.count(CellKind.START) == 1
    assert kinds.count(CellKind.END) == 1
    assert grid.kind_at((1, 1)) is CellKind.START
    assert grid.kind_at((2, 5)) is CellKind.END


def test_blank_grid_rejects_bad_endpoints():
    with pytest.raises(ValueError):
        Grid.blank(3, 3, (0, 0), (3, 0))
    with pytest.raises(ValueError):
        Grid.blank(3, 3, (1, 1), (1, 1))


def test_from_rows_parses_kinds():
    grid = Grid.from_rows([
        "S.#",
        ".w.",
        "..E",
    ])
    assert (grid.rows, grid.cols) == (3, 3)
    assert grid.start == (0, 0)
    assert grid.end == (2, 2)
    assert grid.is_wall((0, 2))
    assert grid.kind_at((1, 1)) is CellKind.WEIGHT


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(ValueError, match="size mismatch"):
        Grid.from_rows(["S..", "..", "..E"])


def test_from_rows_requires_endpoints():
    with pytest.raises(ValueError):
        Grid.from_rows(["...", "..E"])
    with pytest.raises(ValueError):
        Grid.from_rows(["S.x", "..E"])


def test_from_rows_rejects_duplicate_endpoints():
    with pytest.raises(ValueError, match="second 'S'"):
        Grid.from_rows(["S.S", "..E"])
    with pytest.raises(ValueError, match="second 'E'"):
        Grid.from_rows(["S.E", "E.."])


def test_paint_toggles_with_brush():
    grid = Grid.blank(3, 3, (0, 0), (2, 2))
    grid.paint((1, 1))
    assert grid.kind_at((1, 1)) is CellKind.WALL
    grid.paint((1, 1))
    assert grid.kind_at((1, 1)) is CellKind.EMPTY
    grid.paint((1, 2), CellKind.WEIGHT)
    assert grid.kind_at((1, 2)) is CellKind.WEIGHT
    grid.paint((1, 2), CellKind.WALL)
    assert grid.kind_at((1, 2)) is CellKind.EMPTY


def test_paint_leaves_endpoints_alone():
    grid = Grid.blank(3, 3, (0, 0), (2, 2))
    grid.paint((0, 0))
    grid.paint((2, 2), CellKind.WEIGHT)
    assert grid.kind_at((0, 0)) is CellKind.START
    assert grid.kind_at((2, 2)) is CellKind.END


def test_move_start_and_end():
    grid = Grid.blank(3, 3, (0, 0), (2, 2))
    assert grid.move_start((1, 0))
    assert grid.start == (1, 0)
    assert grid.kind_at((0, 0)) is CellKind.EMPTY
    assert grid.kind_at((1, 0)) is CellKind.START

    grid.paint((1, 1))
    assert not grid.move_end((1, 1))
    assert not grid.move_end((1, 0))
    assert not grid.move_end((5, 5))
    assert grid.end == (2, 2)


def test_apply_walls_resets_board_and_keeps_endpoints():
    grid = Grid.blank(3, 3, (0, 0), (2, 2))
    grid.paint((0, 1), CellKind.WEIGHT)
    grid.apply_walls([(1, 1), (0, 0), (2, 2), (1, 2)])
    assert grid.kind_at((0, 1)) is CellKind.EMPTY
    assert grid.is_wall((1, 1))
    assert grid.is_wall((1, 2))
    assert grid.kind_at((0, 0)) is CellKind.START
    assert grid.kind_at((2, 2)) is CellKind.END


def test_clear_walls():
    grid = Grid.from_rows(["S#w", "..E"])
    grid.clear_walls()
    assert grid.cells[0] == [CellKind.START, CellKind.EMPTY, CellKind.EMPTY]


def test_copy_is_independent():
    grid = Grid.blank(3, 3, (0, 0), (2, 2))
    clone = grid.copy()
    clone.paint((1, 1))
    assert grid.kind_at((1, 1)) is CellKind.EMPTY
    assert clone.is_wall((1, 1))


def test_validate_rejects_wall_endpoints_and_out_of_bounds():
    grid = Grid.from_rows(["S#.", "..E"])
    with pytest.raises(ValueError, match="wall"):
        grid.validate(start=(0, 1))
    with pytest.raises(ValueError, match="out of bounds"):
        grid.validate(end=(2, 0))


def test_result_metrics():
    res = AlgorithmResult("astar", visited_order=[(0, 1), (1, 1)], path=[(0, 1)], path_cost=2)
    assert res.total_nodes_visited == 2
    assert res.found
    assert res.metrics()["path_len"] == 1
    assert not AlgorithmResult("dijkstra").found
