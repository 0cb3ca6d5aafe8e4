import random

import pytest

from maze import OPPOSITE, SIDES, ConfigError, Maze, generate_maze, is_maze_solvable


def _layout(maze):
    return [[tuple(c.walls[s] for s in SIDES) for c in row] for row in maze.cells]


def test_new_maze_has_every_wall_up() -> None:
    maze = Maze(4, 3)

    assert (maze.w, maze.h) == (4, 3)
    assert len(maze.cells) == 3
    assert all(len(row) == 4 for row in maze.cells)
    for row in maze.cells:
        for c in row:
            assert not c.visited
            assert all(c.walls.values())
    assert maze.open_wall_count() == 0


@pytest.mark.parametrize("w, h", [(0, 5), (5, 0), (-1, 3)])
def test_non_positive_dimensions_are_rejected(w, h) -> None:
    with pytest.raises(ConfigError):
        Maze(w, h)


def test_neighbors_are_bounds_checked_in_up_right_down_left_order() -> None:
    maze = Maze(3, 3)

    corner = [side for side, _ in maze.neighbors(maze.cell(0, 0))]
    middle = [(side, n.x, n.y) for side, n in maze.neighbors(maze.cell(1, 1))]

    assert corner == ["right", "bottom"]
    assert middle == [
        ("top", 1, 0),
        ("right", 2, 1),
        ("bottom", 1, 2),
        ("left", 0, 1),
    ]


def test_remove_wall_between_updates_both_cells() -> None:
    maze = Maze(2, 2)
    a, b = maze.cell(0, 0), maze.cell(0, 1)

    maze.remove_wall_between(a, b)

    assert not a.walls["bottom"]
    assert not b.walls["top"]
    assert a.walls["right"] and b.walls["right"]


def test_remove_wall_between_non_adjacent_cells_fails() -> None:
    maze = Maze(3, 3)
    with pytest.raises(ValueError):
        maze.remove_wall_between(maze.cell(0, 0), maze.cell(2, 2))


@pytest.mark.parametrize("w, h, seed", [(20, 12, 0), (20, 12, 7), (5, 9, 3), (1, 6, 1)])
def test_generated_maze_is_a_spanning_tree(w, h, seed) -> None:
    maze = generate_maze(Maze(w, h), random.Random(seed))

    assert maze.open_wall_count() == w * h - 1
    assert all(c.visited for row in maze.cells for c in row)
    assert is_maze_solvable(maze, (0, 0), (w - 1, h - 1))


def test_generated_walls_agree_between_neighbours() -> None:
    maze = generate_maze(Maze(8, 6), random.Random(11))

    for row in maze.cells:
        for c in row:
            for side, n in maze.neighbors(c):
                assert c.walls[side] == n.walls[OPPOSITE[side]]


def test_outer_boundary_is_never_carved() -> None:
    maze = generate_maze(Maze(6, 4), random.Random(5))

    for x in range(6):
        assert maze.cell(x, 0).walls["top"]
        assert maze.cell(x, 3).walls["bottom"]
    for y in range(4):
        assert maze.cell(0, y).walls["left"]
        assert maze.cell(5, y).walls["right"]


def test_same_seed_gives_same_layout() -> None:
    a = generate_maze(Maze(20, 12), random.Random(42))
    b = generate_maze(Maze(20, 12), random.Random(42))
    c = generate_maze(Maze(20, 12), random.Random(43))

    assert _layout(a) == _layout(b)
    assert _layout(a) != _layout(c)


def test_single_cell_maze() -> None:
    maze = generate_maze(Maze(1, 1), random.Random(0))

    assert maze.open_wall_count() == 0
    assert is_maze_solvable(maze, (0, 0), (0, 0))


def test_uncarved_maze_is_not_solvable() -> None:
    assert not is_maze_solvable(Maze(3, 3), (0, 0), (2, 2))


def test_solvable_follows_open_walls_only() -> None:
    maze = Maze(3, 1)
    maze.remove_wall_between(maze.cell(0, 0), maze.cell(1, 0))

    assert is_maze_solvable(maze, (0, 0), (1, 0))
    assert not is_maze_solvable(maze, (0, 0), (2, 0))

    maze.remove_wall_between(maze.cell(1, 0), maze.cell(2, 0))
    assert is_maze_solvable(maze, (0, 0), (2, 0))
