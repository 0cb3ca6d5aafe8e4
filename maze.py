"""
maze.py

The logical maze: a grid of cells with four wall flags each, a randomized
depth-first carver that turns the full grid into a spanning tree, and a
breadth-first reachability check.

Nothing in here knows about pixels; see maze_engine.py for the geometry.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Side encoding, in the order neighbours are inspected:
#   up, right, down, left
SIDES = ("top", "right", "bottom", "left")
DIRS = [(0, -1), (1, 0), (0, 1), (-1, 0)]
OPPOSITE = {"top": "bottom", "right": "left", "bottom": "top", "left": "right"}


class ConfigError(ValueError):
    """Raised when the game is configured with degenerate dimensions."""

    pass


class Cell:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        self.visited = False
        self.walls: Dict[str, bool] = {side: True for side in SIDES}

    def __repr__(self) -> str:
        closed = "".join(side[0] for side in SIDES if self.walls[side])
        return f"Cell({self.x}, {self.y}, walls={closed or '-'})"


class Maze:
    """
    A fixed-size grid of cells, stored row-major as ``cells[y][x]``.

    Every cell starts unvisited with all four walls up. Walls are only ever
    removed in pairs through ``remove_wall_between`` so that the two cells
    sharing an edge always agree about it.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigError(
                f"Maze dimensions must be positive, got {width}x{height}."
            )
        self.w = width
        self.h = height
        self.cells: List[List[Cell]] = [
            [Cell(x, y) for x in range(width)] for y in range(height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.w and 0 <= y < self.h

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def neighbors(self, cell: Cell) -> Iterator[Tuple[str, Cell]]:
        """Yield (side, neighbour) for each in-bounds neighbour of ``cell``."""
        for side, (dx, dy) in zip(SIDES, DIRS):
            nx, ny = cell.x + dx, cell.y + dy
            if self.in_bounds(nx, ny):
                yield side, self.cells[ny][nx]

    def remove_wall_between(self, a: Cell, b: Cell) -> None:
        for side, (dx, dy) in zip(SIDES, DIRS):
            if (a.x + dx, a.y + dy) == (b.x, b.y):
                a.walls[side] = False
                b.walls[OPPOSITE[side]] = False
                return
        raise ValueError(f"{a!r} and {b!r} are not adjacent.")

    def open_wall_count(self) -> int:
        # Each interior edge is looked at once, from its left/top cell.
        count = 0
        for row in self.cells:
            for c in row:
                if c.x < self.w - 1 and not c.walls["right"]:
                    count += 1
                if c.y < self.h - 1 and not c.walls["bottom"]:
                    count += 1
        return count


# ---------------------------------------------------------------------- #
# Generation
# ---------------------------------------------------------------------- #


def generate_maze(
    maze: Maze,
    rng: Optional[random.Random] = None,
    entry: Tuple[int, int] = (0, 0),
) -> Maze:
    """
    Carve passages with an iterative randomized depth-first search.

    The explicit stack keeps deep mazes clear of the recursion limit. Every
    cell ends up visited, so the result is a spanning tree: there is exactly
    one path between any two cells.
    """
    rng = rng or random.Random()

    start = maze.cell(*entry)
    start.visited = True
    stack = [start]

    while stack:
        current = stack[-1]
        unvisited = [n for _, n in maze.neighbors(current) if not n.visited]
        if unvisited:
            chosen = rng.choice(unvisited)
            maze.remove_wall_between(current, chosen)
            chosen.visited = True
            stack.append(chosen)
        else:
            stack.pop()

    logger.debug("Carved %dx%d maze from %s.", maze.w, maze.h, entry)
    return maze


# ---------------------------------------------------------------------- #
# Solvability
# ---------------------------------------------------------------------- #


def is_maze_solvable(
    maze: Maze, start: Tuple[int, int], goal: Tuple[int, int]
) -> bool:
    """Breadth-first search from ``start`` through open walls only."""
    queue = deque([start])
    seen = {start}

    while queue:
        x, y = queue.popleft()
        if (x, y) == goal:
            return True
        current = maze.cell(x, y)
        for side, neighbour in maze.neighbors(current):
            if current.walls[side]:
                continue
            pos = (neighbour.x, neighbour.y)
            if pos not in seen:
                seen.add(pos)
                queue.append(pos)

    return False
