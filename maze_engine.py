from __future__ import annotations

import logging
import math
import random
from typing import Callable, NamedTuple, Optional, Sequence, Tuple

from joystick import Joystick
from maze import ConfigError, Maze, generate_maze, is_maze_solvable

logger = logging.getLogger(__name__)

GRID_WIDTH = 20
GRID_HEIGHT = 12
WALL_THICKNESS = 4
MAX_GENERATION_ATTEMPTS = 100
PLAYER_RADIUS_RATIO = 0.3  # Player collision radius as a fraction of a cell
GOAL_RADIUS_RATIO = 0.4

WIN_MESSAGE = (
    "Even if I could gather every word from every language in the universe, "
    "it still wouldn't be enough to express the depth of my love for you."
    "\n\nWill you be my Valentine's Date? ❤️"
)


class Wall(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Circle:
    def __init__(self, x: float, y: float, radius: float) -> None:
        self.x = x
        self.y = y
        self.radius = radius

    def __repr__(self) -> str:
        return f"Circle(x={self.x}, y={self.y}, radius={self.radius})"


CollisionFn = Callable[[float, float], bool]
DrawMazeFn = Callable[[Sequence[Wall]], None]
DrawPointFn = Callable[[float, float], None]
WinFn = Callable[[str], None]


# ---------------------------------------------------------------------- #
# Geometry & physics
# ---------------------------------------------------------------------- #


def player_fits(cell_size: int, wall_thickness: float) -> bool:
    """Whether a player centred in a cell clears that cell's walls."""
    if cell_size <= 0:
        return False
    return PLAYER_RADIUS_RATIO * cell_size + wall_thickness < cell_size / 2


def min_cell_size(wall_thickness: float = WALL_THICKNESS) -> int:
    cell_size = 1
    while not player_fits(cell_size, wall_thickness):
        cell_size += 1
    return cell_size


def build_walls(
    maze: Maze, cell_size: float, wall_thickness: float
) -> Tuple[Wall, ...]:
    """
    Turn the maze's wall flags into rectangles in pixel space.

    The four outer walls come first. After them each cell contributes only
    its interior walls, since the boundary is already covered.
    """
    t = wall_thickness
    full_w = maze.w * cell_size
    full_h = maze.h * cell_size
    walls = [
        Wall(0, 0, full_w, t),
        Wall(full_w - t, 0, t, full_h),
        Wall(0, full_h - t, full_w, t),
        Wall(0, 0, t, full_h),
    ]

    for row in maze.cells:
        for cell in row:
            cx = cell.x * cell_size
            cy = cell.y * cell_size
            if cell.walls["top"] and cell.y > 0:
                walls.append(Wall(cx, cy, cell_size, t))
            if cell.walls["right"] and cell.x < maze.w - 1:
                walls.append(Wall(cx + cell_size - t, cy, t, cell_size))
            if cell.walls["bottom"] and cell.y < maze.h - 1:
                walls.append(Wall(cx, cy + cell_size - t, cell_size, t))
            if cell.walls["left"] and cell.x > 0:
                walls.append(Wall(cx, cy, t, cell_size))

    return tuple(walls)


def check_collision(
    cx: float,
    cy: float,
    radius: float,
    walls: Sequence[Wall],
    bounds_w: float,
    bounds_h: float,
) -> bool:
    """Circle vs. play-area bounds, then circle vs. each wall rectangle."""
    if (
        cx - radius < 0
        or cx + radius > bounds_w
        or cy - radius < 0
        or cy + radius > bounds_h
    ):
        return True
    # A point only hits a wall from strictly inside it; edges and corners
    # have no area to overlap with.
    if radius <= 0:
        return any(
            wall.x < cx < wall.x + wall.width and wall.y < cy < wall.y + wall.height
            for wall in walls
        )

    r2 = radius * radius
    for wall in walls:
        # Closest point on the rectangle to the circle centre.
        test_x = min(max(cx, wall.x), wall.x + wall.width)
        test_y = min(max(cy, wall.y), wall.y + wall.height)
        dist_x = cx - test_x
        dist_y = cy - test_y
        if dist_x * dist_x + dist_y * dist_y <= r2:
            return True

    return False


def move_player(
    player: Circle, vx: float, vy: float, collides: CollisionFn
) -> Tuple[float, float]:
    """
    Advance ``player`` one frame, one axis at a time.

    A blocked axis keeps its old coordinate and has its velocity zeroed;
    the other axis still moves, so the player slides along walls. Returns
    the velocity left after the move.
    """
    new_x = player.x + vx
    new_y = player.y + vy

    if not collides(new_x, player.y):
        player.x = new_x
    else:
        vx = 0.0

    if not collides(player.x, new_y):
        player.y = new_y
    else:
        vy = 0.0

    return vx, vy


# ---------------------------------------------------------------------- #
# Session
# ---------------------------------------------------------------------- #


class GameSession:
    """
    UI-agnostic game state for one maze run.

    Responsibilities:
    - Derive cell size and collision radii from the play-area width.
    - Generate a solvable maze and its wall rectangles.
    - Move the player once per tick from the joystick's velocity.
    - Detect the win, once.

    The presentation layer passes in drawing callbacks and calls ``tick()``
    once per frame.
    """

    def __init__(
        self,
        area_width: int,
        grid_width: int = GRID_WIDTH,
        grid_height: int = GRID_HEIGHT,
        wall_thickness: float = WALL_THICKNESS,
        rng: Optional[random.Random] = None,
        joystick: Optional[Joystick] = None,
        draw_maze_fn: Optional[DrawMazeFn] = None,
        draw_player_fn: Optional[DrawPointFn] = None,
        draw_goal_fn: Optional[DrawPointFn] = None,
        win_fn: Optional[WinFn] = None,
    ) -> None:
        if grid_width <= 0 or grid_height <= 0:
            raise ConfigError(
                f"Grid dimensions must be positive, got {grid_width}x{grid_height}."
            )
        if wall_thickness <= 0:
            raise ConfigError(
                f"Wall thickness must be positive, got {wall_thickness}."
            )

        self.grid_width = grid_width
        self.grid_height = grid_height
        self.wall_thickness = wall_thickness
        self.rng = rng or random.Random()
        self.joystick = joystick or Joystick()

        self.draw_maze_fn = draw_maze_fn or (lambda walls: None)
        self.draw_player_fn = draw_player_fn or (lambda x, y: None)
        self.draw_goal_fn = draw_goal_fn or (lambda x, y: None)
        self.win_fn = win_fn or (lambda msg: None)

        self.maze: Optional[Maze] = None
        self.walls: Tuple[Wall, ...] = ()
        self.player = Circle(0, 0, 0)
        self.goal = Circle(0, 0, 0)
        self.won = False

        self.set_area_width(area_width)
        self.start()

    # ------------------------------------------------------------------ #
    # Sizing
    # ------------------------------------------------------------------ #

    def set_area_width(self, area_width: int) -> None:
        cell_size = int(area_width) // self.grid_width
        if not player_fits(cell_size, self.wall_thickness):
            raise ConfigError(
                f"Play area of width {area_width} is too narrow for "
                f"{self.grid_width} columns: cells of {cell_size} px leave no "
                f"room for the player between {self.wall_thickness} px walls."
            )
        self.cell_size = cell_size
        self.player_radius = PLAYER_RADIUS_RATIO * cell_size
        self.goal_radius = GOAL_RADIUS_RATIO * cell_size

    @property
    def width(self) -> int:
        return self.grid_width * self.cell_size

    @property
    def height(self) -> int:
        return self.grid_height * self.cell_size

    @property
    def entry(self) -> Tuple[int, int]:
        return (0, 0)

    @property
    def exit(self) -> Tuple[int, int]:
        return (self.grid_width - 1, self.grid_height - 1)

    def cell_center(self, x: int, y: int) -> Tuple[float, float]:
        half = self.cell_size / 2
        return x * self.cell_size + half, y * self.cell_size + half

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def start(self) -> None:
        maze = None
        for attempt in range(1, MAX_GENERATION_ATTEMPTS + 1):
            maze = generate_maze(
                Maze(self.grid_width, self.grid_height), self.rng, self.entry
            )
            logger.debug("Generated maze, attempt %d.", attempt)
            if is_maze_solvable(maze, self.entry, self.exit):
                break
        else:
            logger.warning(
                "Max maze generation attempts (%d) reached. "
                "Maze might still be unsolvable.",
                MAX_GENERATION_ATTEMPTS,
            )

        self.maze = maze
        self.walls = build_walls(maze, self.cell_size, self.wall_thickness)

        px, py = self.cell_center(*self.entry)
        gx, gy = self.cell_center(*self.exit)
        self.player = Circle(px, py, self.player_radius)
        self.goal = Circle(gx, gy, self.goal_radius)

        self.joystick.active = False
        self.joystick.reset()
        self.won = False

        logger.info(
            "Started %dx%d maze, cell size %d px, %d walls.",
            self.grid_width,
            self.grid_height,
            self.cell_size,
            len(self.walls),
        )
        self.draw_maze_fn(self.walls)
        self.draw_goal_fn(self.goal.x, self.goal.y)
        self.draw_player_fn(self.player.x, self.player.y)

    def restart(self) -> None:
        self.start()

    def resize(self, area_width: int) -> None:
        # The maze is regenerated for the new cell size, never rescaled.
        self.set_area_width(area_width)
        self.start()

    # ------------------------------------------------------------------ #
    # Per-frame update
    # ------------------------------------------------------------------ #

    def collides(self, x: float, y: float) -> bool:
        return check_collision(
            x, y, self.player.radius, self.walls, self.width, self.height
        )

    def tick(self) -> None:
        if self.joystick.active:
            vx, vy = self.joystick.velocity
            self.joystick.move_x, self.joystick.move_y = move_player(
                self.player, vx, vy, self.collides
            )
        self.check_goal()
        self.draw_player_fn(self.player.x, self.player.y)

    def check_goal(self) -> bool:
        dist = math.hypot(self.player.x - self.goal.x, self.player.y - self.goal.y)
        if dist >= self.player.radius + self.goal.radius:
            return False

        if not self.won:
            self.won = True
            self.joystick.move_x = 0.0
            self.joystick.move_y = 0.0
            logger.info("🎉 Reached the goal!")
            self.win_fn(WIN_MESSAGE)
        return True
