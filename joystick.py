"""
joystick.py

Turns pointer drags on the on-screen joystick into a velocity for the
player. The handle the user sees and the force the player feels use two
different clamp radii: the handle can travel further than the point at
which the player reaches full speed.
"""

from __future__ import annotations

import math
from typing import Tuple

from maze import ConfigError

JOYSTICK_SIZE = 120  # Side of the square joystick base
JOYSTICK_CENTER = (60, 60)  # Resting handle position inside the base
PLAYER_SPEED = 4  # Max player speed in pixels per frame
MOVEMENT_DEAD_ZONE = 10  # Pointer travel before the player starts moving
MOVEMENT_MAX_DISTANCE = 40  # Pointer travel for full speed
MAX_VISUAL_HANDLE_DISTANCE = 70  # How far the drawn handle may travel


def map_input(
    dx: float,
    dy: float,
    dead_zone: float = MOVEMENT_DEAD_ZONE,
    max_distance: float = MOVEMENT_MAX_DISTANCE,
    speed: float = PLAYER_SPEED,
) -> Tuple[float, float]:
    """
    Convert a pointer offset from the joystick centre into a velocity.

    Inside the dead zone the force is zero; it then grows linearly to 1 at
    ``max_distance`` and stays there.
    """
    angle = math.atan2(dy, dx)
    distance = min(math.hypot(dx, dy), max_distance)

    force = 0.0
    if distance > dead_zone:
        force = (distance - dead_zone) / (max_distance - dead_zone)

    return math.cos(angle) * speed * force, math.sin(angle) * speed * force


def handle_offset(
    dx: float, dy: float, max_visual: float = MAX_VISUAL_HANDLE_DISTANCE
) -> Tuple[float, float]:
    """Where to draw the handle, relative to the centre. Display only."""
    angle = math.atan2(dy, dx)
    distance = min(math.hypot(dx, dy), max_visual)
    return math.cos(angle) * distance, math.sin(angle) * distance


class Joystick:
    """
    Pointer state for the virtual joystick.

    Coordinates passed to the ``pointer_*`` methods are relative to the
    top-left corner of the joystick base.
    """

    def __init__(
        self,
        center: Tuple[float, float] = JOYSTICK_CENTER,
        dead_zone: float = MOVEMENT_DEAD_ZONE,
        max_distance: float = MOVEMENT_MAX_DISTANCE,
        max_visual: float = MAX_VISUAL_HANDLE_DISTANCE,
        speed: float = PLAYER_SPEED,
    ) -> None:
        if dead_zone < 0 or max_distance <= dead_zone:
            raise ConfigError(
                f"Joystick dead zone ({dead_zone}) must be non-negative and "
                f"smaller than the max movement distance ({max_distance})."
            )
        self.center = center
        self.dead_zone = dead_zone
        self.max_distance = max_distance
        self.max_visual = max_visual
        self.speed = speed

        self.active = False
        self.move_x = 0.0
        self.move_y = 0.0
        self.handle: Tuple[float, float] = center

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.move_x, self.move_y

    def reset(self) -> None:
        self.handle = self.center
        self.move_x = 0.0
        self.move_y = 0.0

    def _update(self, px: float, py: float) -> None:
        dx = px - self.center[0]
        dy = py - self.center[1]

        hx, hy = handle_offset(dx, dy, self.max_visual)
        self.handle = (self.center[0] + hx, self.center[1] + hy)

        self.move_x, self.move_y = map_input(
            dx, dy, self.dead_zone, self.max_distance, self.speed
        )

    # Pointer events ------------------------------------------------ #

    def pointer_down(self, px: float, py: float) -> None:
        self.active = True
        self._update(px, py)

    def pointer_move(self, px: float, py: float) -> None:
        if self.active:
            self._update(px, py)

    def pointer_up(self) -> None:
        self.active = False
        self.reset()

    def pointer_leave(self) -> None:
        # Only a drag that was in progress gets cancelled.
        if self.active:
            self.active = False
            self.reset()
