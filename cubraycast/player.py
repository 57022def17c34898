"""Player state, input handling and movement with wall sliding."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from cubraycast.config import Config
from cubraycast.doors import DoorSet, find_door
from cubraycast.settings import (
    ANGLE,
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_EMOTE,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_SPACE,
    KEY_UP,
    KEY_W,
    MOUSE_SENSITIVITY,
    PI,
    SPEED,
    TILE,
)

if TYPE_CHECKING:
    from cubraycast.parsing import Level

_TWO_PI = 2 * PI
_CORNERS = ((0, 0), (10, 10), (10, -10), (-10, 10), (-10, -10))


class Key(IntEnum):
    """Key codes the game reacts to."""

    W = KEY_W
    A = KEY_A
    S = KEY_S
    D = KEY_D
    EMOTE = KEY_EMOTE
    LEFT = KEY_LEFT
    RIGHT = KEY_RIGHT
    DOWN = KEY_DOWN
    UP = KEY_UP
    SPACE = KEY_SPACE
    ESC = KEY_ESC


_HELD_FLAGS = {
    Key.W: "move_up",
    Key.S: "move_down",
    Key.D: "move_right",
    Key.A: "move_left",
    Key.RIGHT: "see_right",
    Key.LEFT: "see_left",
}


@dataclass
class World:
    """The mutable map grid together with the player's position and input state.

    ``x`` runs along the rows and ``y`` along the columns, in world units.
    """

    grid: list[list[str]]
    map_end: int
    width: int
    x: float
    y: float
    angle: float
    map_start: int = 0
    config: Config | None = None
    doors: DoorSet = field(default_factory=DoorSet)
    move_up: bool = False
    move_down: bool = False
    move_left: bool = False
    move_right: bool = False
    see_left: bool = False
    see_right: bool = False
    dir_x: float = 0.0
    dir_y: float = 0.0
    old_move: str = ""
    running: bool = True
    emote_requested: bool = False
    last_mouse_x: int | None = None

    def __post_init__(self) -> None:
        self.grid = [list(row) for row in self.grid]

    @classmethod
    def from_level(cls, level: Level) -> World:
        """Build a world from a parsed level."""
        return cls(
            grid=[list(row) for row in level.rows],
            map_end=level.map_end,
            width=level.width,
            x=level.x,
            y=level.y,
            angle=level.angle,
            map_start=level.map_start,
            config=level.config,
        )

    def _cell(self, row: int, col: int) -> str:
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row]):
            return self.grid[row][col]
        return ""

    def valid_move(self, x: float, y: float) -> bool:
        """Whether the player's body fits at ``(x, y)``: no wall, no closed door."""
        if not (0 <= int(x) < self.map_end * TILE and 0 <= int(y) < self.width * TILE):
            return False
        if any(
            self._cell(int((x + ox) / TILE), int((y + oy) / TILE)) == "1"
            for ox, oy in _CORNERS
        ):
            return False
        row, col = int(x / TILE), int(y / TILE)
        return not (self._cell(row, col) == "D" and not self.doors.is_open(row, col))

    def key_pressed(self, key: int) -> None:
        """React to a key going down."""
        if key == Key.EMOTE:
            self.emote_requested = True
        elif key == Key.ESC:
            self.running = False
        elif key in _HELD_FLAGS:
            setattr(self, _HELD_FLAGS[Key(key)], True)
        elif key == Key.SPACE:
            self.handle_doors()

    def key_released(self, key: int) -> None:
        """React to a key coming up."""
        if key in _HELD_FLAGS:
            setattr(self, _HELD_FLAGS[Key(key)], False)

    def mouse_move(self, x: int) -> None:
        """Turn the view by the horizontal distance since the last mouse position."""
        if self.last_mouse_x is None:
            self.last_mouse_x = x
            return
        delta = x - self.last_mouse_x
        self.last_mouse_x = x
        self.angle += delta * MOUSE_SENSITIVITY
        if self.angle < 0:
            self.angle += _TWO_PI
        elif self.angle > _TWO_PI:
            self.angle -= _TWO_PI
        self.dir_x = math.cos(self.angle)
        self.dir_y = math.sin(self.angle)

    def rotate(self) -> None:
        """Apply the held turn keys and keep the angle within ``[0, 2π)``."""
        if self.see_right:
            self.angle += ANGLE
        if self.see_left:
            self.angle -= ANGLE
        if self.angle >= _TWO_PI:
            self.angle -= _TWO_PI
        if self.angle < 0:
            self.angle += _TWO_PI

    def _move(self, sign: int, strafe: bool) -> None:
        heading = self.angle + (PI / 2 if strafe else 0.0)
        dx = sign * SPEED * math.sin(heading)
        dy = sign * SPEED * math.cos(heading)
        if self.valid_move(self.x + dx, self.y + dy):
            self.x += dx
            self.y += dy
        if strafe and (self.move_up or self.move_down):
            return
        if self.valid_move(self.x + dx, self.y):
            self.x += dx
        elif self.valid_move(self.x, self.y + dy):
            self.y += dy

    def update(self) -> None:
        """Advance one tick: turn, move, and mark the player's cell on the grid."""
        old_row, old_col = int(self.x / TILE), int(self.y / TILE)
        self.rotate()
        if self.move_up:
            self._move(1, strafe=False)
        if self.move_down:
            self._move(-1, strafe=False)
        if self.move_right:
            self._move(1, strafe=True)
        if self.move_left:
            self._move(-1, strafe=True)
        self.grid[old_row][old_col] = "D" if self.old_move == "D" else "0"
        row, col = int(self.x / TILE), int(self.y / TILE)
        self.old_move = self.grid[row][col]
        self.grid[row][col] = "N"

    def handle_doors(self) -> None:
        """Open or close the door in front of the player, if there is one."""
        cell = find_door(self.grid, self.x, self.y, self.angle)
        if cell is not None:
            self.doors.toggle(*cell)