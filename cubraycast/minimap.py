"""The overhead minimap in the top-left corner, with the player's facing."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cubraycast.frame import Frame
from cubraycast.settings import (
    HEIGHT,
    MINIMAP_DIRECTION,
    MINIMAP_FLOOR,
    MINIMAP_OPEN_DOOR,
    MINIMAP_PLAYER,
    MINIMAP_WALL,
    TILE,
    WIDTH,
)

if TYPE_CHECKING:
    from cubraycast.player import World

_CELL_SIZE = (WIDTH + HEIGHT) / 300.0
_RADIUS = 20
_PLAYER_CHARS = frozenset("NSEW")
_DIRECTION_STEP = 2.0
_DIRECTION_LENGTH = 7


def _cell(world: World, row: int, col: int) -> str:
    if 0 <= row < len(world.grid) and 0 <= col < len(world.grid[row]):
        return world.grid[row][col]
    return ""


def square_color(world: World, row: int, col: int) -> tuple[int, int] | None:
    """Colour and size adjustment of the minimap square for a cell, or ``None``."""
    cell = _cell(world, row, col)
    if cell in ("1", "D"):
        color = MINIMAP_OPEN_DOOR if world.doors.is_open(row, col) else MINIMAP_WALL
        return color, -1
    if cell in _PLAYER_CHARS:
        return MINIMAP_PLAYER, 0
    if cell == "0":
        return MINIMAP_FLOOR, 1
    return None


def put_square(frame: Frame, x: int, y: int, size: int, color: int) -> None:
    """Fill a square whose rows run down from *x* and columns right from *y*."""
    size = max(size, 1)
    for i in range(size):
        for j in range(size):
            frame.put_pixel(y + i, x + j, color)


def draw_minimap(frame: Frame, world: World) -> None:
    """Draw the cells around the player, then the direction marker."""
    centre_row = int(world.x / TILE)
    centre_col = int(world.y / TILE)
    for a in range(-_RADIUS, _RADIUS):
        row = centre_row + a
        if not world.map_start <= row < world.map_end:
            continue
        for b in range(-_RADIUS, _RADIUS):
            col = centre_col + b
            if not 0 <= col < world.width:
                continue
            style = square_color(world, row, col)
            if style is None:
                continue
            color, delta = style
            put_square(
                frame,
                int((a + _RADIUS) * _CELL_SIZE),
                int((b + _RADIUS) * _CELL_SIZE),
                int(_CELL_SIZE + delta),
                color,
            )
    draw_direction(frame, world)


def _draw_ray(frame: Frame, angle: float, x0: int, y0: int) -> None:
    x = float(x0)
    y = float(y0)
    for _ in range(0, _DIRECTION_LENGTH, int(_DIRECTION_STEP)):
        frame.put_pixel(int(y), int(x), MINIMAP_DIRECTION)
        x += _DIRECTION_STEP * math.sin(angle)
        y += _DIRECTION_STEP * math.cos(angle)


def draw_direction(frame: Frame, world: World) -> None:
    """Draw a short line from each player square on the minimap along the view angle."""
    centre_row = int(world.x / TILE)
    centre_col = int(world.y / TILE)
    for a in range(_RADIUS):
        row = centre_row + a
        if not world.map_start <= row < world.map_end:
            continue
        for b in range(_RADIUS):
            col = centre_col + b
            if not 0 <= col < world.width:
                continue
            if _cell(world, row, col) in _PLAYER_CHARS:
                _draw_ray(
                    frame,
                    world.angle,
                    int((a + _RADIUS) * _CELL_SIZE + 1),
                    int((b + _RADIUS) * _CELL_SIZE + 1),
                )