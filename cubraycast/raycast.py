"""Casting rays through the map grid and drawing textured wall columns."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cubraycast.frame import Frame, Texture
from cubraycast.settings import FOV, TILE

if TYPE_CHECKING:
    from cubraycast.player import World

_MIN_DISTANCE = 1e-6


@dataclass(frozen=True)
class WallTextures:
    """The textures for each wall side and for closed doors."""

    north: Texture
    south: Texture
    east: Texture
    west: Texture
    door: Texture


@dataclass(frozen=True)
class RayHit:
    """Where a ray stopped.

    ``face`` is 0 when the ray crossed a column boundary last and 1 when it
    crossed a row boundary. ``distance`` is already corrected for fish-eye.
    """

    distance: float
    face: int
    x_step: int
    y_step: int
    hit_door: bool
    row: int
    col: int


def _inside(world: World, row: int, col: int) -> bool:
    return 0 <= row < world.map_end and 0 <= col < world.width


def touch(world: World, row: int, col: int) -> str | None:
    """Return ``"1"`` for a wall, ``"D"`` for a closed door, else ``None``."""
    if not _inside(world, row, col):
        return None
    cell = world.grid[row][col]
    if cell == "1":
        return "1"
    if cell == "D" and not world.doors.is_open(row, col):
        return "D"
    return None


def _line_length(component: float) -> float:
    return abs(1 / component) if component else math.inf


def cast_ray(world: World, ray_angle: float) -> RayHit:
    """Walk the grid from the player along *ray_angle* until a wall or closed door."""
    pos_col = world.y / TILE
    pos_row = world.x / TILE
    col = int(pos_col)
    row = int(pos_row)
    cos_a = math.cos(ray_angle)
    sin_a = math.sin(ray_angle)
    x_line = _line_length(cos_a)
    y_line = _line_length(sin_a)
    if cos_a < 0:
        x_step = -1
        x_dist = (pos_col - col) * x_line
    else:
        x_step = 1
        x_dist = (col + 1.0 - pos_col) * x_line
    if sin_a < 0:
        y_step = -1
        y_dist = (pos_row - row) * y_line
    else:
        y_step = 1
        y_dist = (row + 1.0 - pos_row) * y_line

    face = 0
    hit_door = False
    while True:
        if x_dist < y_dist:
            x_dist += x_line
            col += x_step
            face = 0
        else:
            y_dist += y_line
            row += y_step
            face = 1
        if not _inside(world, row, col):
            break
        struck = touch(world, row, col)
        if struck is not None:
            hit_door = struck == "D"
            break

    distance = x_dist - x_line if face == 0 else y_dist - y_line
    distance *= math.cos(world.angle - ray_angle)
    return RayHit(
        distance=distance,
        face=face,
        x_step=x_step,
        y_step=y_step,
        hit_door=hit_door,
        row=row,
        col=col,
    )


def pick_texture(hit: RayHit, textures: WallTextures) -> Texture:
    """Texture for the wall side or door the ray struck."""
    if hit.hit_door:
        return textures.door
    if hit.face == 1:
        return textures.south if hit.y_step > 0 else textures.north
    return textures.east if hit.x_step > 0 else textures.west


def texture_x(world: World, hit: RayHit, texture: Texture, ray_angle: float) -> int:
    """Texture column for the point where the ray met the wall."""
    dis = hit.distance / math.cos(world.angle - ray_angle)
    if hit.face == 0:
        wall_x = world.x / TILE + dis * math.sin(ray_angle)
    else:
        wall_x = world.y / TILE + dis * math.cos(ray_angle)
    wall_x -= math.floor(wall_x)
    tex_x = min(int(wall_x * texture.width), texture.width - 1)
    if not hit.hit_door:
        if hit.face == 0 and math.cos(ray_angle) > 0:
            tex_x = texture.width - tex_x - 1
        if hit.face == 1 and math.sin(ray_angle) < 0:
            tex_x = texture.width - tex_x - 1
    return tex_x


def draw_slice(
    frame: Frame,
    column: int,
    hit: RayHit,
    texture: Texture,
    tex_x: int,
    ceiling: int,
    floor: int,
) -> None:
    """Draw one screen column: ceiling, textured wall, then floor."""
    distance = hit.distance if hit.distance > 0 else _MIN_DISTANCE
    wall_height = frame.width / distance
    start = int(frame.height // 2 - wall_height / 2)
    end = int(start + wall_height)
    for j in range(min(start, frame.height)):
        frame.put_pixel(column, j, ceiling)
    scale = texture.height / wall_height
    for j in range(max(start, 0), min(end, frame.height)):
        tex_y = int((j - start) * scale)
        frame.put_pixel(column, j, texture.pixel(tex_x, tex_y))
    for j in range(max(end, 0), frame.height):
        frame.put_pixel(column, j, floor)


def render(
    frame: Frame, world: World, textures: WallTextures, ceiling: int, floor: int
) -> None:
    """Cast one ray per screen column across the field of view and draw the view."""
    step = FOV / frame.width
    ray_angle = world.angle - FOV / 2
    for column in range(frame.width):
        hit = cast_ray(world, ray_angle)
        texture = pick_texture(hit, textures)
        tex_x = texture_x(world, hit, texture, ray_angle)
        draw_slice(frame, column, hit, texture, tex_x, ceiling, floor)
        ray_angle += step