import math

import pytest

from cubraycast.frame import Frame, Texture
from cubraycast.player import World
from cubraycast.raycast import (
    RayHit,
    WallTextures,
    cast_ray,
    draw_slice,
    pick_texture,
    render,
    texture_x,
    touch,
)

ROWS = ["11111", "1N001", "10D01", "11111"]
CEILING = 0x0000AA
FLOOR = 0x00AA00
WALL = 0x123456


def make_world(x=96.0, y=96.0, angle=0.0):
    return World(
        grid=[list(r) for r in ROWS], map_end=4, width=5, x=x, y=y, angle=angle
    )


def uniform(color, size=1):
    return Texture(width=size, height=size, data=[color] * (size * size))


def distinct_textures():
    return WallTextures(
        north=uniform(0x000001),
        south=uniform(0x000002),
        east=uniform(0x000003),
        west=uniform(0x000004),
        door=uniform(0x000005),
    )


def test_touch_kinds():
    world = make_world()
    assert touch(world, 0, 0) == "1"
    assert touch(world, 1, 2) is None
    assert touch(world, 1, 1) is None
    assert touch(world, 2, 2) == "D"
    assert touch(world, -1, 0) is None
    assert touch(world, 0, 5) is None


def test_touch_open_door_lets_ray_through():
    world = make_world()
    world.doors.open(2, 2)
    assert touch(world, 2, 2) is None


def test_cast_ray_east():
    hit = cast_ray(make_world(), 0.0)
    assert (hit.row, hit.col) == (1, 4)
    assert hit.face == 0
    assert hit.x_step == 1
    assert not hit.hit_door
    assert hit.distance == pytest.approx(2.5)


def test_cast_ray_south_hits_row_boundary():
    world = make_world(angle=math.pi / 2)
    hit = cast_ray(world, math.pi / 2)
    assert (hit.row, hit.col) == (3, 1)
    assert hit.face == 1
    assert hit.y_step == 1
    assert pick_texture(hit, distinct_textures()) is distinct_textures().south or (
        pick_texture(hit, distinct_textures()).data == [0x000002]
    )


def test_cast_ray_west():
    world = make_world(angle=math.pi)
    hit = cast_ray(world, math.pi)
    assert (hit.row, hit.col) == (1, 0)
    assert hit.x_step == -1
    assert pick_texture(hit, distinct_textures()).data == [0x000004]


def test_cast_ray_stops_at_closed_door():
    world = make_world(x=160.0, y=96.0)
    hit = cast_ray(world, 0.0)
    assert hit.hit_door
    assert (hit.row, hit.col) == (2, 2)
    textures = distinct_textures()
    assert pick_texture(hit, textures) is textures.door


def test_cast_ray_passes_open_door():
    world = make_world(x=160.0, y=96.0)
    world.doors.open(2, 2)
    hit = cast_ray(world, 0.0)
    assert not hit.hit_door
    assert (hit.row, hit.col) == (2, 4)


@pytest.mark.parametrize(
    "face, x_step, y_step, expected",
    [
        (1, 1, 1, "south"),
        (1, 1, -1, "north"),
        (0, 1, 1, "east"),
        (0, -1, 1, "west"),
    ],
)
def test_pick_texture_by_side(face, x_step, y_step, expected):
    textures = distinct_textures()
    hit = RayHit(
        distance=1.0, face=face, x_step=x_step, y_step=y_step,
        hit_door=False, row=0, col=0,
    )
    assert pick_texture(hit, textures) is getattr(textures, expected)


@pytest.mark.parametrize("angle", [0.0, 0.4, 1.3, math.pi / 2, 2.5, math.pi, 4.0, 5.8])
def test_texture_x_in_range(angle):
    world = make_world(angle=angle)
    texture = uniform(0, size=8)
    hit = cast_ray(world, angle)
    assert 0 <= texture_x(world, hit, texture, angle) < texture.width


def test_draw_slice_layers():
    frame = Frame(width=10, height=20)
    hit = RayHit(distance=2.0, face=0, x_step=1, y_step=1, hit_door=False, row=1, col=4)
    draw_slice(frame, 3, hit, uniform(WALL), 0, CEILING, FLOOR)
    assert frame.get_pixel(3, 0) == CEILING
    assert frame.get_pixel(3, 19) == FLOOR
    assert frame.get_pixel(3, 10) == WALL
    assert frame.get_pixel(4, 10) == 0


def test_draw_slice_close_wall_fills_column():
    frame = Frame(width=10, height=20)
    hit = RayHit(distance=0.1, face=0, x_step=1, y_step=1, hit_door=False, row=1, col=4)
    draw_slice(frame, 0, hit, uniform(WALL), 0, CEILING, FLOOR)
    assert {frame.get_pixel(0, j) for j in range(20)} == {WALL}


def test_render_every_column_has_ceiling_wall_floor():
    frame = Frame(width=8, height=40)
    color = uniform(WALL)
    textures = WallTextures(north=color, south=color, east=color, west=color, door=color)
    render(frame, make_world(), textures, CEILING, FLOOR)
    for column in range(frame.width):
        assert frame.get_pixel(column, 0) == CEILING
        assert frame.get_pixel(column, frame.height - 1) == FLOOR
        assert frame.get_pixel(column, frame.height // 2) == WALL