import math

from cubraycast.doors import DoorSet, find_door, probe_offset
from cubraycast.settings import PI, TILE

GRID = [
    "11111",
    "1ND01",
    "1D001",
    "10001",
    "11111",
]

CENTER = TILE + TILE / 2


def test_open_then_is_open():
    doors = DoorSet()
    doors.open(2, 3)
    assert doors.is_open(2, 3)
    assert not doors.is_open(3, 2)


def test_close_removes_door():
    doors = DoorSet([(1, 1), (2, 2)])
    doors.close(1, 1)
    assert list(doors) == [(2, 2)]


def test_close_absent_door_is_harmless():
    doors = DoorSet([(4, 4)])
    doors.close(1, 1)
    assert list(doors) == [(4, 4)]


def test_open_twice_keeps_one_entry():
    doors = DoorSet()
    doors.open(1, 2)
    doors.open(1, 2)
    assert len(doors) == 1


def test_toggle_round_trip():
    doors = DoorSet()
    assert doors.toggle(5, 6) is True
    assert (5, 6) in doors
    assert doors.toggle(5, 6) is False
    assert (5, 6) not in doors


def test_open_order_is_kept():
    doors = DoorSet()
    for cell in [(3, 1), (1, 3), (2, 2)]:
        doors.open(*cell)
    assert list(doors) == [(3, 1), (1, 3), (2, 2)]


def test_probe_offsets_for_each_quadrant():
    assert probe_offset(0.0) == (0, 60)
    assert probe_offset(PI / 2) == (60, 0)
    assert probe_offset(PI) == (0, -60)
    assert probe_offset(3 * PI / 2) == (-60, 0)


def test_probe_offset_high_angle_faces_columns():
    assert probe_offset(6.0) == probe_offset(0.0)


def test_find_door_facing_columns():
    cell = find_door(GRID, CENTER, CENTER, 0.0)
    assert cell is not None
    row, col = cell
    assert GRID[row][col] == "D"
    assert row == int(CENTER / TILE)


def test_find_door_facing_rows():
    cell = find_door(GRID, CENTER, CENTER, PI / 2)
    assert cell is not None
    row, col = cell
    assert GRID[row][col] == "D"
    assert col == int(CENTER / TILE)


def test_find_door_none_when_facing_wall():
    assert find_door(GRID, CENTER, CENTER, PI) is None


def test_find_door_direct_probe():
    y = 2 * TILE - 2
    cell = find_door(GRID, CENTER, y, 0.0)
    assert cell == (int(CENTER / TILE), int((y + 8 * math.cos(0.0)) / TILE))
    assert GRID[cell[0]][cell[1]] == "D"


def test_find_door_outside_grid():
    assert find_door(GRID, 10 * TILE, 10 * TILE, 0.0) is None