import math

import pytest

from cubraycast.mapfile import MapError
from cubraycast.settings import TILE
from cubraycast.validate import (
    ContentCounts,
    check_connection,
    check_counts,
    check_empty_space,
    check_enclosed,
    check_player_pos,
    copy_region,
    count_content,
    find_player,
    player_angle,
    validate_map,
)

VALID = ["111111", "100001", "10N0D1", "111111"]


def _span(rows):
    return rows, 0, len(rows), max(len(row) for row in rows)


def test_count_content_tallies_given_cells():
    counts = count_content(VALID, 0, len(VALID))
    assert counts.north == 1
    assert counts.door == 1
    total = (
        counts.wall + counts.empty + counts.north + counts.south
        + counts.east + counts.west + counts.door
    )
    assert total == sum(len(row) for row in VALID)


def test_count_content_respects_range():
    counts = count_content(VALID, 0, 1)
    assert counts == ContentCounts(wall=len(VALID[0]))


def test_count_content_rejects_unknown_character():
    with pytest.raises(MapError):
        count_content(["1X1"], 0, 1)


@pytest.mark.parametrize(
    "rows",
    [
        ["111", "1N1", "101"],
        ["1111", "1NN1", "1D01"],
        ["1111", "1NS1", "1D01"],
        ["1111", "1001", "1D01"],
    ],
)
def test_check_counts_rejects_bad_content(rows):
    with pytest.raises(MapError):
        check_counts(count_content(rows, 0, len(rows)))


@pytest.mark.parametrize(
    "letter, expected",
    [("E", 0.0), ("W", math.pi), ("N", 3 * math.pi / 2), ("S", math.pi / 2)],
)
def test_player_angle(letter, expected):
    assert player_angle(count_content([letter], 0, 1)) == pytest.approx(expected)


def test_copy_region_pads_with_nul():
    assert copy_region(["11", "1"], 0, 2, 3) == [["1", "1", "\0"], ["1", "\0", "\0"]]


def test_check_connection_rejects_wall_islands():
    rows = ["1111  111", "1N01  1D1", "1111  111"]
    with pytest.raises(MapError):
        check_connection(*_span(rows))


def test_checks_leave_rows_untouched():
    rows = list(VALID)
    check_connection(*_span(rows))
    check_enclosed(*_span(rows))
    assert rows == VALID


def test_check_enclosed_rejects_open_map():
    rows = ["111111", "100000", "10N0D1", "111111"]
    with pytest.raises(MapError):
        check_enclosed(*_span(rows))


def test_find_player_locates_cell_centre():
    x, y = find_player(*_span(VALID))
    assert int(x // TILE) == 2
    assert int(y // TILE) == VALID[2].index("N")
    assert x % TILE == TILE / 2
    assert y % TILE == TILE / 2


def test_find_player_uses_absolute_row():
    rows = ["header"] + VALID
    x, _ = find_player(rows, 1, len(rows), 6)
    assert int(x // TILE) == 3


def test_check_empty_space_rejects_blank_next_to_floor():
    with pytest.raises(MapError):
        check_empty_space(*_span(["111111", "10 0N1", "111111"]))


@pytest.mark.parametrize(
    "rows",
    [
        ["111", "N01", "111"],
        ["1N1", "101", "111"],
        ["11111", "1N 01", "11111"],
    ],
)
def test_check_player_pos_rejects_bad_positions(rows):
    span = _span(rows)
    x, y = find_player(*span)
    with pytest.raises(MapError):
        check_player_pos(*span, x, y)


def test_validate_map_returns_player_state():
    x, y, angle = validate_map(*_span(VALID))
    assert (int(x // TILE), int(y // TILE)) == (2, 2)
    assert angle == pytest.approx(3 * math.pi / 2)


def test_validate_map_rejects_huge_map():
    with pytest.raises(MapError):
        validate_map(["1" * 500], 0, 1, 500)


def test_validate_map_rejects_missing_door():
    with pytest.raises(MapError):
        validate_map(*_span(["111111", "100001", "10N001", "111111"]))