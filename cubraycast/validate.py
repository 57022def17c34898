"""Checks on the map grid of a scene file: contents, walls and player start."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Sequence

from cubraycast.mapfile import MapError
from cubraycast.settings import MAX_MAP_SIZE, PI, TILE

_PLAYER_CHARS = frozenset("NSEW")
_ALLOWED = frozenset("10NSEWD \n")


@dataclass(frozen=True)
class ContentCounts:
    """How many of each kind of cell the map holds."""

    wall: int = 0
    empty: int = 0
    north: int = 0
    south: int = 0
    east: int = 0
    west: int = 0
    door: int = 0

    @property
    def players(self) -> int:
        return self.north + self.south + self.east + self.west


def _neighbours(row: int, col: int) -> Iterator[tuple[int, int]]:
    yield row - 1, col
    yield row + 1, col
    yield row, col - 1
    yield row, col + 1


def _cell(rows: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(rows) and 0 <= col < len(rows[row]):
        return rows[row][col]
    return ""


def count_content(rows: Sequence[str], start: int, end: int) -> ContentCounts:
    """Count the cells of ``rows[start:end]``; any unknown character is an error."""
    tally = Counter(ch for row in rows[start:end] for ch in row)
    if set(tally) - _ALLOWED:
        raise MapError("Map Error: invalid character in map")
    return ContentCounts(
        wall=tally["1"],
        empty=tally["0"],
        north=tally["N"],
        south=tally["S"],
        east=tally["E"],
        west=tally["W"],
        door=tally["D"],
    )


def check_counts(counts: ContentCounts) -> None:
    """Require exactly one player, and at least one wall, floor and door."""
    directions = (counts.north, counts.south, counts.east, counts.west)
    if (
        max(directions) > 1
        or counts.players != 1
        or not counts.wall
        or not counts.empty
        or not counts.door
    ):
        raise MapError("Map Error: wrong number of players, walls, floors or doors")


def copy_region(rows: Sequence[str], start: int, end: int, width: int) -> list[list[str]]:
    """Mutable copy of the map rows, each cut or NUL-padded to *width* cells."""
    return [list(row[:width].ljust(width, "\0")) for row in rows[start:end]]


def check_connection(rows: Sequence[str], start: int, end: int, width: int) -> None:
    """Require every wall to be reachable from the first wall through non-blank cells."""
    grid = copy_region(rows, start, end, width)
    seed = next(
        ((r, c) for r, line in enumerate(grid) for c, ch in enumerate(line) if ch == "1"),
        None,
    )
    if seed is not None:
        stack = [seed]
        while stack:
            r, c = stack.pop()
            if not (0 <= r < len(grid) and 0 <= c < width):
                continue
            if grid[r][c] in " \0F":
                continue
            grid[r][c] = "F"
            stack.extend(_neighbours(r, c))
    if any("1" in line for line in grid):
        raise MapError("Map Error: walls are not connected")


def check_enclosed(rows: Sequence[str], start: int, end: int, width: int) -> None:
    """Require that no floor cell can reach the edge of the map without crossing a wall."""
    grid = copy_region(rows, start, end, width)
    height = len(grid)
    for r, line in enumerate(grid):
        for c, ch in enumerate(line):
            if ch != "0":
                continue
            stack = [(r, c)]
            while stack:
                rr, cc = stack.pop()
                if not (0 <= rr < height and 0 <= cc < width):
                    raise MapError("Map Error: map is not closed by walls")
                if grid[rr][cc] in "1F":
                    continue
                grid[rr][cc] = "F"
                stack.extend(_neighbours(rr, cc))


def find_player(
    rows: Sequence[str], start: int, end: int, width: int
) -> tuple[float, float]:
    """World position ``(x, y)`` of the centre of the last player cell.

    ``x`` runs along the rows and ``y`` along the columns.
    """
    position: tuple[float, float] | None = None
    half = TILE / 2
    for r, line in enumerate(copy_region(rows, start, end, width)):
        for c, ch in enumerate(line):
            if ch in _PLAYER_CHARS:
                position = ((r + start) * TILE + half, c * TILE + half)
    if position is None:
        raise MapError("Map Error: no player start")
    return position


def player_angle(counts: ContentCounts) -> float:
    """Starting view angle for the player's facing letter."""
    if counts.east == 1:
        return 0.0
    if counts.west == 1:
        return PI
    if counts.north == 1:
        return (3 * PI) / 2
    if counts.south == 1:
        return PI / 2
    return 0.0


def check_empty_space(rows: Sequence[str], start: int, end: int, width: int) -> None:
    """Refuse a blank cell that touches a floor cell."""
    for i, line in enumerate(rows[start:end], start):
        for j, ch in enumerate(line[:width]):
            if ch != " ":
                continue
            if (
                (i + 1 < end and _cell(rows, i + 1, j) == "0")
                or (i - 1 > start and _cell(rows, i - 1, j) == "0")
                or (j + 1 < width and _cell(rows, i, j + 1) == "0")
                or (j - 1 > 0 and _cell(rows, i, j - 1) == "0")
            ):
                raise MapError("Map Error: blank cell next to floor")


def check_player_pos(
    rows: Sequence[str], start: int, end: int, width: int, x: float, y: float
) -> None:
    """Refuse a player on the map border or next to a blank cell."""
    row = int(x // TILE)
    col = int(y // TILE)
    if row in (start, end - 1) or col in (width, 0):
        raise MapError("Map Error: player on the map border")
    if any(_cell(rows, r, c) == " " for r, c in _neighbours(row, col)):
        raise MapError("Map Error: player next to a blank cell")


def validate_map(
    rows: Sequence[str], start: int, end: int, width: int
) -> tuple[float, float, float]:
    """Run every map check and return the player's ``(x, y, angle)``."""
    if end >= MAX_MAP_SIZE or width >= MAX_MAP_SIZE:
        raise MapError("Please use a smaller map")
    counts = count_content(rows, start, end)
    check_counts(counts)
    check_connection(rows, start, end, width)
    x, y = find_player(rows, start, end, width)
    check_enclosed(rows, start, end, width)
    angle = player_angle(counts)
    check_empty_space(rows, start, end, width)
    check_player_pos(rows, start, end, width, x, y)
    return x, y, angle