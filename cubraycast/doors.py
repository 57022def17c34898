"""Doors that the player opens and closes, and finding the door in front of them."""

from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

from cubraycast.settings import SPEED, TILE

Cell = tuple[int, int]


class DoorSet:
    """The map cells whose doors are currently open, in the order they were opened."""

    def __init__(self, doors: Iterable[Cell] = ()) -> None:
        self._open: dict[Cell, None] = dict.fromkeys(doors)

    def is_open(self, row: int, col: int) -> bool:
        """Whether the door at ``(row, col)`` is open."""
        return (row, col) in self._open

    def open(self, row: int, col: int) -> None:
        """Open the door at ``(row, col)``; opening an open door changes nothing."""
        self._open.setdefault((row, col))

    def close(self, row: int, col: int) -> None:
        """Close the door at ``(row, col)``; closing a closed door changes nothing."""
        self._open.pop((row, col), None)

    def toggle(self, row: int, col: int) -> bool:
        """Flip the door at ``(row, col)`` and return whether it is now open."""
        if self.is_open(row, col):
            self.close(row, col)
            return False
        self.open(row, col)
        return True

    def __contains__(self, cell: object) -> bool:
        return cell in self._open

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._open)

    def __len__(self) -> int:
        return len(self._open)


def probe_offset(angle: float) -> tuple[int, int]:
    """World offset ``(dx, dy)`` of the second door probe for a view *angle*.

    ``dx`` runs along the rows and ``dy`` along the columns.
    """
    if 0.78 <= angle < 2.35:
        return (60, 0)
    if 2.35 <= angle < 3.92:
        return (0, -60)
    if 3.92 <= angle < 5.49:
        return (-60, 0)
    return (0, 60)


def _door_at(grid: Sequence[Sequence[str]], x: int, y: int) -> Cell | None:
    row = int(x / TILE)
    col = int(y / TILE)
    if row < 0 or col < 0 or row >= len(grid) or col >= len(grid[row]):
        return None
    return (row, col) if grid[row][col] == "D" else None


def find_door(
    grid: Sequence[Sequence[str]], x: float, y: float, angle: float
) -> Cell | None:
    """Cell of the door just in front of a player at ``(x, y)`` looking at *angle*.

    The point one step ahead is probed first, then a point further along the
    main direction the player faces. Returns ``None`` when neither is a door.
    """
    ahead_x = int(x + SPEED * math.sin(angle))
    ahead_y = int(y + SPEED * math.cos(angle))
    for dx, dy in ((0, 0), probe_offset(angle)):
        cell = _door_at(grid, ahead_x + dx, ahead_y + dy)
        if cell is not None:
            return cell
    return None