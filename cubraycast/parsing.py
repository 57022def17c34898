"""Loading a complete level from a ``.cub`` scene file."""

from __future__ import annotations

import os
from dataclasses import dataclass

from cubraycast.config import Config, parse_config
from cubraycast.mapfile import find_map_limits, longest_row, pad_rows, read_map_lines
from cubraycast.validate import validate_map


@dataclass
class Level:
    """A checked scene: padded rows, map bounds, player start and settings.

    ``rows`` holds every line of the file up to the end of the map, padded
    with spaces to at least ``width``; the map is ``rows[map_start:map_end]``.
    """

    rows: list[str]
    map_start: int
    map_end: int
    width: int
    x: float
    y: float
    angle: float
    config: Config


def parse(path: str | os.PathLike) -> Level:
    """Read and check a scene file; map errors are reported before config errors."""
    lines = read_map_lines(path)
    start, end = find_map_limits(lines)
    width = longest_row(lines, start, end)
    rows = pad_rows(lines, end, width)
    x, y, angle = validate_map(rows, start, end, width)
    config = parse_config(rows)
    return Level(
        rows=rows,
        map_start=start,
        map_end=end,
        width=width,
        x=x,
        y=y,
        angle=angle,
        config=config,
    )