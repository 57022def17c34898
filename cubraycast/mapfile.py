"""Reading a ``.cub`` scene file and locating the map inside it."""

from __future__ import annotations

import os
from typing import Sequence

_MAP_START_CHARS = frozenset("10 NWES")


class CubError(Exception):
    """Base error for scene files that cannot be used."""


class MapError(CubError):
    """The map part of a scene file is malformed."""


def check_extension(path: str | os.PathLike) -> str:
    """Return *path* as a string if it ends in exactly ``.cub``."""
    name = os.fspath(path)
    dot = name.rfind(".")
    if dot == -1 or name[dot:] != ".cub":
        raise MapError("Map Error: scene file must end in .cub")
    return name


def split_map(text: str, sep: str) -> list[str]:
    """Split *text* on every *sep*, keeping empty pieces between separators."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return text.split(sep)


def read_map_lines(path: str | os.PathLike) -> list[str]:
    """Read a scene file and return its lines.

    The file must have a ``.cub`` extension, must not be empty and must not
    end with a newline.
    """
    name = check_extension(path)
    try:
        with open(name, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise CubError("Error, can't open the file") from exc
    if not raw:
        raise MapError("map Error: empty scene file")
    text = raw.decode("utf-8", errors="surrogateescape")
    if text.endswith("\n"):
        raise MapError("map Error: scene file ends with a newline")
    return split_map(text, "\n")


def _is_map_line(line: str) -> bool:
    return (
        "." not in line
        and "," not in line
        and bool(line)
        and line[0] in _MAP_START_CHARS
    )


def find_map_limits(lines: Sequence[str]) -> tuple[int, int]:
    """Return ``(start, end)`` of the map rows, end exclusive.

    The map starts at the first map-like line holding something other than
    spaces and must run up to the last line of the file.
    """
    start = -1
    end = -1
    for index, line in enumerate(lines):
        if not _is_map_line(line):
            continue
        if start == -1:
            if line.strip(" "):
                start = index
        else:
            end = index + 1
    if start == -1 or end != len(lines):
        raise MapError("Map Error: the map must be the last part of the file")
    return start, end


def longest_row(lines: Sequence[str], start: int, end: int) -> int:
    """Length of the longest line among ``lines[start:end]``."""
    return max((len(line) for line in lines[start:end]), default=0)


def pad_rows(lines: Sequence[str], end: int, width: int) -> list[str]:
    """Return the first *end* lines, each right-padded with spaces to *width*."""
    return [line.ljust(width) for line in lines[:end]]