"""Texture paths and floor/ceiling colours from the header of a scene file."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import takewhile
from typing import Sequence

from cubraycast.mapfile import CubError

_WHITESPACE = " \t\n\v\f\r"
_TEXTURE_KEYS = ("NO", "SO", "WE", "EA")
_PREFIX_FIRST = frozenset("NSWEFC")
_PREFIX_SECOND = frozenset("OAWE ")
_LONG_MAX = 2**63 - 1


class ConfigError(CubError):
    """The texture or colour settings of a scene file are invalid."""


@dataclass(frozen=True)
class Config:
    """Wall texture paths and the packed 0xRRGGBB floor and ceiling colours."""

    no: str
    so: str
    we: str
    ea: str
    floor_color: int
    ceiling_color: int


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def atoi(text: str) -> int:
    """Convert the leading decimal number of *text* the way C ``atoi`` would.

    Leading whitespace and one sign are accepted; parsing stops at the first
    non-digit. Values past the range of a 64-bit long give -1 (positive) or
    0 (negative); otherwise the result wraps to a 32-bit int.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    num = 0
    for ch in takewhile(lambda c: "0" <= c <= "9", rest):
        num = (num * 10 + ord(ch) - ord("0")) % 2**64
    if num >= _LONG_MAX and sign == 1:
        return -1
    if num > _LONG_MAX and sign == -1:
        return 0
    return _to_int32(_to_int32(num) * sign)


def count_commas(text: str) -> int:
    """Number of commas in *text*."""
    return text.count(",")


def _is_small_number(part: str) -> bool:
    trimmed = part.strip(" ")
    return len(trimmed) <= 3 and all("0" <= ch <= "9" for ch in trimmed)


def parse_color_value(text: str) -> int:
    """Parse ``"R,G,B"`` into a packed 0xRRGGBB integer.

    Each component may be surrounded by spaces, has at most three digits and
    lies in 0..255.
    """
    if count_commas(text) > 2:
        raise ConfigError("Error: Invalid colors")
    parts = [piece for piece in text.split(",") if piece]
    if len(parts) != 3 or not all(_is_small_number(part) for part in parts):
        raise ConfigError("Error: Invalid colors")
    red, green, blue = (atoi(part) for part in parts)
    if not all(0 <= value <= 255 for value in (red, green, blue)):
        raise ConfigError("Error: Invalid colors")
    return red * 65536 + green * 256 + blue


def parse_textures(lines: Sequence[str]) -> dict[str, str]:
    """Collect the ``NO``, ``SO``, ``WE`` and ``EA`` texture paths.

    Each identifier may appear once; all four must be present.
    """
    found: dict[str, str] = {}
    for line in lines:
        stripped = line.lstrip(_WHITESPACE)
        for key in _TEXTURE_KEYS:
            if stripped.startswith(key + " "):
                if key in found:
                    raise ConfigError(f"Error: Duplicate {key} texture")
                found[key] = stripped[3:].strip("\n\t ")
                break
    if any(key not in found for key in _TEXTURE_KEYS):
        raise ConfigError("Error: Missing one or more textures")
    return found


def is_valid_prefix(lines: Sequence[str]) -> bool:
    """Check that every header line up to the map starts with a known identifier."""
    for line in lines:
        stripped = line.lstrip(_WHITESPACE)
        if not stripped:
            continue
        if stripped[0] in "10":
            return True
        second = stripped[1] if len(stripped) > 1 else ""
        if stripped[0] not in _PREFIX_FIRST or second not in _PREFIX_SECOND:
            return False
    return True


def parse_colors(lines: Sequence[str]) -> tuple[int, int]:
    """Return ``(floor, ceiling)`` colours from the ``F`` and ``C`` lines."""
    colors: dict[str, int | None] = {}
    for line in lines:
        stripped = line.lstrip(_WHITESPACE)
        if len(stripped) < 2 or stripped[1] != " " or stripped[0] not in "FC":
            continue
        key = stripped[0]
        if key in colors:
            which = "floor" if key == "F" else "ceiling"
            raise ConfigError(f"Error: Duplicate {which} color")
        try:
            colors[key] = parse_color_value(stripped[2:])
        except ConfigError:
            colors[key] = None
    floor = colors.get("F")
    ceiling = colors.get("C")
    if floor is None or ceiling is None:
        raise ConfigError("Error: Invalid colors")
    return floor, ceiling


def parse_config(lines: Sequence[str]) -> Config:
    """Read textures and colours from the lines of a scene file."""
    textures = parse_textures(lines)
    if not is_valid_prefix(lines):
        raise ConfigError("Error: Invalid prefix found in map lines")
    floor, ceiling = parse_colors(lines)
    return Config(
        no=textures["NO"],
        so=textures["SO"],
        we=textures["WE"],
        ea=textures["EA"],
        floor_color=floor,
        ceiling_color=ceiling,
    )