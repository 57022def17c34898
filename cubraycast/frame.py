"""The frame buffer the scene is drawn into, and wall or sprite textures."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Sequence

import pygame

from cubraycast.mapfile import CubError
from cubraycast.settings import HEIGHT, WIDTH

_RGB_MASK = 0xFFFFFF
_image_to_bytes = getattr(pygame.image, "tobytes", None) or pygame.image.tostring


@dataclass(frozen=True)
class Texture:
    """An image as rows of packed 0xRRGGBB pixels, stored row after row."""

    width: int
    height: int
    data: Sequence[int]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture must have a positive size")
        if len(self.data) != self.width * self.height:
            raise ValueError("texture data does not match its size")

    def pixel(self, x: int, y: int) -> int:
        """Colour at column *x*, row *y*; coordinates outside are clamped to the edge."""
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        return self.data[y * self.width + x]


@dataclass
class Frame:
    """A width by height grid of 0xRRGGBB pixels, black when cleared."""

    width: int = WIDTH
    height: int = HEIGHT
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.clear()

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)``; points outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & _RGB_MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Colour of the pixel at ``(x, y)``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return self.pixels[y * self.width + x]

    def clear(self) -> None:
        """Paint the whole frame black."""
        self.pixels = [0] * (self.width * self.height)


def load_texture(path: str | os.PathLike) -> Texture:
    """Load an image file (XPM, BMP, PNG, ...) into a :class:`Texture`."""
    try:
        surface = pygame.image.load(os.fspath(path))
    except (pygame.error, OSError) as exc:
        raise CubError(f"Error\nFailed to load texture {os.fspath(path)}") from exc
    width, height = surface.get_size()
    if width == 0 or height == 0:
        raise CubError(f"Error\nEmpty texture {os.fspath(path)}")
    raw = _image_to_bytes(surface, "RGB")
    data = [
        (red << 16) | (green << 8) | blue
        for red, green, blue in zip(raw[0::3], raw[1::3], raw[2::3])
    ]
    return Texture(width=width, height=height, data=data)