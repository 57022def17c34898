"""Sprite animations drawn over the 3D view: a looping one and a triggered one."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Sequence

from cubraycast.frame import Frame, Texture, load_texture
from cubraycast.settings import ANIMATION_SPEED

_RGB_MASK = 0xFFFFFF


@dataclass
class Animation:
    """A sequence of frames shown for ``speed`` ticks each.

    A looping animation plays forever. A non-looping one plays only after
    :meth:`trigger` and stops once it has shown its last frame.
    """

    frames: Sequence[Texture]
    looping: bool = True
    speed: int = ANIMATION_SPEED
    active: bool = False
    current: int = 0
    counter: int = 0

    def __post_init__(self) -> None:
        self.frames = list(self.frames)
        if not self.frames:
            raise ValueError("an animation needs at least one frame")
        if self.speed <= 0:
            raise ValueError("animation speed must be positive")

    @property
    def num_frames(self) -> int:
        return len(self.frames)

    def advance(self) -> None:
        """Count one tick, moving to the next frame every ``speed`` ticks."""
        if not self.looping and not self.active:
            return
        self.counter += 1
        if self.counter < self.speed:
            return
        self.counter = 0
        self.current += 1
        if self.current >= len(self.frames):
            self.current = 0
            if not self.looping:
                self.active = False

    def trigger(self) -> None:
        """Start playing from the first frame."""
        self.active = True
        self.current = 0

    def current_frame(self) -> Texture:
        """The texture shown now."""
        return self.frames[self.current]


def frame_paths(directory: str | os.PathLike, count: int) -> list[str]:
    """Paths ``1.xpm`` to ``<count>.xpm`` inside *directory*."""
    base = os.fspath(directory)
    return [os.path.join(base, f"{number}.xpm") for number in range(1, count + 1)]


def load_animation(
    directory: str | os.PathLike, count: int, looping: bool
) -> Animation:
    """Load *count* numbered frames from *directory* into an animation."""
    frames = [load_texture(path) for path in frame_paths(directory, count)]
    return Animation(frames=frames, looping=looping, active=looping)


def draw_scaled(
    frame: Frame, texture: Texture, scale: float, right_aligned: bool
) -> None:
    """Draw *texture* scaled to ``scale`` times the frame width along the bottom edge.

    Black pixels are treated as transparent. The image sits at the left edge,
    or at the right edge when *right_aligned* is set.
    """
    target_width = int(frame.width * scale)
    if target_width <= 0:
        return
    target_height = texture.height * target_width // texture.width
    if target_height <= 0:
        return
    start_x = frame.width - target_width if right_aligned else 0
    start_y = frame.height - target_height
    columns = [
        (start_x + x, x * texture.width // target_width)
        for x in range(target_width)
        if 0 <= start_x + x < frame.width
    ]
    for y in range(target_height):
        py = start_y + y
        if not 0 <= py < frame.height:
            continue
        row_offset = (y * texture.height // target_height) * texture.width
        for px, src_x in columns:
            color = texture.data[row_offset + src_x]
            if color & _RGB_MASK:
                frame.put_pixel(px, py, color)