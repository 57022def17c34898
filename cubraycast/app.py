"""The game window: event handling, the per-tick frame and the command entry point."""

from __future__ import annotations

import sys
from array import array
from dataclasses import dataclass, field
from typing import Sequence

import pygame

from cubraycast.animation import Animation, draw_scaled, load_animation
from cubraycast.frame import Frame, load_texture
from cubraycast.mapfile import CubError
from cubraycast.minimap import draw_minimap
from cubraycast.parsing import Level, parse
from cubraycast.player import Key, World
from cubraycast.raycast import WallTextures, render
from cubraycast.settings import (
    AMBIENT_DIR,
    AMBIENT_FRAMES,
    DOOR_TEXTURE,
    EMOTE_DIR,
    EMOTE_FRAMES,
    HEIGHT,
    WIDTH,
    WINDOW_TITLE,
)

AMBIENT_SCALE = 1.2
EMOTE_SCALE = 0.7
_FPS = 60

_KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_f: Key.EMOTE,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_ESCAPE: Key.ESC,
}


@dataclass
class Game:
    """Everything needed to run the game one tick at a time."""

    world: World
    textures: WallTextures
    ambient: Animation
    emote: Animation
    frame: Frame = field(default_factory=Frame)

    def tick(self) -> None:
        """Move the player and draw a full frame: view, sprites and minimap."""
        self.frame.clear()
        self.world.update()
        config = self.world.config
        ceiling = config.ceiling_color if config is not None else 0
        floor = config.floor_color if config is not None else 0
        render(self.frame, self.world, self.textures, ceiling, floor)
        if self.emote.active:
            draw_scaled(self.frame, self.emote.current_frame(), EMOTE_SCALE, False)
            self.emote.advance()
        self.ambient.advance()
        draw_scaled(self.frame, self.ambient.current_frame(), AMBIENT_SCALE, True)
        draw_minimap(self.frame, self.world)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Feed one window event to the world."""
        if event.type == pygame.QUIT:
            self.world.running = False
        elif event.type == pygame.KEYDOWN:
            key = _KEYMAP.get(event.key)
            if key is not None:
                self.world.key_pressed(key)
                if self.world.emote_requested:
                    self.world.emote_requested = False
                    self.emote.trigger()
        elif event.type == pygame.KEYUP:
            key = _KEYMAP.get(event.key)
            if key is not None:
                self.world.key_released(key)
        elif event.type == pygame.MOUSEMOTION:
            self.world.mouse_move(event.pos[0])


def _load_game(level: Level) -> Game:
    config = level.config
    try:
        textures = WallTextures(
            north=load_texture(config.no),
            south=load_texture(config.so),
            east=load_texture(config.ea),
            west=load_texture(config.we),
            door=load_texture(DOOR_TEXTURE),
        )
    except CubError as exc:
        raise CubError("Error\nFailed to load textures") from exc
    emote = load_animation(EMOTE_DIR, EMOTE_FRAMES, looping=False)
    ambient = load_animation(AMBIENT_DIR, AMBIENT_FRAMES, looping=True)
    return Game(
        world=World.from_level(level),
        textures=textures,
        ambient=ambient,
        emote=emote,
    )


def _to_surface(frame: Frame) -> pygame.Surface:
    raw = array("I", frame.pixels).tobytes()
    rgb = bytearray(len(frame.pixels) * 3)
    if sys.byteorder == "little":
        rgb[0::3], rgb[1::3], rgb[2::3] = raw[2::4], raw[1::4], raw[0::4]
    else:
        rgb[0::3], rgb[1::3], rgb[2::3] = raw[1::4], raw[2::4], raw[3::4]
    return pygame.image.frombuffer(bytes(rgb), (frame.width, frame.height), "RGB")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: cubraycast <maps/choose_a_map_name.cub>")
        return 0
    try:
        level = parse(args[0])
    except CubError as exc:
        print(exc, file=sys.stderr)
        return 1
    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((WIDTH, HEIGHT))
        except pygame.error as exc:
            print(f"Error\nFailed to create window: {exc}", file=sys.stderr)
            return 1
        pygame.display.set_caption(WINDOW_TITLE)
        try:
            game = _load_game(level)
        except CubError as exc:
            print(exc, file=sys.stderr)
            return 1
        clock = pygame.time.Clock()
        while game.world.running:
            for event in pygame.event.get():
                game.handle_event(event)
            if not game.world.running:
                break
            game.tick()
            screen.blit(_to_surface(game.frame), (0, 0))
            pygame.display.flip()
            clock.tick(_FPS)
    finally:
        pygame.quit()
    return 0