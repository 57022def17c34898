# cubraycast

A small first-person raycasting engine. It reads a `.cub` level file, checks
that the map is closed and well formed, and lets you walk through it in a
pygame window with textured walls, doors you can open and close, a minimap
and two sprite animations.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycast maps/level.cub
```

The command takes exactly one argument, the path of a `.cub` file. With any
other number of arguments it prints a usage line and exits with status 0.
If the level cannot be read or checked, or a texture cannot be loaded, the
error is printed on standard error and the exit status is 1.

When run, it expects these files relative to the working directory, in any
image format that `pygame.image.load` can read under those names:

- `./textures/door.xpm`: the door texture
- `./textures/animation/1.xpm` … `33.xpm`: the looping animation drawn at the
  bottom right
- `./textures/surprise/1.xpm` … `19.xpm`: the emote animation drawn at the
  bottom left when triggered

The window is 1500 × 1200 pixels and runs at up to 60 frames per second.

## The `.cub` format

A level file names the four wall textures and the floor and ceiling colours,
followed by the map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
1D0N01
100001
111111
```

- The file name must end in `.cub`.
- `NO`, `SO`, `WE`, `EA` each appear exactly once.
- `F` and `C` are `R,G,B` with each part at most three digits and 0–255,
  each appearing once.
- Non-empty lines before the map must start with one of these identifiers.
- Map characters: `1` wall, `0` floor, `D` door, space for nothing, and
  exactly one of `N`, `S`, `E`, `W` for the player's start and facing.
- The map must contain at least one wall, one floor cell and one door; it must
  be closed by walls, all its walls must be connected, no blank cell may
  touch a floor cell, and the player may not stand on the map's border or next
  to a blank cell.
- The map must be the last thing in the file, and the file must not end with
  a newline.
- Maps ending on line 500 of the file or later, or 500 columns wide or wider,
  are refused.

Map problems are reported before texture and colour problems.

## Controls

| Key           | Action                        |
|---------------|-------------------------------|
| W / S         | move forward / back           |
| A / D         | strafe left / right           |
| ← / →         | turn                          |
| mouse         | turn                          |
| Space         | open or close the door ahead  |
| F             | play the emote animation      |
| Esc           | quit                          |

Moving into a wall slides along it. Closed doors block movement and rays;
open doors show on the minimap in gold.

## Using it as a library

```python
from cubraycast.parsing import parse
from cubraycast.player import World
from cubraycast.frame import Frame

level = parse("maps/level.cub")       # raises cubraycast.mapfile.CubError
world = World.from_level(level)
world.key_pressed(13)                 # cubraycast.player.Key.W
world.update()
```

The modules:

- `cubraycast.mapfile`: `read_map_lines`, `find_map_limits`, `longest_row`,
  `pad_rows`, and the errors `CubError` and `MapError`.
- `cubraycast.config`: `parse_config` returning a `Config`, and the steps
  `parse_textures`, `parse_colors`, `parse_color_value`, `is_valid_prefix`;
  errors are `ConfigError`.
- `cubraycast.validate`: `validate_map` and the individual map checks.
- `cubraycast.parsing`: `parse`, returning a `Level`.
- `cubraycast.player`: `World` (movement, input, mouse turning, doors) and
  the `Key` codes.
- `cubraycast.doors`: `DoorSet` and `find_door`.
- `cubraycast.frame`: `Frame`, `Texture` and `load_texture`.
- `cubraycast.raycast`: `cast_ray`, `render` and `WallTextures`.
- `cubraycast.minimap`: `draw_minimap`.
- `cubraycast.animation`: `Animation`, `load_animation` and `draw_scaled`.
- `cubraycast.app`: `Game` (one `tick` per frame, `handle_event` for pygame
  events) and `main`, the entry point of the `cubraycast` command.

## What it does not do

There is no shooting, no enemies, no sound and no saving of progress: the
game is walking through the map and opening doors. Drawing is done pixel by
pixel in pure Python, so frame rates on the full window are low.