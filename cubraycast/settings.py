"""Game-wide constants: window size, movement tuning and key codes."""

import math

PI = math.pi

# Window and frame buffer size in pixels.
WIDTH = 1500
HEIGHT = 1200

# Side length of one map cell in world units.
TILE = 64

# World units moved per tick.
SPEED = 8
# Radians turned per tick while a turn key is held.
ANGLE = 0.07
# Radians turned per pixel of horizontal mouse movement.
MOUSE_SENSITIVITY = 0.005

# Field of view, split evenly over the screen columns.
FOV = PI / 3

# Maps at or beyond this many rows or columns are refused.
MAX_MAP_SIZE = 500

# Frames of the ambient (looping) and triggered animations.
AMBIENT_FRAMES = 33
EMOTE_FRAMES = 19
ANIMATION_SPEED = 4

AMBIENT_DIR = "./textures/animation"
EMOTE_DIR = "./textures/surprise"
DOOR_TEXTURE = "./textures/door.xpm"

WINDOW_TITLE = "Cub3D"

# Key codes of the original keyboard layout.
KEY_W = 13
KEY_A = 0
KEY_S = 1
KEY_D = 2
KEY_EMOTE = 3
KEY_LEFT = 123
KEY_RIGHT = 124
KEY_DOWN = 125
KEY_UP = 126
KEY_SPACE = 49
KEY_ESC = 53

# Minimap colours.
MINIMAP_WALL = 0x333333
MINIMAP_OPEN_DOOR = 0xFFD700
MINIMAP_PLAYER = 0x00FF00
MINIMAP_FLOOR = 0x222222
MINIMAP_DIRECTION = 0xFF0000