"""A textured raycasting engine that plays .cub maps, with doors, a minimap and animations."""

__version__ = "0.1.0"