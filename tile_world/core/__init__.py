"""core package."""

from .collision import check_any_collisions_at, check_collisions_at
from .entity import DEFAULT_SOLID, CollisionHandler, Entity
from .grid import EMPTY, WALL, TileGrid, compose_overlay
from .shape import Shape
from .world import World, compose_frame

__all__ = [
    "DEFAULT_SOLID",
    "EMPTY",
    "WALL",
    "CollisionHandler",
    "Entity",
    "Shape",
    "TileGrid",
    "World",
    "check_any_collisions_at",
    "check_collisions_at",
    "compose_frame",
    "compose_overlay",
]
