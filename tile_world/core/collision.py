"""Overlap queries between an entity's shape, the terrain and other entities."""

from __future__ import annotations

from typing import List, Tuple

from .entity import Entity
from .world import World


def check_collisions_at(
    world: World, entity: Entity, x: int, y: int
) -> Tuple[bool, List[Entity]]:
    """Return ``(terrain_hit, touched)`` for ``entity`` anchored at ``(x, y)``.

    ``terrain_hit`` is true when any occupied cell lands on an in-bounds
    terrain symbol from ``entity.solid``; cells outside the grid never hit
    terrain. ``touched`` lists every other registered entity with an occupied
    cell at one of those coordinates, each once, in the order found.

    Nothing is mutated, so the anchor may be any hypothetical position.
    """

    grid = world.grid
    others = [other for other in world.entities() if other is not entity]
    terrain_hit = False
    touched: List[Entity] = []

    for wx, wy in entity.footprint(x, y):
        if not terrain_hit and grid.get(wx, wy) in entity.solid:
            terrain_hit = True
        for other in others:
            if other.occupies(wx, wy) and not any(t is other for t in touched):
                touched.append(other)

    return terrain_hit, touched


def check_any_collisions_at(world: World, entity: Entity, x: int, y: int) -> bool:
    """``True`` if ``entity`` at ``(x, y)`` would hit terrain or any entity."""
    terrain_hit, touched = check_collisions_at(world, entity, x, y)
    return terrain_hit or len(touched) > 0


__all__ = ["check_collisions_at", "check_any_collisions_at"]
