"""Steer every non-player entity one cell toward the player each tick."""

from __future__ import annotations

from typing import Any
import logging

from ..core.entity import Entity
from ..core.world import World
from .movement.movement_system import MovementSystem

logger = logging.getLogger(__name__)


def _toward(current: int, target: int) -> int:
    if current < target:
        return 1
    if current > target:
        return -1
    return 0


class ChaseSystem:
    """Move chasers toward the centre of the player's shape."""

    def __init__(self, world: World, player: Entity, movement: MovementSystem | None = None) -> None:
        self.world = world
        self.player = player
        self.movement = movement if movement is not None else MovementSystem(world)

    def target(self) -> tuple[int, int]:
        shape = self.player.shape
        return self.player.x + shape.width // 2, self.player.y + shape.height // 2

    def update(self, tick: Any = None) -> None:
        if not self.world.has_entity(self.player):
            return
        tx, ty = self.target()
        for entity in self.world.entities():
            if entity is self.player or not self.world.has_entity(entity):
                # Skip the player and anything removed earlier this tick
                continue
            dx, dy = _toward(entity.x, tx), _toward(entity.y, ty)
            if dx == 0 and dy == 0:
                continue
            result = self.movement.move_by(entity, dx, dy)
            if result.touched:
                logger.debug(
                    "[Tick %s] ChaseSystem: %r touched %s", tick, entity, result.touched
                )


__all__ = ["ChaseSystem"]
