# tile_world/systems/movement/movement_system.py
"""Movement system resolving stepwise, per-axis displacement."""

from __future__ import annotations

from typing import Any, Dict, List, NamedTuple
import logging

from ...core.collision import check_collisions_at
from ...core.entity import Entity
from ...core.world import World

logger = logging.getLogger(__name__)


class MoveResult(NamedTuple):
    """Outcome of :meth:`MovementSystem.move_by`."""

    dx: int
    dy: int
    touched: List[Entity]


def _sign(value: int) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _merge(touched: List[Entity], found: List[Entity]) -> None:
    for entity in found:
        if not any(t is entity for t in touched):
            touched.append(entity)


class MovementSystem:
    """Move entities one unit step at a time so they never tunnel or overlap."""

    def __init__(
        self, world: World, event_log: List[Dict[str, Any]] | None = None
    ) -> None:
        self.world = world
        self.event_log = event_log

    def move_by(self, entity: Entity, dx: int, dy: int) -> MoveResult:
        """Move ``entity`` up to ``(dx, dy)`` and report what actually happened.

        Each loop iteration probes one unit step on X, then one on Y, from the
        progress made so far. A blocked probe freezes that axis for the rest of
        the call. The entity is displaced by the full accumulated progress once
        the loop ends, and every touched entity then gets ``on_collided``.
        """

        step_x, step_y = _sign(dx), _sign(dy)
        progress_x = progress_y = 0
        touched: List[Entity] = []

        while (step_x != 0 and progress_x != dx) or (step_y != 0 and progress_y != dy):
            if step_x != 0 and progress_x != dx:
                hit_terrain, hit = check_collisions_at(
                    self.world, entity, entity.x + progress_x + step_x, entity.y + progress_y
                )
                if hit_terrain or hit:
                    self._log_blocked(entity, "x", progress_x, hit_terrain, hit)
                    step_x = 0
                else:
                    progress_x += step_x
                _merge(touched, hit)

            if step_y != 0 and progress_y != dy:
                hit_terrain, hit = check_collisions_at(
                    self.world, entity, entity.x + progress_x, entity.y + progress_y + step_y
                )
                if hit_terrain or hit:
                    self._log_blocked(entity, "y", progress_y, hit_terrain, hit)
                    step_y = 0
                else:
                    progress_y += step_y
                _merge(touched, hit)

        entity.x += progress_x
        entity.y += progress_y

        for other in touched:
            if self.event_log is not None:
                self.event_log.append(
                    {"type": "collision", "mover": entity.entity_id, "target": other.entity_id}
                )
            other.on_collided(entity)

        return MoveResult(progress_x, progress_y, touched)

    def _log_blocked(
        self, entity: Entity, axis: str, progress: int, hit_terrain: bool, hit: List[Entity]
    ) -> None:
        logger.debug(
            "MovementSystem: %r blocked on %s after %d step(s) (terrain=%s, entities=%s)",
            entity, axis, abs(progress), hit_terrain, [e.entity_id for e in hit],
        )
        if self.event_log is not None:
            self.event_log.append({
                "type": "move_blocked", "entity": entity.entity_id, "axis": axis,
                "terrain": hit_terrain, "occupants": [e.entity_id for e in hit],
            })


def move_by(world: World, entity: Entity, dx: int, dy: int) -> MoveResult:
    """Shorthand for ``MovementSystem(world).move_by(entity, dx, dy)``."""
    return MovementSystem(world).move_by(entity, dx, dy)


__all__ = ["MoveResult", "MovementSystem", "move_by"]
