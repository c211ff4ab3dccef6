"""World registry: the authoritative grid plus the live entity arena."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Union
import logging

from .entity import Entity
from .grid import TileGrid

logger = logging.getLogger(__name__)

EntityRef = Union[Entity, int]


class World:
    """Holds the terrain grid and owns every registered entity.

    Entities are stored in an arena keyed by integer handles. Handles start at
    1, only grow, and are never reused.
    """

    def __init__(self, grid: TileGrid) -> None:
        self.grid: TileGrid = grid
        self._next_id: int = 0
        # Mapping of entity_id -> entity, kept in insertion order
        self._entities: Dict[int, Entity] = {}

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add_entity(self, entity: Entity) -> int:
        """Register ``entity`` and return its new handle."""

        if entity.entity_id is not None:
            raise ValueError(f"{entity!r} is already registered with a world")
        self._next_id += 1
        entity.entity_id = self._next_id
        self._entities[entity.entity_id] = entity
        logger.debug("World: added %r", entity)
        return entity.entity_id

    def remove_entity(self, ref: EntityRef) -> Optional[Entity]:
        """Unregister ``ref`` (entity or handle); return it, or ``None`` if absent."""

        entity_id = self._resolve(ref)
        if entity_id is None:
            return None
        entity = self._entities.pop(entity_id, None)
        if entity is not None:
            entity.entity_id = None
            logger.debug("World: removed entity %s", entity_id)
        return entity

    def clear(self) -> None:
        for entity in self._entities.values():
            entity.entity_id = None
        self._entities.clear()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get_entity(self, entity_id: int) -> Optional[Entity]:
        return self._entities.get(entity_id)

    def has_entity(self, ref: EntityRef) -> bool:
        entity_id = self._resolve(ref)
        return entity_id is not None and entity_id in self._entities

    def entities(self) -> List[Entity]:
        """Snapshot of live entities in insertion order."""
        return list(self._entities.values())

    def _resolve(self, ref: EntityRef) -> Optional[int]:
        if isinstance(ref, Entity):
            # Only the exact object registered under the handle counts
            if ref.entity_id is None or self._entities.get(ref.entity_id) is not ref:
                return None
            return ref.entity_id
        return ref

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, (Entity, int)):
            return False
        return self.has_entity(ref)


def compose_frame(world: World) -> TileGrid:
    """Copy of the terrain with every live entity stamped in insertion order."""

    frame = world.grid.copy()
    for entity in world.entities():
        frame.stamp(entity.shape, entity.x, entity.y)
    return frame


__all__ = ["World", "compose_frame"]
