"""Drop single-cell entities onto free interior cells at random."""

from __future__ import annotations

from typing import Iterable, List, Sequence
import logging
import random

from ..core.collision import check_any_collisions_at
from ..core.entity import DEFAULT_SOLID, Entity
from ..core.shape import Shape
from ..core.world import World

logger = logging.getLogger(__name__)

DEFAULT_GLYPHS = ("-", "+", ">", "<", "~")


class SpawnSystem:
    """Generate-and-test spawner with a bounded retry budget."""

    def __init__(
        self,
        world: World,
        rng: random.Random | None = None,
        glyphs: Sequence[str] = DEFAULT_GLYPHS,
        batch_size: int = 10,
        max_retries: int = 100,
        max_entities: int = 0,
        solid: Iterable[str] = DEFAULT_SOLID,
    ) -> None:
        if not glyphs:
            raise ValueError("SpawnSystem needs at least one glyph")
        self.world = world
        self.rng = rng if rng is not None else random.Random()
        self.glyphs = tuple(glyphs)
        self.batch_size = batch_size
        self.max_retries = max_retries
        self.max_entities = max_entities
        self.solid = frozenset(solid)

    def _full(self) -> bool:
        return self.max_entities > 0 and len(self.world) >= self.max_entities

    def _candidate(self) -> Entity:
        grid = self.world.grid
        x = self.rng.randint(1, max(1, grid.width_of(0) - 2))
        y = self.rng.randint(1, max(1, grid.height - 2))
        return Entity(Shape.single(self.rng.choice(self.glyphs)), x, y, self.solid)

    def spawn_batch(self) -> List[Entity]:
        """Try to place ``batch_size`` entities and return the ones placed.

        A colliding candidate is retried while the retry budget lasts; the
        budget refills after each successful placement. Once it runs out,
        failed attempts are dropped.
        """

        spawned: List[Entity] = []
        retries = 0
        attempts = 0
        while attempts < self.batch_size:
            if self._full():
                break
            candidate = self._candidate()
            if check_any_collisions_at(self.world, candidate, candidate.x, candidate.y):
                if retries < self.max_retries:
                    retries += 1
                    continue
                attempts += 1
                continue
            retries = 0
            attempts += 1
            self.world.add_entity(candidate)
            spawned.append(candidate)

        if spawned:
            logger.debug("SpawnSystem: spawned %d entit(ies)", len(spawned))
        return spawned

    def update(self) -> None:
        self.spawn_batch()


__all__ = ["DEFAULT_GLYPHS", "SpawnSystem"]
