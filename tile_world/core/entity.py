"""Mobile entity with a collidable shape."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional, Protocol, Tuple, runtime_checkable

from .grid import WALL
from .shape import Shape

DEFAULT_SOLID: FrozenSet[str] = frozenset({WALL})


@runtime_checkable
class CollisionHandler(Protocol):
    """Anything that can be told it was run into."""

    def on_collided(self, mover: "Entity") -> None: ...


@dataclass(eq=False)
class Entity:
    """A :class:`Shape` anchored at ``(x, y)`` by its top-left cell.

    Equality is identity and ``solid`` is fixed at construction.
    ``entity_id`` is the handle assigned by the owning
    :class:`~tile_world.core.world.World` and is ``None`` while unregistered.
    """

    shape: Shape
    x: int
    y: int
    solid: FrozenSet[str] = DEFAULT_SOLID
    name: str = ""
    entity_id: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "solid", frozenset(self.solid))

    def __setattr__(self, name: str, value: object) -> None:
        # solid is fixed once __init__ has assigned it
        if name == "solid" and "solid" in self.__dict__:
            raise AttributeError("Entity.solid cannot be changed after construction")
        super().__setattr__(name, value)

    def footprint(self, x: int | None = None, y: int | None = None) -> Iterator[Tuple[int, int]]:
        """Yield world cells covered when anchored at ``(x, y)`` (default: current)."""
        ax = self.x if x is None else x
        ay = self.y if y is None else y
        for col, row, _ in self.shape.occupied_cells():
            yield ax + col, ay + row

    def occupies(self, wx: int, wy: int) -> bool:
        return self.shape.is_occupied(wx - self.x, wy - self.y)

    def on_collided(self, mover: "Entity") -> None:
        """Called once per move in which ``mover`` touched this entity."""

    def __repr__(self) -> str:
        label = self.name or type(self).__name__
        return f"<{label} id={self.entity_id} at ({self.x}, {self.y})>"


__all__ = ["DEFAULT_SOLID", "CollisionHandler", "Entity"]
