from typing import Any, Dict, List

import pytest

from tile_world.core.collision import check_collisions_at
from tile_world.core.entity import Entity
from tile_world.core.grid import TileGrid
from tile_world.core.shape import Shape
from tile_world.core.world import World
from tile_world.systems.movement.movement_system import MoveResult, MovementSystem, move_by


class RecordingEntity(Entity):
    """Entity that remembers who ran into it."""

    def __post_init__(self) -> None:
        super().__post_init__()
        self.collided_with: List[Entity] = []

    def on_collided(self, mover: Entity) -> None:
        self.collided_with.append(mover)


def _boxed_world() -> World:
    # 3x3 open interior bordered by walls
    return World(TileGrid.from_strings(["=====", "=   =", "=   =", "=   =", "====="]))


def _open_world(width: int = 10, height: int = 10) -> World:
    return World(TileGrid.from_strings([" " * width] * height))


def _add(world: World, entity: Entity) -> Entity:
    world.add_entity(entity)
    return entity


def test_long_move_stops_at_wall():
    world = _boxed_world()
    e = _add(world, Entity(Shape.single("@"), 2, 2))
    result = move_by(world, e, 5, 0)
    assert isinstance(result, MoveResult)
    assert (result.dx, result.dy) == (1, 0)
    assert result.touched == []
    assert (e.x, e.y) == (3, 2)


def test_move_into_adjacent_entity_is_blocked_and_reported():
    world = _open_world()
    mover = _add(world, RecordingEntity(Shape.single("a"), 2, 2))
    other = _add(world, RecordingEntity(Shape.single("b"), 3, 2))
    dx, dy, touched = move_by(world, mover, 1, 0)
    assert (dx, dy) == (0, 0)
    assert touched == [other]
    assert mover.x == 2
    assert other.collided_with == [mover]
    assert mover.collided_with == []


def test_tall_shape_blocked_by_wall_row():
    world = World(TileGrid.from_strings(["=====", "     ", "     ", "     "]))
    e = _add(world, Entity(Shape.from_strings(["#", "#"]), 1, 1))
    result = move_by(world, e, 0, -1)
    assert (result.dx, result.dy) == (0, 0)
    assert (e.x, e.y) == (1, 1)


def test_unobstructed_move_commits_full_distance():
    world = _open_world()
    e = _add(world, Entity(Shape.single("@"), 1, 1))
    result = move_by(world, e, 4, 3)
    assert (result.dx, result.dy) == (4, 3)
    assert (e.x, e.y) == (5, 4)


def test_zero_move_is_a_no_op():
    world = _boxed_world()
    e = _add(world, Entity(Shape.single("@"), 2, 2))
    assert move_by(world, e, 0, 0) == (0, 0, [])
    assert (e.x, e.y) == (2, 2)


def test_axes_freeze_independently():
    world = _boxed_world()
    e = _add(world, Entity(Shape.single("@"), 1, 1))
    # X runs into the east wall after 2 steps, Y keeps going until 2 as well
    result = move_by(world, e, 5, 2)
    assert (result.dx, result.dy) == (2, 2)
    assert (e.x, e.y) == (3, 3)


def test_blocked_axis_does_not_stop_the_other():
    world = _open_world()
    mover = _add(world, Entity(Shape.single("m"), 1, 1))
    wall = _add(world, Entity(Shape.single("w"), 2, 1))
    result = move_by(world, mover, 3, 3)
    # First X probe hits the wall entity; Y continues, X stays frozen
    assert (result.dx, result.dy) == (0, 3)
    assert result.touched == [wall]
    assert (mover.x, mover.y) == (1, 4)


def test_negative_directions():
    world = _boxed_world()
    e = _add(world, Entity(Shape.single("@"), 3, 3))
    result = move_by(world, e, -9, -1)
    assert (result.dx, result.dy) == (-2, -1)
    assert (e.x, e.y) == (1, 2)


def test_wall_midway_freezes_x_while_y_finishes():
    world = World(TileGrid.from_strings(["       ", "   =   ", "       "]))
    e = _add(world, Entity(Shape.single("@"), 1, 0))
    # Each iteration probes X before Y, so the second X probe meets the wall
    result = move_by(world, e, 3, 2)
    assert (result.dx, result.dy) == (1, 2)
    assert (e.x, e.y) == (2, 2)


def test_touched_once_per_call_even_if_probed_repeatedly():
    world = _open_world()
    mover = _add(world, Entity(Shape.single("m"), 0, 0))
    target = _add(world, RecordingEntity(Shape.from_strings([" #", "# "]), 0, 0))
    # Both the X probe and the Y probe run into the same entity
    result = move_by(world, mover, 1, 1)
    assert (result.dx, result.dy) == (0, 0)
    assert result.touched == [target]
    assert target.collided_with == [mover]


def test_custom_solid_symbols():
    world = World(TileGrid.from_strings(["  ~  "]))
    swimmer = _add(world, Entity(Shape.single("s"), 0, 0, solid=set()))
    walker = _add(world, Entity(Shape.single("w"), 4, 0, solid={"~"}))
    assert move_by(world, walker, -4, 0).dx == -1
    assert move_by(world, swimmer, 4, 0).dx == 2  # blocked by walker at x=3


def test_event_log_records_blocks_and_collisions():
    world = _open_world()
    log: List[Dict[str, Any]] = []
    movement = MovementSystem(world, event_log=log)
    mover = _add(world, Entity(Shape.single("a"), 0, 0))
    other = _add(world, Entity(Shape.single("b"), 1, 0))
    movement.move_by(mover, 1, 0)
    assert log[0] == {
        "type": "move_blocked", "entity": mover.entity_id, "axis": "x",
        "terrain": False, "occupants": [other.entity_id],
    }
    assert log[-1] == {"type": "collision", "mover": mover.entity_id, "target": other.entity_id}


def test_hooks_fire_after_position_commit():
    world = _open_world()
    seen: List[tuple] = []

    class Watcher(Entity):
        def on_collided(self, mover: Entity) -> None:
            seen.append((mover.x, mover.y))

    mover = _add(world, Entity(Shape.single("m"), 0, 0))
    _add(world, Watcher(Shape.single("w"), 3, 0))
    move_by(world, mover, 5, 0)
    assert seen == [(2, 0)]


@pytest.mark.parametrize("dx,dy", [(5, 0), (-5, 0), (0, 5), (0, -5), (3, -4), (-6, 2), (1, 1)])
def test_progress_is_bounded_and_never_overlaps(dx, dy):
    world = World(TileGrid.from_strings([
        "=========",
        "=   =   =",
        "=       =",
        "==  =  ==",
        "=       =",
        "=========",
    ]))
    mover = _add(world, Entity(Shape.from_strings(["##"]), 3, 2))
    _add(world, Entity(Shape.single("x"), 6, 4))
    result = move_by(world, mover, dx, dy)
    assert abs(result.dx) <= abs(dx) and abs(result.dy) <= abs(dy)
    assert result.dx * dx >= 0 and result.dy * dy >= 0
    assert (mover.x, mover.y) == (3 + result.dx, 2 + result.dy)
    # final footprint never sits on a wall or on another entity
    assert check_collisions_at(world, mover, mover.x, mover.y) == (False, [])


def test_touch_is_symmetric_with_stationary_target():
    world = _open_world()
    mover = _add(world, Entity(Shape.from_strings(["##"]), 0, 0))
    target = _add(world, Entity(Shape.single("t"), 4, 0))
    result = move_by(world, mover, 5, 0)
    assert result.touched == [target]
    # One more step from the committed position would overlap the target
    _, touched = check_collisions_at(world, mover, mover.x + 1, mover.y)
    assert touched == [target]
