from tile_world.core.collision import check_any_collisions_at, check_collisions_at
from tile_world.core.entity import Entity
from tile_world.core.grid import TileGrid
from tile_world.core.shape import Shape
from tile_world.core.world import World


def _make_world(lines=None) -> World:
    lines = lines or ["=====", "=   =", "= * =", "=   =", "====="]
    return World(TileGrid.from_strings(lines))


def _add(world: World, rows, x: int, y: int, solid=None) -> Entity:
    shape = Shape.from_strings(rows) if isinstance(rows, list) else Shape.single(rows)
    e = Entity(shape, x, y) if solid is None else Entity(shape, x, y, solid)
    world.add_entity(e)
    return e


def test_open_cell_has_no_collision():
    world = _make_world()
    e = _add(world, "@", 1, 1)
    assert check_collisions_at(world, e, 1, 1) == (False, [])
    assert not check_any_collisions_at(world, e, 3, 3)


def test_wall_cell_is_a_terrain_hit():
    world = _make_world()
    e = _add(world, "@", 1, 1)
    assert check_collisions_at(world, e, 0, 1) == (True, [])
    assert check_any_collisions_at(world, e, 4, 4)


def test_solid_set_is_per_entity():
    world = _make_world()
    walker = _add(world, "@", 1, 1)
    ghost = _add(world, "g", 1, 3, solid=set())
    picky = _add(world, "p", 3, 3, solid={"*"})
    assert check_collisions_at(world, walker, 2, 2) == (False, [])
    assert check_collisions_at(world, picky, 2, 2) == (True, [])
    assert check_collisions_at(world, ghost, 0, 0) == (False, [])


def test_out_of_bounds_never_hits_terrain():
    world = _make_world()
    e = _add(world, "@", 1, 1)
    assert check_collisions_at(world, e, -5, -5) == (False, [])
    assert check_collisions_at(world, e, 10, 2) == (False, [])


def test_blank_shape_cells_are_transparent():
    world = _make_world()
    # Only the bottom-right cell is occupied
    e = _add(world, ["  ", " #"], 1, 1)
    assert check_collisions_at(world, e, -1, -1) == (True, [])  # (0, 0) is a wall
    assert check_collisions_at(world, e, 0, 0) == (False, [])  # (1, 1) is open


def test_touched_entities_are_deduplicated_and_exclude_self():
    world = _make_world(["       "] * 5)
    mover = _add(world, ["##", "##"], 0, 0)
    big = _add(world, ["###", "###"], 2, 0)
    small = _add(world, "s", 1, 3)
    terrain_hit, touched = check_collisions_at(world, mover, 1, 0)
    assert not terrain_hit
    assert touched == [big]
    _, touched = check_collisions_at(world, mover, 1, 2)
    assert touched == [small]
    _, touched = check_collisions_at(world, mover, 0, 0)
    assert touched == []


def test_other_entity_blank_cells_do_not_touch():
    world = _make_world(["     "] * 3)
    mover = _add(world, "@", 0, 0)
    ring = _add(world, ["###", "# #", "###"], 1, 0)
    assert check_collisions_at(world, mover, 2, 1) == (False, [])
    assert check_collisions_at(world, mover, 1, 1) == (False, [ring])


def test_query_does_not_mutate_state():
    world = _make_world()
    e = _add(world, "@", 1, 1)
    other = _add(world, "o", 3, 1)
    check_collisions_at(world, e, 3, 1)
    assert (e.x, e.y) == (1, 1)
    assert (other.x, other.y) == (3, 1)
    assert world.entities() == [e, other]


def test_unregistered_probe_sees_registered_entities():
    world = _make_world()
    resident = _add(world, "r", 2, 1)
    candidate = Entity(Shape.single("c"), 2, 1)
    assert check_collisions_at(world, candidate, 2, 1) == (False, [resident])
