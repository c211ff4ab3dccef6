import io

from tile_world.core.entity import Entity
from tile_world.core.grid import TileGrid
from tile_world.core.shape import Shape
from tile_world.core.world import World
from tile_world.utils.cli.terminal_view import CLEAR_SCREEN, TerminalView


def _make_world() -> World:
    world = World(TileGrid.from_strings(["====", "=  =", "===="]))
    world.add_entity(Entity(Shape.single("@"), 1, 1))
    return world


def test_render_writes_composed_frame():
    out = io.StringIO()
    view = TerminalView(stream=out)
    view.render(_make_world())
    assert out.getvalue() == CLEAR_SCREEN + "= = = =\n= @   =\n= = = ="


def test_render_respects_toggle():
    out = io.StringIO()
    view = TerminalView(stream=out)
    assert view.toggle() is False
    view.render(_make_world())
    assert out.getvalue() == ""


def test_glyph_colours_wrap_cells():
    view = TerminalView(separator="", glyph_colours={"@": "yellow", "=": "nonsense"})
    text = view.frame_text(TileGrid.from_strings(["=@"]))
    assert text == "=\x1b[33m@\x1b[0m"
