# tile_world/gui/renderer.py
"""Renderer drawing composed frames to a :class:`Window`."""

from __future__ import annotations

from typing import Any, Dict

from ..core.grid import TileGrid
from ..core.world import World, compose_frame
from .window import Window

# Named colours shared with the terminal front-end's config keys
COLOUR_MAP: Dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "red": (220, 60, 60),
    "green": (80, 200, 80),
    "yellow": (230, 210, 60),
    "blue": (80, 120, 230),
    "magenta": (200, 90, 200),
    "cyan": (80, 210, 210),
    "white": (240, 240, 240),
}
DEFAULT_GLYPH_COLOUR = (200, 200, 200)
BACKGROUND = (15, 15, 15)


class Renderer:
    """Minimal renderer dispatching cell drawing to a :class:`Window`."""

    def __init__(
        self,
        window: Window | None = None,
        cell_size: int = 24,
        glyph_colours: Dict[str, str] | None = None,
    ) -> None:
        self.cell_size = cell_size
        self.glyph_colours: Dict[str, str] = dict(glyph_colours or {})
        self.window = window

    @staticmethod
    def window_size_for(frame: TileGrid, cell_size: int) -> tuple[int, int]:
        return frame.width * cell_size, frame.height * cell_size

    def ensure_window(self, world: World) -> Window:
        if self.window is None:
            self.window = Window(self.window_size_for(world.grid, self.cell_size))
        return self.window

    def colour_for(self, glyph: str) -> tuple[int, int, int]:
        return COLOUR_MAP.get(self.glyph_colours.get(glyph, ""), DEFAULT_GLYPH_COLOUR)

    def draw_frame(self, frame: TileGrid) -> None:
        window: Any = self.window
        for y, row in enumerate(frame.rows()):
            for x, glyph in enumerate(row):
                window.draw_cell(
                    glyph, x * self.cell_size, y * self.cell_size, self.cell_size,
                    self.colour_for(glyph),
                )

    def render(self, world: World) -> None:
        """Compose ``world`` and present it."""

        window = self.ensure_window(world)
        window.clear(BACKGROUND)
        self.draw_frame(compose_frame(world))
        window.refresh()


__all__ = ["Renderer"]
