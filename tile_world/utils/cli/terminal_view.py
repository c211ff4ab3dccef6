"""ASCII terminal renderer for composed world frames."""

from __future__ import annotations

import sys
from typing import Dict, TextIO

from ...core.grid import TileGrid
from ...core.world import World, compose_frame


# Basic ANSI colour codes used by :class:`TerminalView`
_COLOURS = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "reset": "\x1b[0m",
}

CLEAR_SCREEN = "\x1b[H\x1b[2J"


class TerminalView:
    """Draw the terrain plus every entity as one block of text."""

    def __init__(
        self,
        separator: str = " ",
        glyph_colours: Dict[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.separator = separator
        self.glyph_colours: Dict[str, str] = dict(glyph_colours or {})
        self.stream = stream
        self.enabled: bool = True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def frame_text(self, frame: TileGrid) -> str:
        """Join ``frame`` rows with ``separator``, colouring configured glyphs."""

        if not self.glyph_colours:
            return frame.to_text(self.separator)
        lines: list[str] = []
        for row in frame.rows():
            lines.append(self.separator.join(_colourise(cell, self.glyph_colours) for cell in row))
        return "\n".join(lines)

    def render(self, world: World) -> None:
        """Compose ``world`` and write it over the previous frame."""

        if not self.enabled:
            return

        out = self.stream if self.stream is not None else sys.stdout
        out.write(CLEAR_SCREEN)
        out.write(self.frame_text(compose_frame(world)))
        out.flush()


# ----------------------------------------------------------------------
# Helper functions
# ----------------------------------------------------------------------


def _colourise(glyph: str, glyph_colours: Dict[str, str]) -> str:
    code = _COLOURS.get(glyph_colours.get(glyph, ""), "")
    if not code:
        return glyph
    return f"{code}{glyph}{_COLOURS['reset']}"


__all__ = ["CLEAR_SCREEN", "TerminalView"]
