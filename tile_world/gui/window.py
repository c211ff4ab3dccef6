# tile_world/gui/window.py
"""Simple ``pygame`` window for drawing glyph cells."""

from __future__ import annotations

from typing import Dict

import pygame


class Window:
    """``pygame`` backed drawing surface."""

    def __init__(self, size: tuple[int, int] = (800, 600), *, caption: str = "Tile World") -> None:
        self.size = size

        if not pygame.get_init(): pygame.init()
        if not pygame.font.get_init(): pygame.font.init()
        if not pygame.display.get_init(): pygame.display.init()

        self._surface = pygame.display.set_mode(self.size)
        pygame.display.set_caption(caption)
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            try:
                font = pygame.font.SysFont(None, size)
            except pygame.error:
                font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def draw_cell(
        self,
        glyph: str,
        x: int,
        y: int,
        cell_size: int,
        colour: tuple[int, int, int] = (220, 220, 220),
        background: tuple[int, int, int] | None = None,
    ) -> None:
        if background is not None:
            pygame.draw.rect(self._surface, background, (x, y, cell_size, cell_size))
        if glyph.strip():
            text_surf = self._font(cell_size).render(glyph, True, colour)
            text_rect = text_surf.get_rect(center=(x + cell_size // 2, y + cell_size // 2))
            self._surface.blit(text_surf, text_rect)

    def draw_text(
        self, text: str, x: int, y: int, colour: tuple[int, int, int] = (255, 255, 255)
    ) -> None:
        text_surf = self._font(20).render(text, True, colour)
        self._surface.blit(text_surf, (x, y))

    def refresh(self) -> None:
        pygame.display.flip()

    def clear(self, color: tuple[int, int, int] = (0, 0, 0)) -> None:
        self._surface.fill(color)


__all__ = ["Window"]
