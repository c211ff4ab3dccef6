"""Collidable bitmap attached to an entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

from .grid import EMPTY, _validate_rows


@dataclass(frozen=True)
class Shape:
    """Immutable, possibly ragged bitmap.

    ``' '`` cells are transparent for both collision and composition; any
    other character is occupied.
    """

    rows: Tuple[Tuple[str, ...], ...]

    def __init__(self, rows: Sequence[Sequence[str]]) -> None:
        _validate_rows(rows, "Shape")
        object.__setattr__(self, "rows", tuple(tuple(row) for row in rows))

    @classmethod
    def from_strings(cls, lines: Iterable[str]) -> "Shape":
        return cls([list(line) for line in lines])

    @classmethod
    def single(cls, glyph: str) -> "Shape":
        """One-cell shape drawn with ``glyph``."""
        return cls([[glyph]])

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max(len(row) for row in self.rows)

    def is_occupied(self, col: int, row: int) -> bool:
        if not 0 <= row < len(self.rows):
            return False
        cells = self.rows[row]
        return 0 <= col < len(cells) and cells[col] != EMPTY

    def occupied_cells(self) -> Iterator[Tuple[int, int, str]]:
        """Yield ``(col, row, glyph)`` for each non-empty cell."""
        for r, cells in enumerate(self.rows):
            for c, glyph in enumerate(cells):
                if glyph != EMPTY:
                    yield c, r, glyph


__all__ = ["Shape"]
