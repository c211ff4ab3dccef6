"""Terrain tile grid and bitmap composition."""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

EMPTY = " "
WALL = "="


def _validate_rows(rows: Sequence[Sequence[str]], what: str) -> None:
    if len(rows) == 0:
        raise ValueError(f"{what} must have at least one row")
    for y, row in enumerate(rows):
        if len(row) == 0:
            raise ValueError(f"{what} row {y} is empty")
        for x, cell in enumerate(row):
            if not isinstance(cell, str) or len(cell) != 1:
                raise ValueError(
                    f"{what} cell ({x}, {y}) must be a single character, got {cell!r}"
                )


class TileGrid:
    """Fixed-size 2D array of single-character terrain cells.

    Rows may differ in length. The dimensions are frozen at construction;
    only cell values change afterwards.
    """

    def __init__(self, rows: Sequence[Sequence[str]]) -> None:
        _validate_rows(rows, "TileGrid")
        self._data: List[List[str]] = [list(row) for row in rows]

    @classmethod
    def from_strings(cls, lines: Iterable[str]) -> "TileGrid":
        """Build a grid where every character of each line is one cell."""
        return cls([list(line) for line in lines])

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------
    @property
    def height(self) -> int:
        return len(self._data)

    def width_of(self, y: int) -> int:
        return len(self._data[y])

    @property
    def width(self) -> int:
        """Width of the widest row."""
        return max(len(row) for row in self._data)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= y < len(self._data) and 0 <= x < len(self._data[y])

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def get(self, x: int, y: int) -> str | None:
        """Return the cell at ``(x, y)`` or ``None`` when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self._data[y][x]

    def set(self, x: int, y: int, cell: str) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside the grid")
        if not isinstance(cell, str) or len(cell) != 1:
            raise ValueError(f"cell must be a single character, got {cell!r}")
        self._data[y][x] = cell

    def rows(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(tuple(row) for row in self._data)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------
    def copy(self) -> "TileGrid":
        """Return a cell-wise copy sharing no row storage with ``self``."""
        return TileGrid(self._data)

    def stamp(self, bitmap: Any, offset_x: int, offset_y: int) -> None:
        """Overwrite cells with every non-empty cell of ``bitmap``.

        ``bitmap`` is a :class:`~tile_world.core.shape.Shape` or a sequence of
        rows. Cells landing outside the grid are skipped one by one; the grid
        is never resized.
        """

        if isinstance(bitmap, TileGrid):
            rows: Sequence[Sequence[str]] = bitmap.rows()
        else:
            rows = getattr(bitmap, "rows", bitmap)
        for r, row in enumerate(rows):
            y = offset_y + r
            if not 0 <= y < len(self._data):
                continue
            target = self._data[y]
            for c, cell in enumerate(row):
                if cell == EMPTY:
                    continue
                x = offset_x + c
                if 0 <= x < len(target):
                    target[x] = cell

    def to_text(self, separator: str = " ") -> str:
        return "\n".join(separator.join(row) for row in self._data)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"TileGrid(height={self.height}, width={self.width})"


def compose_overlay(base: TileGrid, shape: Any, offset_x: int, offset_y: int) -> TileGrid:
    """Return a copy of ``base`` with ``shape`` stamped at the offset."""

    frame = base.copy()
    frame.stamp(shape, offset_x, offset_y)
    return frame


__all__ = ["EMPTY", "WALL", "TileGrid", "compose_overlay"]
