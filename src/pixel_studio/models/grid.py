"""Fixed-size square grid of optional colors -- the paintable surface.

Cells are stored row-major (``rows[y][x]``).  ``set`` is the only
mutator; ``resize`` and ``copy`` always return a new grid.
"""

from __future__ import annotations

from collections.abc import Iterator

from pixel_studio.errors import InvalidArgument, OutOfBounds
from pixel_studio.models.color import Cell


def _check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidArgument(f"Grid size must be a positive integer, got {size!r}")
    return size


class Grid:
    """A ``size x size`` matrix of ``Optional[Color]``."""

    __slots__ = ("size", "_rows")

    def __init__(self, size: int) -> None:
        self.size = _check_size(size)
        self._rows: list[list[Cell]] = [[None] * size for _ in range(size)]

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.size)

    def get(self, x: int, y: int) -> Cell:
        self._check(x, y)
        return self._rows[y][x]

    def set(self, x: int, y: int, color: Cell) -> None:
        self._check(x, y)
        self._rows[y][x] = color

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(x, y, color)`` for every cell, row by row."""
        for y, row in enumerate(self._rows):
            for x, color in enumerate(row):
                yield x, y, color

    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self._rows)

    def filled_count(self) -> int:
        return sum(1 for row in self._rows for c in row if c is not None)

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def copy(self) -> Grid:
        # Colors are immutable, so copying the row lists is a deep copy.
        clone = Grid.__new__(Grid)
        clone.size = self.size
        clone._rows = [list(row) for row in self._rows]
        return clone

    def resize(self, new_size: int) -> Grid:
        """Return a new grid of *new_size*, top-left aligned.

        Cells inside the overlap are copied; cells beyond it are empty.
        Shrinking discards everything outside the new bounds.
        """
        resized = Grid(new_size)
        overlap = min(self.size, resized.size)
        for y in range(overlap):
            resized._rows[y][:overlap] = self._rows[y][:overlap]
        return resized

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, filled={self.filled_count()})"
