"""Mutable 2D cell-code buffer with bounds-safe neighbourhood queries.

Cells are stored column-major (``cells[x][y]``) like the rest of the dungeon code.
Neighbour queries skip offsets that fall outside the grid: an out-of-bounds cell
never matches, and border cells never wrap.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from .tiles import VOID, code_to_glyph

Coord = Tuple[int, int]


class GridBuffer:
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, fill: int = VOID):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[int]] = [[fill for _ in range(height)] for _ in range(width)]

    @classmethod
    def from_rows(cls, rows: List[str], legend: Dict[str, int]) -> "GridBuffer":
        """Build a buffer from text rows, first row = top (``y = height - 1``)."""
        height = len(rows)
        width = len(rows[0])
        grid = cls(width, height)
        for row_index, row in enumerate(rows):
            y = height - 1 - row_index
            for x, ch in enumerate(row):
                grid.cells[x][y] = legend[ch]
        return grid

    def copy(self) -> "GridBuffer":
        clone = GridBuffer.__new__(GridBuffer)
        clone.width = self.width
        clone.height = self.height
        clone.cells = [col[:] for col in self.cells]
        return clone

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def get(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell {(x, y)} outside {self.width}x{self.height} grid")
        return self.cells[x][y]

    def set(self, x: int, y: int, value: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell {(x, y)} outside {self.width}x{self.height} grid")
        self.cells[x][y] = value

    # ------------------------------------------------------------------
    # Neighbourhood queries
    # ------------------------------------------------------------------
    def count_neighbors(self, x: int, y: int, target: int, radius: int = 1) -> int:
        """Count cells equal to ``target`` in the Chebyshev square around (x, y), center excluded."""
        count = 0
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.height and self.cells[nx][ny] == target:
                    count += 1
        return count

    def has_neighbor_of(self, x: int, y: int, target: int) -> bool:
        return self.is_near_type(x, y, target, 1)

    def is_near_type(self, x: int, y: int, target: int, radius: int) -> bool:
        """True if any cell within ``radius`` (center excluded) equals ``target``; radius <= 0 is always False."""
        if radius <= 0:
            return False
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.height and self.cells[nx][ny] == target:
                    return True
        return False

    # ------------------------------------------------------------------
    # Iteration / summaries
    # ------------------------------------------------------------------
    def coords(self) -> Iterator[Coord]:
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def interior(self) -> Iterator[Coord]:
        """Cells strictly inside the outer ring."""
        for x in range(1, self.width - 1):
            for y in range(1, self.height - 1):
                yield x, y

    def find(self, code: int) -> List[Coord]:
        return [(x, y) for x, y in self.coords() if self.cells[x][y] == code]

    def count(self, code: int) -> int:
        return sum(col.count(code) for col in self.cells)

    def counts(self) -> Dict[int, int]:
        out: Dict[int, int] = {}
        for col in self.cells:
            for v in col:
                out[v] = out.get(v, 0) + 1
        return out

    def to_ascii(self) -> str:
        # Top row (highest y) first so the printout matches the in-game orientation
        return "\n".join(
            "".join(code_to_glyph(self.cells[x][y]) for x in range(self.width))
            for y in range(self.height - 1, -1, -1)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridBuffer):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self.cells == other.cells

    def __repr__(self) -> str:
        return f"GridBuffer({self.width}x{self.height})"


__all__ = ["GridBuffer", "Coord"]
