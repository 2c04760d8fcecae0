"""Floor carving phases: void init, amoeba floor blob and the bedrock skin."""

from __future__ import annotations

import math

from .grid import GridBuffer
from .noise import sample
from .tiles import BEDROCK, FLOOR, VOID


def init_grid(width: int, height: int) -> GridBuffer:
    return GridBuffer(width, height, fill=VOID)


def carve_amoeba_floor(grid: GridBuffer, seed: int, noise_scale: float, threshold: float) -> int:
    """Carve a noise-perturbed, roughly circular floor blob; returns floor cells carved.

    The outermost ring is never visited, so it stays void. ``d`` is the distance
    from the grid center normalised by the inscribed-circle radius.
    """
    cx, cy = grid.width / 2.0, grid.height / 2.0
    max_r = min(grid.width, grid.height) / 2.0
    carved = 0
    for x, y in grid.interior():
        n = sample(x + seed, y + seed, noise_scale)
        dx, dy = (x - cx) / max_r, (y - cy) / max_r
        d = math.sqrt(dx * dx + dy * dy)
        if n - d * 0.5 > threshold:
            grid.cells[x][y] = FLOOR
            carved += 1
    return carved


def apply_outer_bedrock(grid: GridBuffer) -> int:
    """Turn every interior void cell 8-adjacent to floor into bedrock; returns cells converted.

    The outermost ring stays void even when floor reaches ring 1.
    Converting in place is safe: only VOID -> BEDROCK happens and the test looks
    for FLOOR neighbours, so earlier conversions never change later decisions.
    """
    converted = 0
    for x, y in grid.interior():
        if grid.cells[x][y] == VOID and grid.has_neighbor_of(x, y, FLOOR):
            grid.cells[x][y] = BEDROCK
            converted += 1
    return converted


__all__ = ["init_grid", "carve_amoeba_floor", "apply_outer_bedrock"]
