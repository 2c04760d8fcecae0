"""Interior wall phases: noise seeding, birth/death automaton, keep-away and cosmetic fill.

Every phase that reads neighbourhoods writes into a separate buffer and returns
it; the input buffer is left untouched so neighbour counts always come from one
consistent snapshot.
"""

from __future__ import annotations

import random
from typing import Tuple

from .grid import GridBuffer
from .noise import sample
from .tiles import BEDROCK, FLOOR, VOID, WALL


def near_outer_edge(grid: GridBuffer, x: int, y: int, radius: int) -> bool:
    return grid.is_near_type(x, y, VOID, radius) or grid.is_near_type(x, y, BEDROCK, radius)


def seed_interior_walls(
    grid: GridBuffer,
    seed: int,
    wall_noise_scale: float,
    wall_noise_threshold: float,
    jitter: float,
    keep_away: int,
    rng: random.Random,
) -> Tuple[GridBuffer, int]:
    """Scatter wall seeds over floor cells clear of the void/bedrock edge.

    Returns (scratch grid, seeds placed). The jitter draw happens for every
    eligible floor cell, uniform in ``[-jitter/2, +jitter/2)``.
    """
    scratch = grid.copy()
    seeds = 0
    for x, y in grid.interior():
        if grid.cells[x][y] != FLOOR:
            continue
        if near_outer_edge(grid, x, y, keep_away):
            continue
        n = sample(x + seed, y - seed, wall_noise_scale)
        n += (rng.random() - 0.5) * jitter
        if n > wall_noise_threshold:
            scratch.cells[x][y] = WALL
            seeds += 1
    return scratch, seeds


def cellular_step(src: GridBuffer, birth: int, death: int) -> GridBuffer:
    """One simultaneous automaton step: read ``src``, write a fresh buffer."""
    nxt = src.copy()
    cells = src.cells
    for x, y in src.interior():
        current = cells[x][y]
        if current == BEDROCK:
            continue
        if current == WALL:
            if src.count_neighbors(x, y, WALL) < death:
                nxt.cells[x][y] = FLOOR
        elif current == FLOOR:
            if src.count_neighbors(x, y, WALL) >= birth:
                nxt.cells[x][y] = WALL
    return nxt


def shape_walls(grid: GridBuffer, iterations: int, birth: int, death: int) -> GridBuffer:
    current = grid
    for _ in range(iterations):
        current = cellular_step(current, birth, death)
    return current


def enforce_keep_away(grid: GridBuffer, keep_away: int) -> int:
    """Revert walls that ended up within ``keep_away`` of void/bedrock; returns walls removed.

    Void and bedrock never move during wall shaping, so checking the same buffer
    that is being edited gives the same answer as checking the pre-wall grid.
    """
    removed = 0
    for x, y in grid.interior():
        if grid.cells[x][y] == WALL and near_outer_edge(grid, x, y, keep_away):
            grid.cells[x][y] = FLOOR
            removed += 1
    return removed


def cosmetic_fill(grid: GridBuffer, limit: int = 5) -> Tuple[GridBuffer, int]:
    """Fill floor notches: floor with more than ``limit`` wall+bedrock neighbours becomes wall."""
    out = grid.copy()
    filled = 0
    for x, y in grid.interior():
        if grid.cells[x][y] != FLOOR:
            continue
        solid = grid.count_neighbors(x, y, WALL) + grid.count_neighbors(x, y, BEDROCK)
        if solid > limit:
            out.cells[x][y] = WALL
            filled += 1
    return out, filled


__all__ = [
    "seed_interior_walls",
    "cellular_step",
    "shape_walls",
    "enforce_keep_away",
    "cosmetic_fill",
    "near_outer_edge",
]
