"""Connected-component analysis and coarse spatial bucketing.

Regions are maximal 4-connected floor components strictly inside the outer ring;
the ring itself is never labelled. Quadrants are a separate, much coarser split
at the grid midpoints used to keep the key away from the goal.
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Set, Tuple

from .grid import Coord, GridBuffer
from .tiles import BEDROCK, FLOOR, VOID, WALL

ORTHOGONAL = ((1, 0), (-1, 0), (0, 1), (0, -1))

TOP_LEFT = 0
TOP_RIGHT = 1
BOTTOM_LEFT = 2
BOTTOM_RIGHT = 3
QUADRANTS = (TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT)
QUADRANT_NAMES = {
    TOP_LEFT: "top_left",
    TOP_RIGHT: "top_right",
    BOTTOM_LEFT: "bottom_left",
    BOTTOM_RIGHT: "bottom_right",
}

Bounds = Tuple[int, int, int, int]  # x_start, x_end (exclusive), y_start, y_end (exclusive)


def flood_fill_floor(grid: GridBuffer, sx: int, sy: int, visited: Set[Coord]) -> List[Coord]:
    """Collect the floor region containing (sx, sy); marks cells in ``visited``."""
    w, h = grid.width, grid.height
    cells = grid.cells
    region: List[Coord] = []
    q = deque([(sx, sy)])
    visited.add((sx, sy))
    while q:
        x, y = q.popleft()
        region.append((x, y))
        for dx, dy in ORTHOGONAL:
            nx, ny = x + dx, y + dy
            if nx <= 0 or ny <= 0 or nx >= w - 1 or ny >= h - 1:
                continue
            if cells[nx][ny] == FLOOR and (nx, ny) not in visited:
                visited.add((nx, ny))
                q.append((nx, ny))
    return region


def label_regions(grid: GridBuffer) -> List[List[Coord]]:
    """All floor regions in scan order (x-major, like the carve loops)."""
    visited: Set[Coord] = set()
    regions: List[List[Coord]] = []
    for x, y in grid.interior():
        if grid.cells[x][y] == FLOOR and (x, y) not in visited:
            regions.append(flood_fill_floor(grid, x, y, visited))
    return regions


def prune_small_regions(grid: GridBuffer, min_size: int) -> Tuple[int, int, int]:
    """Revert every region smaller than ``min_size`` to void.

    Returns (regions_found, regions_pruned, cells_pruned).
    """
    regions = label_regions(grid)
    pruned = 0
    cells_pruned = 0
    for region in regions:
        if len(region) < min_size:
            pruned += 1
            cells_pruned += len(region)
            for x, y in region:
                grid.cells[x][y] = VOID
    return len(regions), pruned, cells_pruned


def region_containing(grid: GridBuffer, pos: Coord) -> List[Coord]:
    """Floor region (4-connected, interior only) holding ``pos``; empty if ``pos`` is not floor."""
    x, y = pos
    if not grid.in_bounds(x, y) or grid.is_border(x, y) or grid.cells[x][y] != FLOOR:
        return []
    return flood_fill_floor(grid, x, y, set())


# ----------------------------------------------------------------------
# Quadrants
# ----------------------------------------------------------------------
def quadrant_of(width: int, height: int, pos: Coord) -> int:
    """Midpoint split; "top" means the upper half (y above height // 2)."""
    x, y = pos
    left = x < width // 2
    top = y > height // 2
    if left and top:
        return TOP_LEFT
    if not left and top:
        return TOP_RIGHT
    if left and not top:
        return BOTTOM_LEFT
    return BOTTOM_RIGHT


def key_area_bounds(width: int, height: int, quadrant: int) -> Bounds:
    """Outer corner rectangle of a quadrant, inset by a quarter of the grid from the far edges."""
    if quadrant == TOP_LEFT:
        return 1, width // 4, height * 3 // 4, height - 1
    if quadrant == TOP_RIGHT:
        return width * 3 // 4, width - 1, height * 3 // 4, height - 1
    if quadrant == BOTTOM_LEFT:
        return 1, width // 4, 1, height // 4
    if quadrant == BOTTOM_RIGHT:
        return width * 3 // 4, width - 1, 1, height // 4
    raise ValueError(f"unknown quadrant {quadrant!r}")


def cells_in_bounds(grid: GridBuffer, bounds: Bounds, code: int = FLOOR) -> List[Coord]:
    x_start, x_end, y_start, y_end = bounds
    return [
        (x, y)
        for x in range(x_start, x_end)
        for y in range(y_start, y_end)
        if grid.in_bounds(x, y) and grid.cells[x][y] == code
    ]


# ----------------------------------------------------------------------
# Reachability
# ----------------------------------------------------------------------
def reachable_from(grid: GridBuffer, start: Coord, through_walls: bool = False) -> Set[Coord]:
    """4-directional flood from ``start`` over every cell that is not void/bedrock.

    Walls block the flood unless ``through_walls`` is set (walls can be dug out).
    """
    blocked = frozenset((VOID, BEDROCK) if through_walls else (VOID, BEDROCK, WALL))
    sx, sy = start
    if not grid.in_bounds(sx, sy):
        return set()
    w, h = grid.width, grid.height
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for dx, dy in ORTHOGONAL:
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in seen and grid.cells[nx][ny] not in blocked:
                seen.add((nx, ny))
                q.append((nx, ny))
    return seen


def is_reachable(grid: GridBuffer, start: Coord, goal: Optional[Coord], through_walls: bool = False) -> bool:
    if goal is None:
        return False
    return goal in reachable_from(grid, start, through_walls=through_walls)


__all__ = [
    "TOP_LEFT",
    "TOP_RIGHT",
    "BOTTOM_LEFT",
    "BOTTOM_RIGHT",
    "QUADRANTS",
    "QUADRANT_NAMES",
    "flood_fill_floor",
    "label_regions",
    "prune_small_regions",
    "region_containing",
    "quadrant_of",
    "key_area_bounds",
    "cells_in_bounds",
    "reachable_from",
    "is_reachable",
]
