"""Start, goal, key, treasure and enemy placement.

Every candidate search here is bounded. When a search runs dry it raises
``PlacementExhausted`` and the generator decides whether to regenerate the map.
"""

from __future__ import annotations

import random
from typing import Any, List, NamedTuple, Sequence, Set, Tuple

from ..errors import PlacementExhausted
from ..logging_utils import get_logger
from .catalog import ItemEntry
from .grid import Coord, GridBuffer
from .regions import (
    BOTTOM_LEFT,
    QUADRANT_NAMES,
    QUADRANTS,
    TOP_LEFT,
    TOP_RIGHT,
    cells_in_bounds,
    key_area_bounds,
    quadrant_of,
)
from .tiles import FLOOR, GOAL, START, TREASURE, WALL, encode_item

log = get_logger("cavecrawl.cave.placement")


class EnemyPlacement(NamedTuple):
    position: Coord
    enemy: Any


# ----------------------------------------------------------------------
# Start
# ----------------------------------------------------------------------
def start_position(grid: GridBuffer) -> Coord:
    return grid.width // 2 + 1, grid.height // 2 + 1


def clear_around(grid: GridBuffer, pos: Coord) -> int:
    """Turn walls in the 8-neighbourhood of ``pos`` into floor (outer ring untouched)."""
    cleared = 0
    px, py = pos
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            nx, ny = px + dx, py + dy
            if nx <= 0 or nx >= grid.width - 1 or ny <= 0 or ny >= grid.height - 1:
                continue
            if grid.cells[nx][ny] == WALL:
                grid.cells[nx][ny] = FLOOR
                cleared += 1
    return cleared


def place_start(grid: GridBuffer) -> Coord:
    pos = start_position(grid)
    grid.set(pos[0], pos[1], START)
    clear_around(grid, pos)
    return pos


# ----------------------------------------------------------------------
# Goal
# ----------------------------------------------------------------------
def goal_candidates(grid: GridBuffer, corner: int) -> List[Coord]:
    """Floor cells in the outer third of the grid toward ``corner``, in corner-ward scan order."""
    w, h = grid.width, grid.height
    if corner in (TOP_LEFT, BOTTOM_LEFT):
        xs = range(1, w // 3)
    else:
        xs = range(w - 2, w * 2 // 3, -1)
    if corner in (TOP_LEFT, TOP_RIGHT):
        ys = range(h - 2, h * 2 // 3, -1)
    else:
        ys = range(1, h // 3)
    return [(x, y) for x in xs for y in ys if grid.cells[x][y] == FLOOR]


def place_goal(grid: GridBuffer, rng: random.Random) -> Coord:
    corner = rng.randrange(4)
    candidates = goal_candidates(grid, corner)
    if not candidates:
        # The grid cannot change between retries of the same corner, so one empty
        # scan is final for this map.
        raise PlacementExhausted("goal", 1, f"no floor cell toward {QUADRANT_NAMES[corner]} corner")
    pos = candidates[rng.randrange(len(candidates))]
    grid.set(pos[0], pos[1], GOAL)
    return pos


# ----------------------------------------------------------------------
# Key
# ----------------------------------------------------------------------
def place_key(
    grid: GridBuffer,
    goal: Coord,
    key_item: ItemEntry,
    rng: random.Random,
    max_attempts: int,
) -> Tuple[Coord, int]:
    """Place the key in a quadrant other than the goal's; returns (position, quadrant)."""
    goal_area = quadrant_of(grid.width, grid.height, goal)
    areas = [q for q in QUADRANTS if q != goal_area]
    empty: Set[int] = set()
    for attempt in range(1, max_attempts + 1):
        area = areas[rng.randrange(len(areas))]
        candidates = cells_in_bounds(grid, key_area_bounds(grid.width, grid.height, area))
        if candidates:
            pos = candidates[rng.randrange(len(candidates))]
            grid.set(pos[0], pos[1], encode_item(key_item.item_id))
            log.debug(
                event="key_placed",
                item=key_item.name,
                quadrant=QUADRANT_NAMES[area],
                goal_quadrant=QUADRANT_NAMES[goal_area],
                x=pos[0],
                y=pos[1],
                attempt=attempt,
            )
            return pos, area
        empty.add(area)
        log.warn(event="key_placement_retry", quadrant=QUADRANT_NAMES[area], attempt=attempt)
        if len(empty) == len(areas):
            raise PlacementExhausted("key", attempt, "no floor cell in any key area outside the goal quadrant")
    raise PlacementExhausted("key", max_attempts)


# ----------------------------------------------------------------------
# Rejection-sampled scatter (treasure, enemies)
# ----------------------------------------------------------------------
def _sample_floor(grid: GridBuffer, rng: random.Random) -> Coord:
    return rng.randrange(1, grid.width - 1), rng.randrange(1, grid.height - 1)


def place_treasures(grid: GridBuffer, count: int, rng: random.Random, max_attempts: int) -> List[Coord]:
    placed: List[Coord] = []
    draws = 0
    while len(placed) < count:
        if draws >= max_attempts:
            raise PlacementExhausted("treasure", draws, f"placed {len(placed)} of {count} treasures in {draws} draws")
        draws += 1
        cx, cy = _sample_floor(grid, rng)
        # START/GOAL/item cells are never FLOOR, so this also rejects them
        if grid.cells[cx][cy] == FLOOR:
            grid.cells[cx][cy] = TREASURE
            placed.append((cx, cy))
    return placed


def place_enemies(
    grid: GridBuffer,
    enemies: Sequence[Any],
    count: int,
    rng: random.Random,
    max_attempts: int,
) -> List[EnemyPlacement]:
    """Pick floor cells and enemy types; the grid itself is not marked."""
    if not enemies:
        log.warn(event="enemy_catalog_empty", requested=count)
        return []
    placed: List[EnemyPlacement] = []
    draws = 0
    while len(placed) < count:
        if draws >= max_attempts:
            raise PlacementExhausted("enemy", draws, f"placed {len(placed)} of {count} enemies in {draws} draws")
        draws += 1
        cx, cy = _sample_floor(grid, rng)
        if grid.cells[cx][cy] == FLOOR:
            enemy = enemies[rng.randrange(len(enemies))]
            placed.append(EnemyPlacement((cx, cy), enemy))
    return placed


__all__ = [
    "EnemyPlacement",
    "start_position",
    "clear_around",
    "place_start",
    "goal_candidates",
    "place_goal",
    "place_key",
    "place_treasures",
    "place_enemies",
]
