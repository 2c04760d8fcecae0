import random

import pytest

from cavecrawl.cave.carve import apply_outer_bedrock, carve_amoeba_floor, init_grid
from cavecrawl.cave.tiles import BEDROCK, FLOOR, VOID, WALL
from cavecrawl.cave.walls import (
    cellular_step,
    cosmetic_fill,
    enforce_keep_away,
    near_outer_edge,
    seed_interior_walls,
    shape_walls,
)
from tests.cave_test_utils import border_cells, make_grid, neighbours8, open_grid


@pytest.mark.parametrize("seed", [1, 42, 9_999_999])
def test_amoeba_carve_leaves_ring_void(seed):
    g = init_grid(40, 30)
    carved = carve_amoeba_floor(g, seed, 0.1, 0.0)
    assert carved == g.count(FLOOR)
    assert carved > 0
    assert all(g.get(x, y) == VOID for x, y in border_cells(g))


def test_amoeba_carve_is_centered():
    g = init_grid(50, 50)
    carve_amoeba_floor(g, 1234, 0.1, 0.0)
    # centre has d ~ 0, so any non-negative noise value beats a zero threshold
    assert g.get(25, 25) == FLOOR


def test_bedrock_wraps_floor():
    g = make_grid([
        "       ",
        "       ",
        "   .   ",
        "       ",
        "       ",
    ])
    assert apply_outer_bedrock(g) == 8
    assert g.count(BEDROCK) == 8
    assert g.get(1, 2) == VOID


def test_bedrock_only_next_to_floor_and_never_on_ring():
    g = init_grid(40, 40)
    carve_amoeba_floor(g, 77, 0.1, 0.0)
    apply_outer_bedrock(g)
    for x, y in g.find(BEDROCK):
        assert FLOOR in neighbours8(g, x, y)
    assert all(g.get(x, y) == VOID for x, y in border_cells(g))
    # and every void cell touching floor was converted
    for x, y in g.interior():
        if g.get(x, y) == VOID:
            assert FLOOR not in neighbours8(g, x, y)


def test_seed_walls_respects_keep_away_and_leaves_input():
    g = open_grid(20, 20)
    g.set(10, 10, BEDROCK)
    before = g.copy()
    scratch, seeds = seed_interior_walls(g, 5, 0.18, -1.0, 0.0, 1, random.Random(1))
    assert g == before
    assert seeds == scratch.count(WALL)
    for x, y in scratch.find(WALL):
        assert not near_outer_edge(g, x, y, 1)
    # threshold below any noise value: every eligible floor cell is seeded
    eligible = [(x, y) for x, y in g.interior() if g.get(x, y) == FLOOR and not near_outer_edge(g, x, y, 1)]
    assert seeds == len(eligible)


def test_seed_walls_high_threshold_places_nothing():
    g = open_grid(20, 20)
    _, seeds = seed_interior_walls(g, 5, 0.18, 2.0, 0.12, 1, random.Random(1))
    assert seeds == 0


def test_cellular_step_death_and_birth():
    g = make_grid([
        "       ",
        " ..... ",
        " ..#.. ",
        " ..... ",
        " ##... ",
        " #.#.. ",
        "       ",
    ])
    src = g.copy()
    nxt = cellular_step(g, birth=5, death=2)
    assert g == src
    # isolated wall dies
    assert nxt.get(3, 4) == FLOOR
    # floor at (2,1) has walls at (1,1),(3,1),(1,2),(2,2): 4 < birth, stays floor
    assert nxt.get(2, 1) == FLOOR


def test_cellular_step_birth_threshold():
    g = make_grid([
        "     ",
        " ### ",
        " #.# ",
        " ... ",
        "     ",
    ])
    nxt = cellular_step(g, birth=5, death=2)
    # five wall neighbours: born
    assert nxt.get(2, 2) == WALL
    nxt4 = cellular_step(g, birth=6, death=2)
    assert nxt4.get(2, 2) == FLOOR


def test_cellular_step_never_touches_bedrock():
    g = make_grid([
        "     ",
        " XXX ",
        " X#X ",
        " XXX ",
        "     ",
    ])
    nxt = shape_walls(g, 3, birth=5, death=2)
    assert nxt.count(BEDROCK) == 8
    # the wall has no wall neighbours at all
    assert nxt.get(2, 2) == FLOOR


def test_shape_walls_zero_iterations_is_identity():
    g = open_grid(10, 10)
    g.set(4, 4, WALL)
    assert shape_walls(g, 0, 5, 2) is g


def test_enforce_keep_away_reverts_edge_walls():
    g = make_grid([
        "       ",
        " X#### ",
        " ##### ",
        " ##### ",
        "       ",
    ])
    removed = enforce_keep_away(g, 1)
    assert removed == 12
    assert g.count(FLOOR) == 12
    # only these two are clear of the void ring and the bedrock cell
    assert g.get(3, 2) == WALL and g.get(4, 2) == WALL
    assert g.get(2, 2) == FLOOR


def test_enforce_keep_away_zero_radius_keeps_walls():
    g = make_grid(["     ", " X## ", "     "])
    assert enforce_keep_away(g, 0) == 0
    assert g.count(WALL) == 2


def test_cosmetic_fill_closes_notches_only():
    g = make_grid([
        "        ",
        " ###### ",
        " #.#..# ",
        " ###..# ",
        " ###### ",
        "        ",
    ])
    out, filled = cosmetic_fill(g)
    assert filled == 1
    # single-cell pocket: eight solid neighbours
    assert out.get(2, 3) == WALL
    # 2x2 room: each cell has exactly five solid neighbours, not more
    assert out.get(4, 3) == FLOOR and out.get(3, 2) == WALL
    assert g.get(2, 3) == FLOOR
