import random

import pytest

from cavecrawl.cave import pipeline
from cavecrawl.cave.catalog import STARTER_ENEMIES
from cavecrawl.cave.config import GenerationParameters, SEED_MODE_FIXED
from cavecrawl.cave.grid import GridBuffer
from cavecrawl.cave.placement import (
    clear_around,
    goal_candidates,
    place_enemies,
    place_goal,
    place_key,
    place_start,
    place_treasures,
    start_position,
)
from cavecrawl.cave.regions import QUADRANTS, quadrant_of
from cavecrawl.cave.tiles import FLOOR, GOAL, START, TREASURE, VOID, WALL, encode_item
from cavecrawl.errors import PlacementExhausted
from tests.cave_test_utils import open_grid


def test_start_position_is_center_offset():
    assert start_position(GridBuffer(50, 50)) == (26, 26)
    assert start_position(GridBuffer(41, 30)) == (21, 16)


def test_place_start_clears_walls_but_not_ring():
    g = GridBuffer(5, 5, fill=WALL)
    pos = place_start(g)
    assert pos == (3, 3)
    assert g.get(3, 3) == START
    assert g.get(2, 2) == FLOOR and g.get(2, 3) == FLOOR and g.get(3, 2) == FLOOR
    # x = 4 and y = 4 are the outer ring
    assert g.get(4, 3) == WALL and g.get(3, 4) == WALL and g.get(4, 4) == WALL


def test_clear_around_only_touches_walls():
    g = open_grid(7, 7)
    g.set(2, 2, WALL)
    g.set(4, 4, VOID)
    assert clear_around(g, (3, 3)) == 1
    assert g.get(4, 4) == VOID


@pytest.mark.parametrize("corner", QUADRANTS)
def test_goal_candidates_stay_in_corner(corner):
    g = open_grid(50, 50)
    cands = goal_candidates(g, corner)
    assert cands
    assert all(quadrant_of(50, 50, c) == corner for c in cands)
    assert all(g.get(x, y) == FLOOR for x, y in cands)


def test_place_goal_marks_one_cell():
    g = open_grid(30, 30)
    pos = place_goal(g, random.Random(3))
    assert g.get(*pos) == GOAL
    assert g.count(GOAL) == 1


def test_place_goal_empty_corner_raises():
    g = GridBuffer(30, 30)
    with pytest.raises(PlacementExhausted) as exc:
        place_goal(g, random.Random(3))
    assert exc.value.stage == "goal"


@pytest.mark.parametrize("seed", range(12))
def test_key_never_shares_goal_quadrant(seed, key_item):
    rng = random.Random(seed)
    g = open_grid(50, 50)
    goal = place_goal(g, rng)
    pos, quadrant = place_key(g, goal, key_item, rng, 100)
    assert quadrant != quadrant_of(50, 50, goal)
    assert quadrant_of(50, 50, pos) == quadrant
    assert g.get(*pos) == encode_item(key_item.item_id)


def test_key_placement_gives_up_when_other_quadrants_are_empty(key_item):
    g = GridBuffer(50, 50)
    # floor only around the goal corner
    for x in range(1, 20):
        for y in range(30, 49):
            g.set(x, y, FLOOR)
    goal = (5, 45)
    g.set(*goal, GOAL)
    with pytest.raises(PlacementExhausted) as exc:
        place_key(g, goal, key_item, random.Random(0), 10_000)
    assert exc.value.stage == "key"
    assert exc.value.attempts < 10_000


def test_treasures_are_placed_on_floor():
    g = open_grid(20, 20)
    g.set(10, 10, START)
    spots = place_treasures(g, 15, random.Random(4), 10_000)
    assert len(spots) == len(set(spots)) == 15
    assert g.count(TREASURE) == 15
    assert g.get(10, 10) == START


def test_treasure_sampling_is_bounded():
    g = GridBuffer(12, 12)
    g.set(3, 3, FLOOR)
    g.set(4, 3, FLOOR)
    with pytest.raises(PlacementExhausted) as exc:
        place_treasures(g, 5, random.Random(1), 500)
    assert exc.value.stage == "treasure"
    assert exc.value.attempts == 500


def test_enemies_do_not_mark_grid():
    g = open_grid(20, 20)
    before = g.copy()
    placed = place_enemies(g, STARTER_ENEMIES, 6, random.Random(2), 10_000)
    assert len(placed) == 6
    assert g == before
    assert all(p.enemy in STARTER_ENEMIES for p in placed)
    assert all(g.get(*p.position) == FLOOR for p in placed)


def test_enemy_catalog_empty_skips_placement(capsys):
    g = open_grid(20, 20)
    assert place_enemies(g, [], 5, random.Random(2), 100) == []
    assert "enemy_catalog_empty" in capsys.readouterr().out


def test_zero_counts_skip_treasure_and_enemy_stages(monkeypatch, key_item):
    def _forbidden(*a, **k):
        raise AssertionError("placement stage should not run")

    monkeypatch.setattr(pipeline, "place_treasures", _forbidden)
    monkeypatch.setattr(pipeline, "place_enemies", _forbidden)
    params = GenerationParameters(seed=99, seed_mode=SEED_MODE_FIXED, treasure_count=0, enemy_count=0)
    res = pipeline.CaveGenerator(params, items=[key_item], enemies=STARTER_ENEMIES).generate()
    assert res.treasures == [] and res.enemies == []
    assert res.grid.count(TREASURE) == 0
    assert res.grid.find(encode_item(key_item.item_id)) == [res.key_position]
    assert "place_key" in res.metrics["phase_ms"]
    assert "place_treasures" not in res.metrics["phase_ms"]
