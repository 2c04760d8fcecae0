"""Pipeline orchestration for cave generation.

``CaveGenerator`` runs the ordered stages (floor carve, island pruning, bedrock
skin, wall seeding, automaton, keep-away, cosmetic fill, start, goal, key,
treasure, enemies) over a fresh ``GridBuffer`` and wraps the finished map in a
``GenerationResult``. A placement stage that runs dry throws the whole map away
and the next attempt starts from a new seed; after ``max_generation_attempts``
the generator gives up with ``GenerationFailed``. No partial grid is returned.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..errors import GenerationFailed, PlacementExhausted
from ..logging_utils import get_logger
from .carve import apply_outer_bedrock, carve_amoeba_floor, init_grid
from .catalog import ItemEntry, find_key_item
from .config import GenerationParameters
from .grid import Coord, GridBuffer
from .metrics import init_metrics, tile_counts
from .placement import (
    EnemyPlacement,
    place_enemies,
    place_goal,
    place_key,
    place_start,
    place_treasures,
)
from .regions import QUADRANT_NAMES, is_reachable, prune_small_regions, quadrant_of
from .tiles import WALL
from .walls import cosmetic_fill, enforce_keep_away, seed_interior_walls, shape_walls

log = get_logger("cavecrawl.cave.pipeline")

SEED_MIN = 1
SEED_MAX = 9_999_999


@dataclass
class GenerationResult:
    seed: int
    grid: GridBuffer
    start: Coord
    goal: Coord
    key_position: Coord
    key_item: ItemEntry
    goal_quadrant: int
    key_quadrant: int
    parameters: GenerationParameters
    treasures: List[Coord] = field(default_factory=list)
    enemies: List[EnemyPlacement] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    attempts: int = 1

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def to_ascii(self) -> str:
        return self.grid.to_ascii()

    def to_json(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.grid.width,
            "height": self.grid.height,
            "grid": self.to_ascii().split("\n"),
            "start": list(self.start),
            "goal": list(self.goal),
            "key": {
                "x": self.key_position[0],
                "y": self.key_position[1],
                "item_id": self.key_item.item_id,
                "name": self.key_item.name,
                "quadrant": QUADRANT_NAMES[self.key_quadrant],
            },
            "goal_quadrant": QUADRANT_NAMES[self.goal_quadrant],
            "treasures": [list(p) for p in self.treasures],
            "enemies": [
                {"x": p.position[0], "y": p.position[1], "enemy": getattr(p.enemy, "name", repr(p.enemy))}
                for p in self.enemies
            ],
            "attempts": self.attempts,
            "metrics": self.metrics,
        }


class CaveGenerator:
    """Build cave maps from ``GenerationParameters`` and caller-supplied catalogs.

    The generator owns one ``random.Random``. In ``fresh`` seed mode it draws
    each map's seed and every jitter/placement draw from that source (pass your
    own ``rng`` to freeze it); in ``fixed`` mode each attempt reseeds a private
    source from ``parameters.seed`` so two runs produce identical maps.
    """

    def __init__(
        self,
        parameters: Optional[GenerationParameters] = None,
        items: Sequence[ItemEntry] = (),
        enemies: Sequence[Any] = (),
        rng: Optional[random.Random] = None,
        enable_metrics: bool = True,
    ):
        self.parameters = (parameters or GenerationParameters()).validate()
        self.items: List[ItemEntry] = list(items)
        self.enemies: List[Any] = list(enemies)
        self.enable_metrics = enable_metrics
        self._rng = rng or random.Random()
        self.current: Optional[GenerationResult] = None

    def roll_seed(self, parameters: GenerationParameters, attempt: int) -> int:
        if parameters.deterministic:
            return parameters.seed + attempt - 1
        return self._rng.randint(SEED_MIN, SEED_MAX)

    def generate(
        self,
        parameters: Optional[GenerationParameters] = None,
        items: Optional[Sequence[ItemEntry]] = None,
        enemies: Optional[Sequence[Any]] = None,
    ) -> GenerationResult:
        """Generate a full map, retrying whole maps on placement exhaustion.

        Arguments override (and replace) the generator's stored parameters and
        catalogs. Raises ``CatalogEmpty`` for an empty item catalog before any
        grid work and ``GenerationFailed`` once every attempt is used up.
        """
        if parameters is not None:
            self.parameters = parameters.validate()
        if items is not None:
            self.items = list(items)
        if enemies is not None:
            self.enemies = list(enemies)
        params = self.parameters
        key_item, used_fallback = find_key_item(self.items)
        if used_fallback:
            log.warn(event="key_item_fallback", item=key_item.name, item_id=key_item.item_id)

        started = time.perf_counter()
        last_error: Optional[Exception] = None
        reason = "no attempt made"
        for attempt in range(1, params.max_generation_attempts + 1):
            seed = self.roll_seed(params, attempt)
            rng = random.Random(seed) if params.deterministic else self._rng
            try:
                result = self._run_pipeline(params, seed, rng, key_item)
            except PlacementExhausted as exc:
                last_error, reason = exc, str(exc)
                log.warn(event="generation_retry", attempt=attempt, seed=seed, stage=exc.stage, reason=reason)
                continue
            if params.require_goal_reachable and not result.metrics.get("goal_reachable"):
                last_error, reason = None, "goal not reachable from start"
                log.warn(event="goal_unreachable", attempt=attempt, seed=seed)
                log.warn(event="generation_retry", attempt=attempt, seed=seed, stage="reachability", reason=reason)
                continue
            result.attempts = attempt
            if self.enable_metrics:
                result.metrics["attempts"] = attempt
                result.metrics["runtime_ms"] = round((time.perf_counter() - started) * 1000, 3)
            self.current = result
            log.info(
                event="cave_generated",
                seed=seed,
                attempts=attempt,
                width=params.width,
                height=params.height,
                runtime_ms=result.metrics.get("runtime_ms"),
            )
            return result
        raise GenerationFailed(params.max_generation_attempts, reason) from last_error

    def _run_pipeline(
        self,
        params: GenerationParameters,
        seed: int,
        rng: random.Random,
        key_item: ItemEntry,
    ) -> GenerationResult:
        """Execute every stage once for ``seed`` with per-phase timing."""
        metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        phase_times: Dict[str, float] = {}

        def _phase(label: str, fn: Callable, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
            return r

        grid = _phase("init", init_grid, params.width, params.height)
        _phase("carve_floor", carve_amoeba_floor, grid, seed, params.noise_scale, params.threshold)
        found, pruned, cells_pruned = _phase("prune_islands", prune_small_regions, grid, params.min_region_size)
        bedrock = _phase("bedrock", apply_outer_bedrock, grid)
        scratch, wall_seeds = _phase(
            "seed_walls",
            seed_interior_walls,
            grid,
            seed,
            params.wall_noise_scale,
            params.wall_noise_threshold,
            params.wall_seed_jitter,
            params.interior_wall_keep_away,
            rng,
        )
        shaped = _phase(
            "automaton", shape_walls, scratch, params.wall_smooth_iterations, params.ca_birth, params.ca_death
        )
        walls_after_automaton = shaped.count(WALL)
        removed = _phase("keep_away", enforce_keep_away, shaped, params.interior_wall_keep_away)
        grid, fills = _phase("cosmetic_fill", cosmetic_fill, shaped)

        start = _phase("place_start", place_start, grid)
        goal = _phase("place_goal", place_goal, grid, rng)
        key_pos, key_quadrant = _phase(
            "place_key", place_key, grid, goal, key_item, rng, params.max_placement_attempts
        )
        treasures: List[Coord] = []
        if params.treasure_count > 0:
            treasures = _phase(
                "place_treasures", place_treasures, grid, params.treasure_count, rng, params.max_placement_attempts
            )
        enemies: List[EnemyPlacement] = []
        if params.enemy_count > 0:
            enemies = _phase(
                "place_enemies",
                place_enemies,
                grid,
                self.enemies,
                params.enemy_count,
                rng,
                params.max_placement_attempts,
            )

        reachable = is_reachable(grid, start, goal)
        if self.enable_metrics or params.require_goal_reachable:
            metrics["goal_reachable"] = reachable
        if self.enable_metrics:
            metrics.update(
                seed=seed,
                regions_found=found,
                regions_pruned=pruned,
                floor_cells_pruned=cells_pruned,
                bedrock_cells=bedrock,
                wall_seeds=wall_seeds,
                walls_after_automaton=walls_after_automaton,
                walls_removed_keep_away=removed,
                cosmetic_fills=fills,
                treasures_placed=len(treasures),
                enemies_placed=len(enemies),
                goal_reachable_digging=reachable or is_reachable(grid, start, goal, through_walls=True),
                phase_ms=phase_times,
            )
            metrics.update(tile_counts(grid))

        return GenerationResult(
            seed=seed,
            grid=grid,
            start=start,
            goal=goal,
            key_position=key_pos,
            key_item=key_item,
            goal_quadrant=quadrant_of(grid.width, grid.height, goal),
            key_quadrant=key_quadrant,
            parameters=params,
            treasures=treasures,
            enemies=enemies,
            metrics=metrics,
        )


__all__ = ["CaveGenerator", "GenerationResult", "EnemyPlacement", "SEED_MIN", "SEED_MAX"]
