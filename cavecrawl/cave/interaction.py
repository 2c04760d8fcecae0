"""Post-generation grid interaction: movement, wall erosion, goal gate and pickups.

The controller is the only writer of the grid once generation finishes. Its
collaborators are duck-typed:

* inventory: ``add_item(item)``, ``has_key() -> bool``, ``remove_key()``
* progression: ``advance_level()`` (and optionally a ``level`` attribute)

Gameplay events (``WallBroken``, ``ItemPickedUp``, ``LevelRegenerated``) are
collected in ``controller.events`` and forwarded to ``on_event`` when given.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from ..logging_utils import get_logger
from .catalog import ItemEntry, find_item
from .config import GenerationParameters
from .grid import Coord, GridBuffer
from .pipeline import CaveGenerator, GenerationResult
from .tiles import BEDROCK, FLOOR, GOAL, TREASURE, VOID, WALL, decode_item, is_item_code

log = get_logger("cavecrawl.cave.interaction")

BLOCKING = frozenset((VOID, BEDROCK))


class WallHit(NamedTuple):
    position: Coord
    hits: int
    broken: bool


class GoalOutcome(NamedTuple):
    reached: bool
    level: Optional[int]
    result: Optional[GenerationResult]


class WallBroken(NamedTuple):
    position: Coord


class ItemPickedUp(NamedTuple):
    position: Coord
    item: ItemEntry


class LevelRegenerated(NamedTuple):
    level: Optional[int]
    seed: int
    start: Coord


class GridInteractionController:
    def __init__(
        self,
        generator: CaveGenerator,
        result: GenerationResult,
        inventory: Any,
        progression: Any,
        items: Optional[Sequence[ItemEntry]] = None,
        enemies: Optional[Sequence[Any]] = None,
        parameters_for_level: Optional[Callable[[int], GenerationParameters]] = None,
        on_event: Optional[Callable[[Any], None]] = None,
    ):
        self.generator = generator
        self.result = result
        self.inventory = inventory
        self.progression = progression
        self.items: List[ItemEntry] = list(items) if items is not None else list(generator.items)
        self.enemies = list(enemies) if enemies is not None else None
        self.parameters_for_level = parameters_for_level
        self.on_event = on_event
        self.wall_hits: Dict[Coord, int] = {}
        self.events: List[Any] = []
        self.player_pos: Coord = result.start

    @property
    def grid(self) -> GridBuffer:
        return self.result.grid

    @property
    def level(self) -> Optional[int]:
        return getattr(self.progression, "level", None)

    def _emit(self, event: Any) -> None:
        self.events.append(event)
        if self.on_event is not None:
            self.on_event(event)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def can_move_to(self, pos: Coord) -> bool:
        """Movement query; walls and the goal are side-effecting and always deny the step."""
        x, y = pos
        if not self.grid.in_bounds(x, y):
            return False
        code = self.grid.cells[x][y]
        if code in BLOCKING:
            return False
        if code == WALL:
            self.hit_wall(pos)
            return False
        if code == GOAL:
            self.handle_goal()
            return False
        return True

    def move_player(self, dx: int, dy: int) -> bool:
        """Try to move the tracked player by (dx, dy); returns True when the player moved."""
        x, y = self.player_pos
        target = (x + dx, y + dy)
        if not self.can_move_to(target):
            return False
        self.player_pos = target
        self.on_player_step(target)
        return True

    # ------------------------------------------------------------------
    # Walls
    # ------------------------------------------------------------------
    def hit_wall(self, pos: Coord) -> WallHit:
        """Count one hit on a wall cell; the hit that reaches the threshold turns it into floor."""
        x, y = pos
        if not self.grid.in_bounds(x, y) or self.grid.cells[x][y] != WALL:
            return WallHit(pos, 0, False)
        hits = self.wall_hits.get(pos, 0) + 1
        if hits < self.result.parameters.wall_break_threshold:
            self.wall_hits[pos] = hits
            return WallHit(pos, hits, False)
        self.grid.cells[x][y] = FLOOR
        self.wall_hits.pop(pos, None)
        log.info(event="wall_broken", x=x, y=y, hits=hits)
        self._emit(WallBroken(pos))
        return WallHit(pos, hits, True)

    # ------------------------------------------------------------------
    # Goal gate
    # ------------------------------------------------------------------
    def handle_goal(self) -> GoalOutcome:
        """Spend a key to leave the level.

        The next map is generated before the key is spent or the level advanced,
        so a ``GenerationFailed`` leaves the controller untouched.
        """
        if not self.inventory.has_key():
            log.warn(event="goal_locked", game_level=self.level, x=self.result.goal[0], y=self.result.goal[1])
            return GoalOutcome(False, self.level, None)
        current = self.level
        next_level = current + 1 if current is not None else None
        result = self._generate_for(next_level)
        self.inventory.remove_key()
        self.progression.advance_level()
        log.info(event="goal_reached", game_level=self.level, seed=self.result.seed, next_seed=result.seed)
        self._install(result)
        return GoalOutcome(True, self.level, result)

    def regenerate(self) -> GenerationResult:
        """Replace the current map with a newly generated one and move the player to its start."""
        result = self._generate_for(self.level)
        self._install(result)
        return result

    def _generate_for(self, level: Optional[int]) -> GenerationResult:
        if self.parameters_for_level is not None and level is not None:
            params = self.parameters_for_level(level)
        else:
            params = self.result.parameters
        return self.generator.generate(params, items=self.items, enemies=self.enemies)

    def _install(self, result: GenerationResult) -> None:
        self.result = result
        self.wall_hits.clear()
        self.player_pos = result.start
        self._emit(LevelRegenerated(self.level, result.seed, result.start))

    # ------------------------------------------------------------------
    # Pickups
    # ------------------------------------------------------------------
    def on_player_step(self, pos: Coord) -> Optional[ItemPickedUp]:
        x, y = pos
        if not self.grid.in_bounds(x, y):
            return None
        code = self.grid.cells[x][y]
        if code == TREASURE:
            log.debug(event="treasure_marker_unhandled", x=x, y=y)
            return None
        if not is_item_code(code):
            return None
        item = find_item(self.items, decode_item(code))
        if item is None:
            log.warn(event="unknown_item_marker", x=x, y=y, code=code)
            return None
        self.inventory.add_item(item)
        self.grid.cells[x][y] = FLOOR
        log.info(event="item_picked_up", x=x, y=y, item=item.name, item_id=item.item_id)
        picked = ItemPickedUp(pos, item)
        self._emit(picked)
        return picked


__all__ = [
    "GridInteractionController",
    "WallHit",
    "GoalOutcome",
    "WallBroken",
    "ItemPickedUp",
    "LevelRegenerated",
]
