"""Public cave package interface.

Generation (``CaveGenerator``), the grid buffer and cell codes, and the
post-generation ``GridInteractionController``.
"""

from .catalog import EnemyEntry, ItemEntry  # noqa: F401
from .config import SEED_MODE_FIXED, SEED_MODE_FRESH, GenerationParameters  # noqa: F401
from .grid import Coord, GridBuffer  # noqa: F401
from .interaction import (  # noqa: F401
    GoalOutcome,
    GridInteractionController,
    ItemPickedUp,
    LevelRegenerated,
    WallBroken,
    WallHit,
)
from .pipeline import CaveGenerator, EnemyPlacement, GenerationResult  # noqa: F401
from .tiles import BEDROCK, FLOOR, GOAL, ITEM_BASE, START, TREASURE, VOID, WALL  # noqa: F401

__all__ = [
    "CaveGenerator",
    "GenerationResult",
    "EnemyPlacement",
    "GenerationParameters",
    "SEED_MODE_FRESH",
    "SEED_MODE_FIXED",
    "GridBuffer",
    "Coord",
    "ItemEntry",
    "EnemyEntry",
    "GridInteractionController",
    "WallHit",
    "GoalOutcome",
    "WallBroken",
    "ItemPickedUp",
    "LevelRegenerated",
    "VOID",
    "FLOOR",
    "WALL",
    "BEDROCK",
    "START",
    "GOAL",
    "ITEM_BASE",
    "TREASURE",
]
