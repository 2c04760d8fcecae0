"""Item and enemy catalog entries supplied by the caller.

The generator only needs an item's id and key flag; ``tile`` is an opaque render
handle carried through for the caller. Enemy entries are opaque: any object can
be placed, ``EnemyEntry`` is just a convenient shape for callers without one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from ..errors import CatalogEmpty
from .tiles import TREASURE, decode_item


@dataclass(frozen=True)
class ItemEntry:
    item_id: int
    name: str
    is_key: bool = False
    tile: Any = None

    def __post_init__(self):
        if self.item_id < 0:
            raise ValueError(f"item id must not be negative: {self.item_id}")
        if self.item_id == decode_item(TREASURE):
            raise ValueError(f"item id {self.item_id} collides with the treasure marker")


@dataclass(frozen=True)
class EnemyEntry:
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)


# Small starter catalogs for the preview CLI, diagnostics and tests.
STARTER_ITEMS: Tuple[ItemEntry, ...] = (
    ItemEntry(1, "Rusty Key", is_key=True),
    ItemEntry(2, "Glow Moss"),
    ItemEntry(3, "Healing Herb"),
)
STARTER_ENEMIES: Tuple[EnemyEntry, ...] = (
    EnemyEntry("Cave Slime", {"hp": 4}),
    EnemyEntry("Blind Bat", {"hp": 2}),
)


def find_key_item(items: Sequence[ItemEntry]) -> Tuple[ItemEntry, bool]:
    """Return (key item, used_fallback).

    The first key-flagged entry wins; with none flagged the first entry stands in
    as the key and ``used_fallback`` is True.
    """
    if not items:
        raise CatalogEmpty("item")
    for item in items:
        if item.is_key:
            return item, False
    return items[0], True


def find_item(items: Sequence[ItemEntry], item_id: int) -> Optional[ItemEntry]:
    for item in items:
        if item.item_id == item_id:
            return item
    return None


__all__ = ["ItemEntry", "EnemyEntry", "STARTER_ITEMS", "STARTER_ENEMIES", "find_key_item", "find_item"]
