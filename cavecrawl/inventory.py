"""In-memory inventory and level progression used by the interaction controller.

Stacks are kept in the canonical shape ``[{"item_id": 3, "qty": 2}, ...]`` in
first-pickup order. Any object with the same methods can replace these classes;
the controller only calls ``add_item``, ``has_key``, ``remove_key`` and
``advance_level``.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .cave.catalog import ItemEntry


class Inventory:
    def __init__(self):
        self._stacks: List[Dict[str, Any]] = []
        self._entries: Dict[int, ItemEntry] = {}

    def _stack(self, item_id: int):
        for stack in self._stacks:
            if stack['item_id'] == item_id:
                return stack
        return None

    def add_item(self, item: ItemEntry, qty: int = 1) -> int:
        """Add ``qty`` of ``item``; returns the new stack size."""
        if qty <= 0:
            raise ValueError("qty must be positive")
        self._entries[item.item_id] = item
        stack = self._stack(item.item_id)
        if stack is None:
            stack = {'item_id': item.item_id, 'qty': 0}
            self._stacks.append(stack)
        stack['qty'] += qty
        return stack['qty']

    def count(self, item_id: int) -> int:
        stack = self._stack(item_id)
        return stack['qty'] if stack else 0

    def key_count(self) -> int:
        return sum(s['qty'] for s in self._stacks if self._entries[s['item_id']].is_key)

    def has_key(self) -> bool:
        return self.key_count() > 0

    def remove_key(self) -> bool:
        """Remove one unit of the first key stack; False when no key is held."""
        for stack in self._stacks:
            if self._entries[stack['item_id']].is_key:
                stack['qty'] -= 1
                if stack['qty'] <= 0:
                    self._stacks.remove(stack)
                return True
        return False

    def to_list(self) -> List[Dict[str, Any]]:
        return [dict(s) for s in self._stacks]

    def __len__(self) -> int:
        return len(self._stacks)


class LevelCounter:
    def __init__(self, level: int = 1):
        self.level = level

    def advance_level(self) -> int:
        self.level += 1
        return self.level


__all__ = ["Inventory", "LevelCounter"]
